"""
Topology-aware 1-to-4 triangle subdivision.

Every triangle (a, b, c) gets a midpoint on each edge and is replaced by four
triangles. Corner and midpoint indices use the layout::

          b
        /   \\
     m_ab---m_bc
     /  \\   /  \\
    a----m_ca----c

    [a, b, c, m_ab, m_bc, m_ca]

Midpoints are shared between triangles through an edge map keyed by the
(min, max) vertex index pair, so an edge used by two triangles gets exactly
one midpoint vertex. The map only lives for one iteration since every
iteration renumbers the triangles.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .buffer import MeshBuffer, midpoints, POSITION_DTYPE, INDEX_DTYPE
from .random import RandomSource

logger = logging.getLogger(__name__)

EdgeKey = Tuple[int, int]

# Edges of a triangle as positions in the corner layout.
EDGES = ((0, 1), (1, 2), (2, 0))

# The four child triangles as positions in [a, b, c, m_ab, m_bc, m_ca].
CHILDREN = (
    (0, 3, 5),
    (3, 1, 4),
    (5, 3, 4),
    (5, 4, 2),
)


def edge_key(i: int, j: int) -> EdgeKey:
    """Canonical key of the undirected edge between two vertex indices."""
    return (i, j) if i <= j else (j, i)


def split_triangles(indices: np.ndarray, vertex_count: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Run one subdivision step over an index list.

    Midpoints are numbered from vertex_count upwards in the order their
    edges are first met, triangle by triangle, edges ab, bc, ca.

    Args:
        indices: Flat triangle index list
        vertex_count: Number of existing vertices

    Returns:
        Tuple of (new flat index list, Kx2 array of endpoints of each new vertex)
    """
    mids: Dict[EdgeKey, int] = {}
    endpoints: List[EdgeKey] = []
    out: List[int] = []

    for a, b, c in indices.reshape(-1, 3).tolist():
        layout = [a, b, c, 0, 0, 0]
        for slot, (p, q) in enumerate(EDGES):
            key = edge_key(layout[p], layout[q])
            mid = mids.get(key)
            if mid is None:
                mid = vertex_count + len(endpoints)
                mids[key] = mid
                endpoints.append((layout[p], layout[q]))
            layout[3 + slot] = mid

        for child in CHILDREN:
            out.extend(layout[k] for k in child)

    return (
        np.asarray(out, dtype=INDEX_DTYPE),
        np.asarray(endpoints, dtype=np.int64).reshape(-1, 2),
    )


def refine(
    mesh: MeshBuffer,
    iterations: int,
    displace: Optional[Callable[[int, int], np.ndarray]] = None,
) -> MeshBuffer:
    """
    Apply the subdivision step repeatedly.

    New vertices sit at the mean of their edge endpoints and copy the normal
    of the first endpoint; normals are not meaningful until the normal pass.

    Args:
        mesh: Input buffer, left untouched
        iterations: Number of subdivision steps
        displace: Optional callback (iteration, new_vertex_count) returning a
            vertical offset per new vertex in creation order

    Returns:
        New MeshBuffer
    """
    positions = mesh.positions
    normals = mesh.normals
    indices = mesh.indices

    for iteration in range(int(iterations)):
        indices, endpoints = split_triangles(indices, len(positions))
        first, second = endpoints[:, 0], endpoints[:, 1]

        new_positions = midpoints(positions, first, second)
        if displace is not None:
            new_positions[:, 1] += displace(iteration, len(endpoints))

        positions = np.vstack([positions, new_positions])
        normals = np.vstack([normals, normals[first]])
        logger.debug(f"Subdivision iteration {iteration}: {len(positions)} vertices, {len(indices) // 3} triangles")

    return MeshBuffer(positions=positions.copy(), normals=normals.copy(), indices=indices.copy())


def subdivide(mesh: MeshBuffer, iterations: int) -> MeshBuffer:
    """Split every triangle into four, iterations times."""
    return refine(mesh, iterations)


def fractal_terrain(
    mesh: MeshBuffer,
    iterations: int,
    displacement_start: float,
    displacement_decay: float,
    random: RandomSource,
) -> MeshBuffer:
    """
    Midpoint-displacement terrain.

    Subdivides like subdivide() and lifts every new midpoint by
    (u - 0.5) * displacement_start * displacement_decay ** -iteration, one
    draw u per new vertex. A decay above 1 makes later iterations rougher at
    a smaller scale; a decay at or below 1 makes displacement grow instead.

    Args:
        mesh: Input buffer, left untouched
        iterations: Number of subdivision steps
        displacement_start: Displacement amplitude of the first iteration
        displacement_decay: Amplitude divisor applied per iteration
        random: Shared random stream

    Returns:
        New MeshBuffer
    """
    start = POSITION_DTYPE(displacement_start)
    decay = POSITION_DTYPE(displacement_decay)

    def displace(iteration: int, count: int) -> np.ndarray:
        with np.errstate(divide='ignore', over='ignore', invalid='ignore'):
            amplitude = start * np.power(decay, POSITION_DTYPE(-iteration))
        return (random.uniforms(count) - POSITION_DTYPE(0.5)) * amplitude

    return refine(mesh, iterations, displace)
