"""Per-vertex normals from per-triangle geometry."""

import logging

import numpy as np

from .buffer import MeshBuffer

logger = logging.getLogger(__name__)

# Corner rotations: the normal at corner k is (p[j] - p[k]) x (p[l] - p[k]).
ROTATIONS = ((0, 1, 2), (1, 2, 0), (2, 0, 1))


def corner_normals(positions: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Unit face normal seen from each corner of each triangle.

    Returns:
        Mx3x3 array: triangle, corner, xyz
    """
    xyz = positions[:, :3]
    result = np.empty((len(triangles), 3, 3), dtype=positions.dtype)
    with np.errstate(divide='ignore', invalid='ignore'):
        for corner, (k, j, l) in enumerate(ROTATIONS):
            origin = xyz[triangles[:, k]]
            normal = np.cross(xyz[triangles[:, j]] - origin, xyz[triangles[:, l]] - origin)
            length = np.linalg.norm(normal, axis=1, keepdims=True)
            result[:, corner] = normal / length
    return result


def calculate_normals(mesh: MeshBuffer) -> MeshBuffer:
    """
    Average the face normals incident to every vertex.

    Normals are zeroed, each triangle adds its normalized cross product to
    its three corners with weight 1 in the fourth component, then all four
    components are divided by that weight. The average is not weighted by
    area or angle. Degenerate triangles and unreferenced vertices produce
    NaN.

    Args:
        mesh: Input buffer, left untouched

    Returns:
        New MeshBuffer with finalized normals (weight 1.0)
    """
    out = mesh.copy()
    triangles = out.triangles.astype(np.int64)

    accumulated = np.zeros_like(out.normals)
    contributions = np.ones((len(triangles), 3, 4), dtype=accumulated.dtype)
    contributions[:, :, :3] = corner_normals(out.positions, triangles)
    np.add.at(accumulated, triangles.ravel(), contributions.reshape(-1, 4))

    with np.errstate(divide='ignore', invalid='ignore'):
        out.normals = accumulated / accumulated[:, 3:4]

    logger.debug(f"Accumulated normals for {out.vertex_count} vertices from {len(triangles)} triangles")
    return out
