"""
Primitive generators.

Generators ignore whatever buffer the pipeline has built so far and return a
fresh one in the XZ plane. Every triangle is wound counter-clockwise when
seen from below (-Y), so accumulated normals point along -Y on a flat mesh.
"""

import numpy as np
import logging

from .buffer import MeshBuffer, homogeneous, POSITION_DTYPE, INDEX_DTYPE

logger = logging.getLogger(__name__)

SQRT3 = np.sqrt(POSITION_DTYPE(3.0))


def _from_xyz(xyz: np.ndarray, indices: np.ndarray) -> MeshBuffer:
    xyz = np.asarray(xyz, dtype=POSITION_DTYPE).reshape(-1, 3)
    return MeshBuffer(
        positions=homogeneous(xyz),
        normals=homogeneous(np.zeros_like(xyz)),
        indices=np.asarray(indices, dtype=INDEX_DTYPE),
    )


def add_triangle(size: float) -> MeshBuffer:
    """Equilateral triangle with the given edge length, centroid at the origin."""
    s = POSITION_DTYPE(size)
    xyz = np.array([
        [-0.5 * s, 0.0, -SQRT3 / 6.0 * s],
        [0.5 * s, 0.0, -SQRT3 / 6.0 * s],
        [0.0, 0.0, SQRT3 / 3.0 * s],
    ], dtype=POSITION_DTYPE)
    return _from_xyz(xyz, [0, 1, 2])


def add_tri_square(size: float) -> MeshBuffer:
    """Square of the given side as two triangles sharing the 1-3 diagonal."""
    h = POSITION_DTYPE(0.5) * POSITION_DTYPE(size)
    xyz = np.array([
        [-h, 0.0, -h],
        [h, 0.0, -h],
        [h, 0.0, h],
        [-h, 0.0, h],
    ], dtype=POSITION_DTYPE)
    return _from_xyz(xyz, [1, 2, 3, 1, 3, 0])


def _lattice_cells(num: int):
    """Lattice index i = x*num + z of every cell's far corner, x-major."""
    xs, zs = np.meshgrid(np.arange(1, num), np.arange(1, num), indexing='ij')
    return xs.ravel(), (xs * num + zs).ravel().astype(np.int64)


def add_triangle_grid(size: float, subdivisions: int) -> MeshBuffer:
    """
    Triangular tiling of a (subdivisions+1)^2 lattice.

    Columns are spaced sqrt(3)/2 of a row step apart and even columns are
    shifted back by half a row step, so each cell splits into two near
    equilateral triangles. The winding of the two triangles depends on the
    column parity to keep the tiling consistent.

    Args:
        size: Extent of the grid along Z
        subdivisions: Number of cells per side

    Returns:
        New MeshBuffer
    """
    num = int(subdivisions) + 1
    s = POSITION_DTYPE(size)
    n = POSITION_DTYPE(subdivisions)
    column = np.arange(num, dtype=POSITION_DTYPE)
    row = np.arange(num, dtype=POSITION_DTYPE)

    with np.errstate(divide='ignore', invalid='ignore'):
        x_world = (column / n - POSITION_DTYPE(0.5)) * s * SQRT3 / POSITION_DTYPE(2.0)
        shift = np.where(np.arange(num) % 2 == 0, POSITION_DTYPE(0.5), POSITION_DTYPE(0.0)).astype(POSITION_DTYPE)
        z_world = ((row[None, :] - shift[:, None]) / n - POSITION_DTYPE(0.5)) * s

    xyz = np.zeros((num, num, 3), dtype=POSITION_DTYPE)
    xyz[:, :, 0] = x_world[:, None]
    xyz[:, :, 2] = z_world

    x, i = _lattice_cells(num)
    even = np.stack([i, i - num - 1, i - 1, i, i - num, i - num - 1], axis=1)
    odd = np.stack([i, i - num, i - 1, i - num, i - num - 1, i - 1], axis=1)
    indices = np.where((x % 2 == 0)[:, None], even, odd).ravel()

    logger.debug(f"Triangle grid: {num * num} vertices, {len(indices) // 3} triangles")
    return _from_xyz(xyz, indices)


def add_tri_square_grid(size: float, subdivisions: int) -> MeshBuffer:
    """
    Square lattice with every cell split along the same diagonal.

    Args:
        size: Extent of the grid along X and Z
        subdivisions: Lattice has subdivisions+1 points per side

    Returns:
        New MeshBuffer
    """
    num = int(subdivisions) + 1
    s = POSITION_DTYPE(size)
    axis = (np.arange(num, dtype=POSITION_DTYPE) / POSITION_DTYPE(num) - POSITION_DTYPE(0.5)) * s

    xyz = np.zeros((num, num, 3), dtype=POSITION_DTYPE)
    xyz[:, :, 0] = axis[:, None]
    xyz[:, :, 2] = axis[None, :]

    _, i = _lattice_cells(num)
    indices = np.stack([i, i - num - 1, i - 1, i, i - num, i - num - 1], axis=1).ravel()

    logger.debug(f"Square grid: {num * num} vertices, {len(indices) // 3} triangles")
    return _from_xyz(xyz, indices)
