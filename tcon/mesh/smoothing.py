"""Uniform Laplacian relaxation."""

import logging

import numpy as np

from .buffer import MeshBuffer, POSITION_DTYPE

logger = logging.getLogger(__name__)


def corner_pairs(triangles: np.ndarray):
    """
    (target, source) index pairs for every corner/neighbour occurrence.

    Each triangle (i0, i1, i2) contributes i1 and i2 to i0, i0 and i2 to i1,
    i0 and i1 to i2, in that order. A neighbour reached through two triangles
    appears twice.
    """
    i0, i1, i2 = triangles[:, 0], triangles[:, 1], triangles[:, 2]
    targets = np.stack([i0, i0, i1, i1, i2, i2], axis=1).ravel()
    sources = np.stack([i1, i2, i0, i2, i0, i1], axis=1).ravel()
    return targets.astype(np.int64), sources.astype(np.int64)


def smooth(mesh: MeshBuffer, amount: float, iterations: int) -> MeshBuffer:
    """
    Move every vertex towards the average of its neighbours.

    Each pass sums the homogeneous positions of all triangle-edge neighbours,
    so the w column counts contributions, and blends
    amount * (sum / count) + (1 - amount) * position. All vertices read the
    same snapshot of the previous pass. A vertex that belongs to no triangle
    gets 0/0.

    Args:
        mesh: Input buffer, left untouched
        amount: Blend factor, 0 keeps positions, 1 snaps to the average
        iterations: Number of passes

    Returns:
        New MeshBuffer with the same topology
    """
    out = mesh.copy()
    targets, sources = corner_pairs(out.triangles)
    a = POSITION_DTYPE(amount)
    keep = POSITION_DTYPE(1.0) - a

    for _ in range(int(iterations)):
        snapshot = out.positions
        accumulated = np.zeros_like(snapshot)
        np.add.at(accumulated, targets, snapshot[sources])

        with np.errstate(divide='ignore', invalid='ignore'):
            average = accumulated[:, :3] / accumulated[:, 3:4]

        positions = np.empty_like(snapshot)
        positions[:, :3] = a * average + keep * snapshot[:, :3]
        positions[:, 3] = 1.0
        out.positions = positions

    logger.debug(f"Smoothed {out.vertex_count} vertices over {iterations} passes")
    return out
