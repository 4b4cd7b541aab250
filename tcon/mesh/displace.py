"""Per-vertex displacement along selected axes."""

import logging
from typing import Sequence

import numpy as np

from .buffer import MeshBuffer, POSITION_DTYPE
from .noise import NoiseField, fractal_sum
from .random import RandomSource

logger = logging.getLogger(__name__)


def enabled_axes(axes: Sequence[bool]) -> np.ndarray:
    """Indices of the axes switched on in an (x, y, z) mask."""
    return np.flatnonzero(np.asarray(axes, dtype=bool)[:3])


def displace_random(mesh: MeshBuffer, amount: float, axes: Sequence[bool], random: RandomSource) -> MeshBuffer:
    """
    Shift vertices by amount * u with u uniform in [0, 1].

    One draw per enabled axis per vertex, vertex-major, so the displacement
    is always positive along each enabled axis.

    Args:
        mesh: Input buffer, left untouched
        amount: Maximum shift
        axes: (x, y, z) mask
        random: Shared random stream

    Returns:
        New MeshBuffer with the same topology
    """
    out = mesh.copy()
    columns = enabled_axes(axes)
    if len(columns) == 0:
        return out

    draws = random.uniforms(out.vertex_count * len(columns)).reshape(out.vertex_count, len(columns))
    out.positions[:, columns] += draws * POSITION_DTYPE(amount)
    return out


def displace_smooth(
    mesh: MeshBuffer,
    amount: float,
    scale: float,
    octaves: int,
    axes: Sequence[bool],
    random: RandomSource,
) -> MeshBuffer:
    """
    Shift vertices by fractal simplex noise.

    One noise field is seeded per octave before any vertex is visited. Axes
    are displaced one after another, each sampling the vertex position as
    already moved by the previous axes.

    Args:
        mesh: Input buffer, left untouched
        amount: Displacement amplitude
        scale: Feature size; positions are divided by it before sampling
        octaves: Number of octave fields
        axes: (x, y, z) mask
        random: Shared random stream

    Returns:
        New MeshBuffer with the same topology
    """
    out = mesh.copy()
    fields = [NoiseField(random.next_u32()) for _ in range(int(octaves))]
    columns = enabled_axes(axes)

    s = POSITION_DTYPE(scale)
    a = POSITION_DTYPE(amount)
    with np.errstate(divide='ignore', invalid='ignore'):
        for position in out.positions:
            for axis in columns:
                x, y, z = position[:3] / s
                position[axis] += POSITION_DTYPE(fractal_sum(fields, x, y, z)) * a

    logger.debug(f"Smooth displacement: {len(fields)} octaves over {out.vertex_count} vertices")
    return out
