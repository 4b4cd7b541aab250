"""
Coherent noise fields for smooth displacement.

Each field is 3D simplex noise from the ``noise`` package. snoise3 has no
seed argument, so a field is decorrelated from its siblings by translating
every sample point by a seed-derived offset.
"""

from typing import List, Sequence

import numpy as np
from noise import snoise3

# Keeps offsets small enough that float32 sample coordinates stay precise.
OFFSET_RANGE = 256.0


class NoiseField:
    """One independently seeded octave field."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self.offset = np.random.default_rng(self.seed).uniform(0.0, OFFSET_RANGE, 3)

    def sample(self, x: float, y: float, z: float) -> float:
        return snoise3(
            float(x + self.offset[0]),
            float(y + self.offset[1]),
            float(z + self.offset[2]),
        )


def octave_weights(octaves: int) -> List[float]:
    """Amplitude of each octave: 0.5 ** octave."""
    return [0.5 ** o for o in range(octaves)]


def fractal_sum(fields: Sequence[NoiseField], x: float, y: float, z: float) -> float:
    """
    Sample a stack of octave fields at one point.

    Octave o is sampled at the point scaled by 2 ** o and weighted by
    0.5 ** o; the weighted sum is divided by the sum of the weights. With no
    fields the result is 0/0.

    Args:
        fields: Octave fields, lowest frequency first
        x, y, z: Sample position (already divided by the feature scale)

    Returns:
        Normalized fractal noise value
    """
    total = 0.0
    weight_sum = 0.0
    for octave, (field, weight) in enumerate(zip(fields, octave_weights(len(fields)))):
        frequency = 2.0 ** octave
        weight_sum += weight
        total += weight * field.sample(x * frequency, y * frequency, z * frequency)

    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(total) / np.float64(weight_sum))
