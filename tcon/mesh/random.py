"""Seeded random stream shared by the operations of one pipeline run."""

import numpy as np

U32_MAX = 0xFFFFFFFF


def fresh_seed() -> int:
    """Draw a new 32-bit seed from OS entropy."""
    return int(np.random.default_rng().integers(0, U32_MAX, endpoint=True))


class RandomSource:
    """
    Sequential generator handle passed through a pipeline run.

    Every draw advances one stream, so operations that need randomness must
    consume it in a fixed order for a seed to reproduce a run.
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)

    def next_u32(self) -> int:
        """Draw a uniformly distributed 32-bit unsigned integer."""
        return int(self._rng.integers(0, U32_MAX, endpoint=True, dtype=np.uint32))

    def uniform(self) -> np.float32:
        """Draw a float32 in [0, 1] (both ends inclusive)."""
        return np.float32(self.next_u32()) / np.float32(U32_MAX)

    def uniforms(self, count: int) -> np.ndarray:
        """Draw count floats in [0, 1], in the same order as repeated uniform() calls."""
        draws = self._rng.integers(0, U32_MAX, size=count, endpoint=True, dtype=np.uint32)
        return draws.astype(np.float32) / np.float32(U32_MAX)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
