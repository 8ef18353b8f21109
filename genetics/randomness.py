"""
genetics/randomness.py - Seeded Randomness Provider

Every stochastic draw in the engine goes through one RandomnessProvider so a
fixed seed reproduces a whole session bit for bit. Tests may pass any object
with the same three methods.
"""

import numpy as np

from .constants import GENOME_ID_MAX


class RandomnessProvider:
    """numpy Generator wrapper producing floats, unsigned ints and Gaussians."""

    def __init__(self, seed: int = 42):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_float(self, low: float = 0.0, high: float = 1.0) -> float:
        """Uniform float in [low, high)."""
        return float(self._rng.uniform(low, high))

    def next_uint(self) -> int:
        """Uniform non-zero unsigned 32-bit integer (0 marks 'no parent')."""
        return int(self._rng.integers(1, GENOME_ID_MAX, endpoint=True))

    def next_gaussian(self, mean: float = 0.0, std: float = 1.0) -> float:
        """Normal draw; std == 0 returns mean."""
        return float(self._rng.normal(mean, std))

    def reseed(self, seed: int) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)
