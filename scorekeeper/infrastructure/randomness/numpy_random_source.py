"""numpy implementation of the random source"""
from typing import List, Optional

import numpy as np

from scorekeeper.application.ports.random_source_port import RandomSourcePort


class NumpyRandomSource(RandomSourcePort):
    """Draws from a numpy Generator; pass a seed for reproducible draws"""

    def __init__(self, seed: Optional[int] = None, generator: Optional[np.random.Generator] = None):
        self.generator = generator or np.random.default_rng(seed)

    def distinct_integers(self, low: int, high: int, count: int) -> List[int]:
        if low > high:
            raise ValueError("low should be less than or equal to high.")
        if count > high - low + 1:
            raise ValueError("count cannot be greater than the size of the range.")
        drawn = self.generator.choice(np.arange(low, high + 1), size=count, replace=False)
        return [int(n) for n in drawn]

    def is_hit(self, probability: float) -> bool:
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return bool(self.generator.random() < probability)

    def pick_index(self, size: int) -> int:
        if size < 1:
            raise ValueError("size must be at least 1.")
        return int(self.generator.integers(0, size))
