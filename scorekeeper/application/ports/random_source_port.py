"""Random source port (interface)"""
from abc import ABC, abstractmethod
from typing import List


class RandomSourcePort(ABC):
    """Port for every random draw the games make"""

    @abstractmethod
    def distinct_integers(self, low: int, high: int, count: int) -> List[int]:
        """Draw ``count`` distinct integers from [low, high], in draw order"""
        pass

    @abstractmethod
    def is_hit(self, probability: float) -> bool:
        """True with the given probability (clamped to [0, 1])"""
        pass

    @abstractmethod
    def pick_index(self, size: int) -> int:
        """Uniform index in [0, size)"""
        pass
