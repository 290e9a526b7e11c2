"""Rock-Paper-Scissors hands"""
from enum import Enum
from typing import List, Optional


class Hand(Enum):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"

    def beats(self, other: 'Hand') -> bool:
        """Rock beats Scissors, Scissors beats Paper, Paper beats Rock"""
        return _BEATS[self] is other

    @classmethod
    def members(cls) -> List['Hand']:
        return list(cls)

    @classmethod
    def parse(cls, value) -> Optional['Hand']:
        """Case-insensitive lookup by name or value, None when unknown"""
        if isinstance(value, Hand):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for hand in cls:
            if wanted in (hand.value.lower(), hand.name.lower()):
                return hand
        return None


_BEATS = {
    Hand.ROCK: Hand.SCISSORS,
    Hand.SCISSORS: Hand.PAPER,
    Hand.PAPER: Hand.ROCK,
}
