"""User account aggregate"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from scorekeeper.domain.entities.game_sessions import (
    ArrangeNumbersSession,
    GuessNumberSession,
    RockPaperScissorsSession,
)


def username_key(username: str) -> str:
    """Lookup key for case-insensitive username matching"""
    return username.strip().lower()


@dataclass(frozen=True)
class UserAccount:
    """Domain entity holding a user's identity, score and game sessions

    The account is immutable; game transitions return a modified copy via
    ``evolve``. ``version`` is managed by the store for conditional saves.
    """

    username: str
    display_name: str
    credential_hash: str = ""
    score: int = 0
    attempts: int = 0
    claimed_bonus_points: int = 0
    last_bonus_claim_at: Optional[datetime] = None
    guess_number: GuessNumberSession = field(default_factory=GuessNumberSession)
    arrange_numbers: ArrangeNumbersSession = field(default_factory=ArrangeNumbersSession)
    rock_paper_scissors: RockPaperScissorsSession = field(default_factory=RockPaperScissorsSession)
    version: int = 0

    @property
    def key(self) -> str:
        return username_key(self.username)

    @property
    def rounds(self) -> int:
        """Total rounds across all games"""
        return (
            self.guess_number.rounds
            + self.arrange_numbers.rounds
            + self.rock_paper_scissors.rounds
        )

    @property
    def average_attempts_per_round(self) -> float:
        if self.attempts == 0 or self.rounds == 0:
            return 0.0
        return self.attempts / self.rounds

    def evolve(self, **changes) -> 'UserAccount':
        return replace(self, **changes)

    def with_score_delta(self, delta: int) -> 'UserAccount':
        return replace(self, score=self.score + delta)

    def matches(self, username: str) -> bool:
        return self.key == username_key(username)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "username": self.username,
            "username_key": self.key,
            "display_name": self.display_name,
            "credential_hash": self.credential_hash,
            "score": self.score,
            "attempts": self.attempts,
            "rounds": self.rounds,
            "claimed_bonus_points": self.claimed_bonus_points,
            "last_bonus_claim_at": self.last_bonus_claim_at,
            "guess_number": self.guess_number.to_dict(),
            "arrange_numbers": self.arrange_numbers.to_dict(),
            "rock_paper_scissors": self.rock_paper_scissors.to_dict(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'UserAccount':
        """Create from dictionary; the stored ``rounds`` copy is ignored"""
        claimed_at = data.get("last_bonus_claim_at")
        if claimed_at is not None and claimed_at.tzinfo is None:
            claimed_at = claimed_at.replace(tzinfo=timezone.utc)
        return cls(
            username=data["username"],
            display_name=data.get("display_name") or data["username"],
            credential_hash=data.get("credential_hash", ""),
            score=int(data.get("score", 0)),
            attempts=int(data.get("attempts", 0)),
            claimed_bonus_points=int(data.get("claimed_bonus_points", 0)),
            last_bonus_claim_at=claimed_at,
            guess_number=GuessNumberSession.from_dict(data.get("guess_number")),
            arrange_numbers=ArrangeNumbersSession.from_dict(data.get("arrange_numbers")),
            rock_paper_scissors=RockPaperScissorsSession.from_dict(data.get("rock_paper_scissors")),
            version=int(data.get("version", 0)),
        )
