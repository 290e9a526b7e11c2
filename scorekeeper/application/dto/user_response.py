"""User view DTOs"""
from dataclasses import dataclass

from scorekeeper.domain.entities.user_account import UserAccount


@dataclass
class UserResponse:
    """Public view of an account, credentials and hidden targets excluded"""

    username: str
    display_name: str
    score: int
    attempts: int
    rounds: int
    average_attempts_per_round: float
    claimed_bonus_points: int

    @classmethod
    def from_account(cls, account: UserAccount) -> 'UserResponse':
        return cls(
            username=account.username,
            display_name=account.display_name,
            score=account.score,
            attempts=account.attempts,
            rounds=account.rounds,
            average_attempts_per_round=round(account.average_attempts_per_round, 2),
            claimed_bonus_points=account.claimed_bonus_points
        )

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "display_name": self.display_name,
            "score": self.score,
            "attempts": self.attempts,
            "rounds": self.rounds,
            "average_attempts_per_round": self.average_attempts_per_round,
            "claimed_bonus_points": self.claimed_bonus_points
        }


@dataclass
class LeaderboardUserResponse(UserResponse):
    """User view with the account's rank"""

    rank: int = 0

    @classmethod
    def ranked(cls, rank: int, account: UserAccount) -> 'LeaderboardUserResponse':
        base = UserResponse.from_account(account)
        return cls(rank=rank, **base.__dict__)

    def to_dict(self) -> dict:
        result = {"rank": self.rank}
        result.update(super().to_dict())
        return result
