"""Bonus point claims gated by a cooldown window"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Tuple

from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import TooEarlyError

if TYPE_CHECKING:
    from scorekeeper.application.ports.random_source_port import RandomSourcePort

DEFAULT_COOLDOWN = timedelta(hours=3)
DOUBLE_BONUS_PROBABILITY = 0.5
SINGLE_BONUS_POINTS = 1
DOUBLE_BONUS_POINTS = 2


@dataclass(frozen=True)
class BonusOutcome:
    points: int
    claimed_at: datetime
    next_claim_at: datetime


def _plural(amount: int, unit: str) -> str:
    return f"{amount} {unit}{'' if amount == 1 else 's'}"


def format_wait(seconds: int) -> str:
    """Human-readable wait, leading zero units omitted"""
    hours, rest = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{_plural(hours, 'hour')}, {_plural(minutes, 'minute')}, and {_plural(secs, 'second')}"
    if minutes > 0:
        return f"{_plural(minutes, 'minute')} and {_plural(secs, 'second')}"
    return _plural(secs, "second")


def remaining_cooldown(account: UserAccount, now: datetime, cooldown: timedelta = DEFAULT_COOLDOWN) -> int:
    """Whole seconds until the next claim, rounded up; 0 when claimable"""
    if account.last_bonus_claim_at is None:
        return 0
    elapsed = now - account.last_bonus_claim_at
    if elapsed >= cooldown:
        return 0
    return max(1, math.ceil((cooldown - elapsed).total_seconds()))


def claim(
    account: UserAccount,
    now: datetime,
    random_source: 'RandomSourcePort',
    cooldown: timedelta = DEFAULT_COOLDOWN,
    double_probability: float = DOUBLE_BONUS_PROBABILITY
) -> Tuple[UserAccount, BonusOutcome]:
    remaining = remaining_cooldown(account, now, cooldown)
    if remaining > 0:
        raise TooEarlyError(
            f"Bonus points already claimed. Please try again after {format_wait(remaining)} "
            f"to claim your next bonus points.",
            remaining_seconds=remaining
        )

    points = DOUBLE_BONUS_POINTS if random_source.is_hit(double_probability) else SINGLE_BONUS_POINTS
    updated = account.evolve(
        score=account.score + points,
        claimed_bonus_points=account.claimed_bonus_points + points,
        last_bonus_claim_at=now,
    )
    return updated, BonusOutcome(points=points, claimed_at=now, next_claim_at=now + cooldown)
