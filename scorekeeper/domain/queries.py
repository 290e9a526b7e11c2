"""Store-independent account queries

Repositories translate these into their own query language; the in-memory
store evaluates ``UserFilter.matches`` directly.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, NamedTuple, Optional, Tuple

from scorekeeper.domain.entities.user_account import UserAccount, username_key


class RankKey(NamedTuple):
    score: int
    attempts: int
    rounds: int

    @classmethod
    def of(cls, account: UserAccount) -> 'RankKey':
        return cls(account.score, account.attempts, account.rounds)

    def is_ahead_of(self, other: 'RankKey') -> bool:
        """Higher score, then fewer attempts, then fewer rounds"""
        if self.score != other.score:
            return self.score > other.score
        if self.attempts != other.attempts:
            return self.attempts < other.attempts
        return self.rounds < other.rounds


class SortDirection(Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @classmethod
    def parse(cls, value) -> Optional['SortDirection']:
        if isinstance(value, SortDirection):
            return value
        if not isinstance(value, str):
            return None
        return _DIRECTION_ALIASES.get(value.strip().lower())


_DIRECTION_ALIASES = {
    "ascending": SortDirection.ASCENDING,
    "asc": SortDirection.ASCENDING,
    "descending": SortDirection.DESCENDING,
    "desc": SortDirection.DESCENDING,
}

# (field, direction) pairs applied left to right
SortOrder = List[Tuple[str, SortDirection]]

LEADERBOARD_ORDER: SortOrder = [
    ("score", SortDirection.DESCENDING),
    ("attempts", SortDirection.ASCENDING),
    ("rounds", SortDirection.ASCENDING),
]


def score_order(direction: SortDirection) -> SortOrder:
    return [("score", direction)]


@dataclass(frozen=True)
class UserFilter:
    """Conjunction of optional account predicates"""

    minimum_score: Optional[int] = None
    maximum_score: Optional[int] = None
    username_keyword: Optional[str] = None
    excluded_usernames: FrozenSet[str] = field(default_factory=frozenset)
    ahead_of: Optional[RankKey] = None

    @property
    def keyword(self) -> Optional[str]:
        if self.username_keyword is None:
            return None
        return self.username_keyword.strip() or None

    @property
    def excluded_keys(self) -> FrozenSet[str]:
        return frozenset(username_key(name) for name in self.excluded_usernames)

    def matches(self, account: UserAccount) -> bool:
        if self.minimum_score is not None and account.score < self.minimum_score:
            return False
        if self.maximum_score is not None and account.score > self.maximum_score:
            return False
        keyword = self.keyword
        if keyword is not None and keyword.lower() not in account.username.lower():
            return False
        if account.key in self.excluded_keys:
            return False
        if self.ahead_of is not None and not RankKey.of(account).is_ahead_of(self.ahead_of):
            return False
        return True
