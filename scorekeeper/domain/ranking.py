"""Leaderboard pagination rules"""
import math
from dataclasses import dataclass
from typing import Optional

from scorekeeper.domain.errors import InvalidInputError


@dataclass(frozen=True)
class PageRequest:
    """Validated page/limit pair; skip and limit are what the store applies"""

    page: Optional[int]
    limit: Optional[int]

    @property
    def paginated(self) -> bool:
        return self.page is not None

    @property
    def skip(self) -> int:
        if self.page is None:
            return 0
        return (self.page - 1) * self.limit

    @property
    def first_rank(self) -> int:
        return self.skip + 1

    def total_pages(self, total_items: int) -> int:
        if total_items == 0 or not self.limit:
            return 0
        return math.ceil(total_items / self.limit)


def _as_positive(value, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be a whole number.")
    if value < 1:
        raise InvalidInputError(f"{name} must be at least 1.")
    return value


def page_request(page=None, limit=None) -> PageRequest:
    """Page requires limit; limit alone returns the first ``limit`` results"""
    page = _as_positive(page, "Page")
    limit = _as_positive(limit, "Limit")
    if page is not None and limit is None:
        raise InvalidInputError("Limit is required when page is provided.")
    return PageRequest(page=page, limit=limit)
