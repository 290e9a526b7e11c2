"""Leaderboard service

Computes ranks and runs the leaderboard and listing queries against the
user repository. Read-only.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sentry_sdk import start_span

from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import InvalidInputError
from scorekeeper.domain.queries import LEADERBOARD_ORDER, RankKey, SortDirection, UserFilter, score_order
from scorekeeper.domain.ranking import PageRequest, page_request

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Accounts of one query page plus the counts the envelope reports"""

    accounts: List[UserAccount]
    request: PageRequest
    total_matches: int
    total_users: int
    first_rank: int = 1

    def metadata(self) -> dict:
        pagination = None
        if self.request.paginated:
            pagination = {
                "page": self.request.page,
                "limit": self.request.limit,
                "total_items": self.total_matches,
                "total_pages": self.request.total_pages(self.total_matches),
            }
        return {
            "total_users": self.total_users,
            "returned_users": len(self.accounts),
            "pagination": pagination,
        }


class LeaderboardService:
    """Ranking engine over the user repository"""

    def __init__(self, user_repository: UserRepositoryPort):
        self.user_repository = user_repository

    def rank_of(self, account: UserAccount) -> int:
        """1 + number of accounts strictly ahead"""
        with start_span(op="db.count", name="Count accounts ranked ahead"):
            ahead = self.user_repository.count(UserFilter(ahead_of=RankKey.of(account)))
        return ahead + 1

    def leaderboard(self, page=None, limit=None) -> PageResult:
        request = page_request(page, limit)
        return self._query(UserFilter(), request, LEADERBOARD_ORDER)

    def filter_users(
        self,
        sort_direction,
        minimum_score=None,
        maximum_score=None,
        username_keyword: Optional[str] = None,
        page=None,
        limit=None
    ) -> PageResult:
        direction = SortDirection.parse(sort_direction)
        if direction is None:
            raise InvalidInputError("The 'sort_direction' field is required and must be Ascending or Descending.")
        for name, value in (("minimum_score", minimum_score), ("maximum_score", maximum_score)):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise InvalidInputError(f"The '{name}' field must be a whole number.")
        if username_keyword is not None and not isinstance(username_keyword, str):
            raise InvalidInputError("The 'username_keyword' field must be text.")

        request = page_request(page, limit)
        user_filter = UserFilter(
            minimum_score=minimum_score,
            maximum_score=maximum_score,
            username_keyword=username_keyword,
        )
        return self._query(user_filter, request, score_order(direction))

    def _query(self, user_filter: UserFilter, request: PageRequest, sort) -> PageResult:
        with start_span(op="db.query", name="Query accounts") as span:
            total_matches = self.user_repository.count(user_filter)
            accounts = self.user_repository.find(
                user_filter,
                sort=sort,
                skip=request.skip,
                limit=request.limit,
            )
            total_users = self.user_repository.count()
            span.set_data("db.total_matches", total_matches)
            span.set_data("db.returned", len(accounts))

        logger.debug(f"Query returned {len(accounts)} of {total_matches} matching accounts")
        return PageResult(
            accounts=accounts,
            request=request,
            total_matches=total_matches,
            total_users=total_users,
            first_rank=request.first_rank,
        )
