"""Leaderboard and user listing use cases"""
from scorekeeper.application.dto.game_requests import FilterUsersRequest, LeaderboardRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse, UserResponse
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase


class GetLeaderboardUseCase(BaseUseCase):
    """Accounts by score desc, attempts asc, rounds asc with positional ranks"""

    action = "leaderboard"

    def __init__(self, leaderboard_service: LeaderboardService):
        self.leaderboard_service = leaderboard_service

    def execute(self, request: LeaderboardRequest) -> ServerApiResponse:
        return self._respond(lambda: self._list(request))

    def _list(self, request: LeaderboardRequest) -> ServerApiResponse:
        result = self.leaderboard_service.leaderboard(page=request.page, limit=request.limit)
        entries = [
            LeaderboardUserResponse.ranked(result.first_rank + index, account)
            for index, account in enumerate(result.accounts)
        ]
        return ServerApiResponse.ok(data=entries, metadata=result.metadata())


class FilterUsersUseCase(BaseUseCase):
    """Filter by score range and username keyword, sort by score only"""

    action = "filter_users"

    def __init__(self, leaderboard_service: LeaderboardService):
        self.leaderboard_service = leaderboard_service

    def execute(self, request: FilterUsersRequest) -> ServerApiResponse:
        return self._respond(lambda: self._list(request))

    def _list(self, request: FilterUsersRequest) -> ServerApiResponse:
        result = self.leaderboard_service.filter_users(
            sort_direction=request.sort_direction,
            minimum_score=request.minimum_score,
            maximum_score=request.maximum_score,
            username_keyword=request.username_keyword,
            page=request.page,
            limit=request.limit,
        )
        users = [UserResponse.from_account(account) for account in result.accounts]
        return ServerApiResponse.ok(data=users, metadata=result.metadata())
