"""Arrange-Numbers use case"""
import logging

from sentry_sdk import start_span

from scorekeeper.application.dto.game_requests import ArrangeNumbersRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse
from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.games import arrange_numbers
from scorekeeper.metrics import track_action

logger = logging.getLogger(__name__)


class ArrangeNumbersUseCase(BaseUseCase):
    """Submit one arrangement of the numbers 1 to 5"""

    action = "arrange_numbers"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        leaderboard_service: LeaderboardService,
        random_source: RandomSourcePort
    ):
        self.user_repository = user_repository
        self.leaderboard_service = leaderboard_service
        self.random_source = random_source

    def execute(self, account: UserAccount, request: ArrangeNumbersRequest) -> ServerApiResponse:
        return self._respond(lambda: self._play(account, request))

    def _play(self, account: UserAccount, request: ArrangeNumbersRequest) -> ServerApiResponse:
        with start_span(op="game.rng", name="Evaluate arrangement") as span:
            updated, outcome = arrange_numbers.play(account, request.arranged_numbers, self.random_source)
            span.set_data("correct_positions", outcome.correct_positions)

        with start_span(op="db.update", name="Store account"):
            saved = self.user_repository.save(updated)

        prefix = f"[ ROUND {outcome.round_number} ] "
        if outcome.round_completed:
            track_action(self.action, "completed", outcome.points)
            logger.info(f"User {saved.username} completed arrange-numbers round {outcome.round_number}")
            sequence = ",".join(str(n) for n in outcome.submitted)
            message = (
                f"{prefix}Congratulations! You have successfully guessed the sequence of the "
                f"{arrange_numbers.SEQUENCE_LENGTH} numbers ({sequence}) and earned "
                f"{arrange_numbers.COMPLETION_POINTS} points. Your current score is {saved.score}. "
                f"Use this endpoint to play a new round."
            )
        else:
            track_action(self.action, "hint")
            message = (
                f"{prefix}Here is the hint to help you figure out the sequence of the "
                f"{arrange_numbers.SEQUENCE_LENGTH} numbers: {outcome.hint}. "
                f"[X] = Correct position. -X- = Wrong position. Use this endpoint to try again."
            )

        rank = self.leaderboard_service.rank_of(saved)
        data = LeaderboardUserResponse.ranked(rank, saved).to_dict()
        data["hint"] = outcome.hint
        return ServerApiResponse.ok(message=message, data=data)
