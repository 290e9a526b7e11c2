"""Guess-a-Number use case"""
import logging

from sentry_sdk import start_span

from scorekeeper.application.dto.game_requests import GuessNumberRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse
from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.games import guess_number
from scorekeeper.domain.games.guess_number import GuessNumberOutcome, GuessVerdict
from scorekeeper.metrics import track_action

logger = logging.getLogger(__name__)


class GuessNumberUseCase(BaseUseCase):
    """Play one guess of Guess-a-Number"""

    action = "guess_number"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        leaderboard_service: LeaderboardService,
        random_source: RandomSourcePort
    ):
        self.user_repository = user_repository
        self.leaderboard_service = leaderboard_service
        self.random_source = random_source

    def execute(self, account: UserAccount, request: GuessNumberRequest) -> ServerApiResponse:
        return self._respond(lambda: self._play(account, request))

    def _play(self, account: UserAccount, request: GuessNumberRequest) -> ServerApiResponse:
        with start_span(op="game.rng", name="Evaluate guess") as span:
            updated, outcome = guess_number.play(account, request.guessed_number, self.random_source)
            span.set_data("verdict", outcome.verdict.value)
            span.set_data("started_round", outcome.started_round)

        with start_span(op="db.update", name="Store account"):
            saved = self.user_repository.save(updated)

        track_action(self.action, outcome.verdict.value, outcome.points)
        if outcome.round_completed:
            logger.info(
                f"User {saved.username} completed guess-number round {outcome.round_number} "
                f"with {outcome.verdict.value} number"
            )

        rank = self.leaderboard_service.rank_of(saved)
        return ServerApiResponse.ok(
            message=describe(outcome, saved.score),
            data=LeaderboardUserResponse.ranked(rank, saved)
        )


def describe(outcome: GuessNumberOutcome, score: int) -> str:
    prefix = f"[ ROUND {outcome.round_number} ] "
    guess = outcome.guess
    if outcome.verdict is GuessVerdict.SECRET:
        return (
            f"{prefix}Congratulations!!! You have successfully guessed the SECRET number ({guess}) "
            f"and earned {guess_number.SECRET_POINTS} points! Your current score is {score}. "
            f"Use this endpoint to play a new round."
        )
    if outcome.verdict is GuessVerdict.TRAP:
        return (
            f"{prefix}You have unfortunately guessed the TRAP number ({guess}) and lost "
            f"{guess_number.TRAP_PENALTY} point... Your current score is {score}. "
            f"Use this endpoint to continue guessing the BASIC or SECRET number."
        )
    if outcome.verdict is GuessVerdict.TOO_HIGH:
        return f"{prefix}Your guessed number ({guess}) is too high! Try again."
    if outcome.verdict is GuessVerdict.TOO_LOW:
        return f"{prefix}Your guessed number ({guess}) is too low! Try again."
    return (
        f"{prefix}Congratulations! You have successfully guessed the BASIC number ({guess}) "
        f"and earned {guess_number.BASIC_POINTS} point. Your current score is {score}. "
        f"Use this endpoint to play a new round."
    )
