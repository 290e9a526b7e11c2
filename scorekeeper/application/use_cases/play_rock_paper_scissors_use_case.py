"""Rock-Paper-Scissors duel use case

Settles a staked duel between the caller and another account. Both
accounts are written through ``save_all`` so neither side is ever stored
without the other.
"""
import logging
from typing import Optional

import sentry_sdk
from sentry_sdk import start_span

from scorekeeper.application.dto.game_requests import PlayRockPaperScissorsRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse
from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import ConflictError, NotFoundError, SettlementError
from scorekeeper.domain.games import rock_paper_scissors as rps
from scorekeeper.domain.games.rock_paper_scissors import DuelOutcome, DuelResult
from scorekeeper.domain.queries import UserFilter
from scorekeeper.metrics import DUEL_STAKES, SETTLEMENT_FAILURES, track_action

logger = logging.getLogger(__name__)


class PlayRockPaperScissorsUseCase(BaseUseCase):
    """Staked duel against a chosen or random opponent"""

    action = "rock_paper_scissors"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        leaderboard_service: LeaderboardService,
        random_source: RandomSourcePort
    ):
        self.user_repository = user_repository
        self.leaderboard_service = leaderboard_service
        self.random_source = random_source

    def execute(self, account: UserAccount, request: PlayRockPaperScissorsRequest) -> ServerApiResponse:
        return self._respond(lambda: self._play(account, request))

    def _play(self, account: UserAccount, request: PlayRockPaperScissorsRequest) -> ServerApiResponse:
        stake = rps.validate_stake(request.points_to_stake)
        hand = rps.parse_hand(request.choice)
        rps.check_challenger_funds(account, stake)

        opponent = self._resolve_opponent(account, request.opponent_username, stake)
        rps.check_opponent_funds(opponent, stake)

        with start_span(op="game.rng", name="Resolve duel") as span:
            challenger, rival, outcome = rps.settle(account, opponent, hand, stake, self.random_source)
            span.set_data("result", outcome.result.value)

        with start_span(op="db.transaction", name="Store both duel accounts") as span:
            try:
                challenger, rival = self.user_repository.save_all([challenger, rival])
            except SettlementError:
                SETTLEMENT_FAILURES.inc()
                span.set_tag("settlement", "failed")
                raise
            span.set_tag("settlement", "confirmed")

        track_action(self.action, outcome.result.value, outcome.transferred)
        DUEL_STAKES.observe(stake)
        sentry_sdk.set_tag("duel.result", outcome.result.value)
        logger.info(
            f"Duel {challenger.username} vs {rival.username}: {outcome.result.value}, "
            f"{outcome.transferred} point(s) transferred"
        )

        data = {
            "user": LeaderboardUserResponse.ranked(self.leaderboard_service.rank_of(challenger), challenger),
            "opponent": LeaderboardUserResponse.ranked(self.leaderboard_service.rank_of(rival), rival),
            "your_choice": outcome.challenger_hand.value,
            "opponent_choice": outcome.opponent_hand.value,
            "result": outcome.result.value,
        }
        return ServerApiResponse.ok(message=describe(outcome, rival.username, challenger.score), data=data)

    def _resolve_opponent(self, account: UserAccount, opponent_username: Optional[str], stake: int) -> UserAccount:
        if opponent_username is None:
            with start_span(op="db.sample", name="Draw random opponent"):
                opponent = self.user_repository.sample_one(
                    UserFilter(minimum_score=stake, excluded_usernames=frozenset([account.username]))
                )
            if opponent is None:
                raise NotFoundError(
                    "Opponent user not found. Try to lower down the value in the 'points_to_stake' field."
                )
            return opponent

        if account.matches(opponent_username):
            raise ConflictError(
                "You cannot choose yourself as your opponent. "
                "Please enter a different username in the 'opponent_username' field."
            )
        opponent = self.user_repository.get(opponent_username)
        if opponent is None:
            raise NotFoundError(
                "Opponent user not found. Please make sure that you enter the correct username "
                "in the 'opponent_username' field."
            )
        return opponent


def describe(outcome: DuelOutcome, opponent_username: str, score: int) -> str:
    message = (
        f"[ ROUND {outcome.round_number} ] Your choice: {{ {outcome.challenger_hand.value} }} versus "
        f"opponent {opponent_username}'s choice: {{ {outcome.opponent_hand.value} }} | "
    )
    if outcome.result is DuelResult.DRAW:
        message += "It is a draw. Both players keep their points."
    elif outcome.result is DuelResult.WIN:
        message += f"Congratulations! You won and received {outcome.stake} point(s) from '{opponent_username}'."
    else:
        message += f"You lost and transferred {outcome.stake} point(s) to '{opponent_username}'."
    return f"{message} Your current score is {score}. Use this endpoint to play a new round."
