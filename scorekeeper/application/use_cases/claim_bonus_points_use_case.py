"""Bonus claim use case"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from sentry_sdk import start_span

from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse
from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.games import bonus
from scorekeeper.domain.games.bonus import format_wait
from scorekeeper.metrics import track_action

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ClaimBonusPointsUseCase(BaseUseCase):
    """Grant 1 or 2 bonus points once per cooldown window"""

    action = "claim_bonus"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        leaderboard_service: LeaderboardService,
        random_source: RandomSourcePort,
        cooldown: timedelta = bonus.DEFAULT_COOLDOWN,
        double_probability: float = bonus.DOUBLE_BONUS_PROBABILITY,
        clock: Callable[[], datetime] = utc_now
    ):
        self.user_repository = user_repository
        self.leaderboard_service = leaderboard_service
        self.random_source = random_source
        self.cooldown = cooldown
        self.double_probability = double_probability
        self.clock = clock

    def execute(self, account: UserAccount) -> ServerApiResponse:
        return self._respond(lambda: self._claim(account))

    def _claim(self, account: UserAccount) -> ServerApiResponse:
        updated, outcome = bonus.claim(
            account,
            now=self.clock(),
            random_source=self.random_source,
            cooldown=self.cooldown,
            double_probability=self.double_probability,
        )

        with start_span(op="db.update", name="Store bonus claim"):
            saved = self.user_repository.save(updated)

        track_action(self.action, f"plus_{outcome.points}", outcome.points)
        logger.info(f"User {saved.username} claimed {outcome.points} bonus point(s)")

        if outcome.points == bonus.DOUBLE_BONUS_POINTS:
            result = f"Bonus points claimed! You received +{outcome.points} points!"
        else:
            result = f"Bonus point claimed! You received +{outcome.points} point."
        wait = format_wait(int(self.cooldown.total_seconds()))
        message = (
            f"{result} Your current score is {saved.score}. "
            f"Please come back after {wait} to claim your next bonus points."
        )
        return ServerApiResponse.ok(
            message=message,
            data=LeaderboardUserResponse.ranked(self.leaderboard_service.rank_of(saved), saved),
            metadata={"next_claim_at": outcome.next_claim_at.isoformat()}
        )
