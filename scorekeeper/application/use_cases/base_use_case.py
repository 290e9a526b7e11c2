"""Shared error translation for use cases"""
import logging
from typing import Callable

import sentry_sdk

from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.domain.errors import GameRuleError
from scorekeeper.metrics import track_rejection

logger = logging.getLogger(__name__)


class BaseUseCase:
    """Runs a use case body and turns failures into response envelopes

    Rule violations become their own status; anything unexpected is sent to
    Sentry and answered with a 500.
    """

    action = "action"

    def _respond(self, body: Callable[[], ServerApiResponse]) -> ServerApiResponse:
        try:
            return body()
        except GameRuleError as e:
            track_rejection(self.action, e.status)
            if e.status >= 500:
                logger.error(f"{self.action} failed: {e.message}")
                sentry_sdk.capture_exception(e)
            else:
                logger.info(f"{self.action} rejected ({e.status}): {e.message}")
            return ServerApiResponse.from_error(e)
        except Exception as e:
            logger.error(f"Unexpected error in {self.action}: {e}")
            sentry_sdk.capture_exception(e)
            return ServerApiResponse.internal_error()
