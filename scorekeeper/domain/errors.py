"""Domain error taxonomy

Every rejection raised by the engine carries the status code that the
response envelope reports. Rejections are raised before any state change.
"""
from typing import Optional


class GameRuleError(Exception):
    """Base class for rejected actions"""

    status: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(GameRuleError):
    status = 400


class UnauthenticatedError(GameRuleError):
    status = 401


class NotFoundError(GameRuleError):
    status = 404


class MissingAccountError(NotFoundError):
    """Authenticated identity has no account record"""


class ConflictError(GameRuleError):
    status = 409


class ConcurrentModificationError(ConflictError):
    """Conditional save lost against a newer version of the record"""

    def __init__(self, username: str, message: Optional[str] = None):
        super().__init__(
            message or f"The account '{username}' was updated by another request. Please try again."
        )
        self.username = username


class UnprocessableError(GameRuleError):
    status = 422


class TooEarlyError(GameRuleError):
    status = 425

    def __init__(self, message: str, remaining_seconds: int):
        super().__init__(message)
        self.remaining_seconds = remaining_seconds


class SettlementError(GameRuleError):
    """Multi-record write could not be confirmed"""

    status = 500
