"""Account management use cases"""
import logging
from typing import Callable, Optional

from sentry_sdk import start_span
from werkzeug.security import generate_password_hash

from scorekeeper.application.dto.account_requests import ChangeDisplayNameRequest, ChangePasswordRequest, RegisterRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.dto.user_response import LeaderboardUserResponse, UserResponse
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

USERNAME_LENGTH = 3
PASSWORD_LENGTH = 3
DISPLAY_NAME_LENGTH = 3


def _require_text(value, field_name: str, minimum: int) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"The '{field_name}' field is required.")
    if len(value.strip()) < minimum:
        raise InvalidInputError(f"The '{field_name}' field must be at least {minimum} characters long.")
    return value.strip()


def _require_password(value) -> str:
    if value is None or not isinstance(value, str) or not value:
        raise InvalidInputError("The 'password' field is required.")
    if len(value) < PASSWORD_LENGTH:
        raise InvalidInputError(f"Password must be at least {PASSWORD_LENGTH} characters long.")
    return value


class RegisterAccountUseCase(BaseUseCase):
    """Create an account with zeroed counters and idle games"""

    action = "register"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        password_hasher: Callable[[str], str] = generate_password_hash
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    def execute(self, request: RegisterRequest) -> ServerApiResponse:
        return self._respond(lambda: self._register(request))

    def _register(self, request: RegisterRequest) -> ServerApiResponse:
        username = _require_text(request.username, "username", USERNAME_LENGTH)
        if any(ch.isspace() for ch in username):
            raise InvalidInputError("The 'username' field must not contain spaces.")
        password = _require_password(request.password)
        display_name = username
        if request.display_name is not None and str(request.display_name).strip():
            display_name = _require_text(request.display_name, "display_name", DISPLAY_NAME_LENGTH)

        account = UserAccount(
            username=username,
            display_name=display_name,
            credential_hash=self.password_hasher(password),
        )
        with start_span(op="db.insert", name="Create account"):
            saved = self.user_repository.add(account)

        logger.info(f"Registered user {saved.username}")
        return ServerApiResponse.created(
            message=f"The account with the username '{saved.username}' has been successfully registered.",
            data=UserResponse.from_account(saved)
        )


class GetProfileUseCase(BaseUseCase):
    """Profile with rank, own or by username"""

    action = "profile"

    def __init__(self, user_repository: UserRepositoryPort, leaderboard_service: LeaderboardService):
        self.user_repository = user_repository
        self.leaderboard_service = leaderboard_service

    def execute(self, account: Optional[UserAccount] = None, username: Optional[str] = None) -> ServerApiResponse:
        return self._respond(lambda: self._profile(account, username))

    def _profile(self, account: Optional[UserAccount], username: Optional[str]) -> ServerApiResponse:
        if username is not None and username.strip():
            account = self.user_repository.get(username)
            if account is None:
                raise NotFoundError("User not found. Please check the username and try again.")
        elif account is None:
            raise InvalidInputError("The 'username' field is required.")
        return ServerApiResponse.ok(
            data=LeaderboardUserResponse.ranked(self.leaderboard_service.rank_of(account), account)
        )


class ChangeDisplayNameUseCase(BaseUseCase):

    action = "change_display_name"

    def __init__(self, user_repository: UserRepositoryPort):
        self.user_repository = user_repository

    def execute(self, account: UserAccount, request: ChangeDisplayNameRequest) -> ServerApiResponse:
        return self._respond(lambda: self._change(account, request))

    def _change(self, account: UserAccount, request: ChangeDisplayNameRequest) -> ServerApiResponse:
        display_name = _require_text(request.display_name, "display_name", DISPLAY_NAME_LENGTH)
        saved = self.user_repository.save(account.evolve(display_name=display_name))
        logger.info(f"User {saved.username} changed display name")
        return ServerApiResponse.ok(
            message="The display name of your account has been successfully changed.",
            data=UserResponse.from_account(saved)
        )


class DeleteAccountUseCase(BaseUseCase):

    action = "delete_account"

    def __init__(self, user_repository: UserRepositoryPort):
        self.user_repository = user_repository

    def execute(self, account: UserAccount) -> ServerApiResponse:
        return self._respond(lambda: self._delete(account))

    def _delete(self, account: UserAccount) -> ServerApiResponse:
        username = account.username
        with start_span(op="db.delete", name="Delete account"):
            existed = self.user_repository.delete(username)
        if not existed:
            raise NotFoundError(f"User not found. Unable to delete your account with the username '{username}'.")
        logger.info(f"Deleted user {username}")
        return ServerApiResponse.ok(
            message=f"Your account with the username '{username}' has been successfully deleted."
        )


class ChangePasswordUseCase(BaseUseCase):

    action = "change_password"

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        password_hasher: Callable[[str], str] = generate_password_hash
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    def execute(self, account: UserAccount, request: ChangePasswordRequest) -> ServerApiResponse:
        return self._respond(lambda: self._change(account, request))

    def _change(self, account: UserAccount, request: ChangePasswordRequest) -> ServerApiResponse:
        password = _require_password(request.password)
        with start_span(op="db.update", name="Store credential"):
            saved = self.user_repository.save(account.evolve(credential_hash=self.password_hasher(password)))
        logger.info(f"User {saved.username} changed password")
        return ServerApiResponse.ok(
            message="The password of your account has been successfully changed.",
            data=UserResponse.from_account(saved)
        )
