"""Authenticator trusting an identity header set by the upstream gateway"""
import logging
from typing import Mapping

from scorekeeper.application.ports.authenticator_port import AuthenticatorPort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import MissingAccountError, UnauthenticatedError

logger = logging.getLogger(__name__)

DEFAULT_HEADER = "X-Authenticated-User"


class HeaderAuthenticator(AuthenticatorPort):

    def __init__(self, user_repository: UserRepositoryPort, header_name: str = DEFAULT_HEADER):
        self.user_repository = user_repository
        self.header_name = header_name

    def authenticate(self, headers: Mapping[str, str]) -> UserAccount:
        username = (headers.get(self.header_name) or "").strip()
        if not username:
            raise UnauthenticatedError("Unauthorized. Please log in to access this resource.")
        account = self.user_repository.get(username)
        if account is None:
            logger.warning(f"Authenticated user {username} has no account")
            raise MissingAccountError(
                f"The account with the username '{username}' no longer exists. Please register again."
            )
        return account
