"""Authenticator port (interface)"""
from abc import ABC, abstractmethod
from typing import Mapping

from scorekeeper.domain.entities.user_account import UserAccount


class AuthenticatorPort(ABC):
    """Port resolving an inbound request to the caller's account snapshot"""

    @abstractmethod
    def authenticate(self, headers: Mapping[str, str]) -> UserAccount:
        """Raise UnauthenticatedError or MissingAccountError on failure"""
        pass
