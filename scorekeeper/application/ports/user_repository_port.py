"""User repository port (interface)"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.queries import SortOrder, UserFilter


class UserRepositoryPort(ABC):
    """Port for user account persistence

    ``save`` and ``save_all`` are conditional on the ``version`` each account
    was read with and return the stored accounts with their new versions.
    A stale version raises ``ConcurrentModificationError``.
    """

    @abstractmethod
    def get(self, username: str) -> Optional[UserAccount]:
        """Case-insensitive lookup"""
        pass

    @abstractmethod
    def add(self, account: UserAccount) -> UserAccount:
        """Insert a new account, ConflictError if the username is taken"""
        pass

    @abstractmethod
    def save(self, account: UserAccount) -> UserAccount:
        """Replace one account if its version is current"""
        pass

    @abstractmethod
    def save_all(self, accounts: Sequence[UserAccount]) -> List[UserAccount]:
        """Replace several accounts as one indivisible unit"""
        pass

    @abstractmethod
    def count(self, user_filter: Optional[UserFilter] = None) -> int:
        pass

    @abstractmethod
    def find(
        self,
        user_filter: Optional[UserFilter] = None,
        sort: Optional[SortOrder] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[UserAccount]:
        pass

    @abstractmethod
    def sample_one(self, user_filter: Optional[UserFilter] = None) -> Optional[UserAccount]:
        """Uniformly random account among the matches"""
        pass

    @abstractmethod
    def delete(self, username: str) -> bool:
        """Remove an account, False if it did not exist"""
        pass
