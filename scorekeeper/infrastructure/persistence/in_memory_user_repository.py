"""In-memory user repository implementation

Keeps documents in a dict under a single lock. Used for local runs
(``STORAGE_BACKEND=memory``) and tests; same version semantics as the
MongoDB repository.
"""
import logging
from threading import Lock
from typing import Dict, List, Optional, Sequence

from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.domain.entities.user_account import UserAccount, username_key
from scorekeeper.domain.errors import ConcurrentModificationError, ConflictError
from scorekeeper.domain.queries import SortDirection, SortOrder, UserFilter

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepositoryPort):

    def __init__(self, random_source: Optional[RandomSourcePort] = None):
        self._accounts: Dict[str, UserAccount] = {}
        self.lock = Lock()
        self.random_source = random_source

    def get(self, username: str) -> Optional[UserAccount]:
        with self.lock:
            return self._accounts.get(username_key(username))

    def add(self, account: UserAccount) -> UserAccount:
        with self.lock:
            if account.key in self._accounts:
                raise ConflictError(f"The username '{account.username}' is already taken.")
            stored = account.evolve(version=1)
            self._accounts[stored.key] = stored
            return stored

    def save(self, account: UserAccount) -> UserAccount:
        return self.save_all([account])[0]

    def save_all(self, accounts: Sequence[UserAccount]) -> List[UserAccount]:
        with self.lock:
            for account in accounts:
                self._check_version(account)
            stored = [account.evolve(version=account.version + 1) for account in accounts]
            for account in stored:
                self._accounts[account.key] = account
            return stored

    def _check_version(self, account: UserAccount) -> None:
        current = self._accounts.get(account.key)
        if current is None or current.version != account.version:
            logger.warning(f"Stale write for {account.username} at version {account.version}")
            raise ConcurrentModificationError(account.username)

    def count(self, user_filter: Optional[UserFilter] = None) -> int:
        return len(self._matching(user_filter))

    def find(
        self,
        user_filter: Optional[UserFilter] = None,
        sort: Optional[SortOrder] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[UserAccount]:
        accounts = sorted(self._matching(user_filter), key=lambda account: account.key)
        # Stable sorts applied from the last key to the first
        for field_name, direction in reversed(sort or []):
            accounts.sort(
                key=lambda account: getattr(account, field_name),
                reverse=direction is SortDirection.DESCENDING
            )
        end = None if limit is None else skip + limit
        return accounts[skip:end]

    def sample_one(self, user_filter: Optional[UserFilter] = None) -> Optional[UserAccount]:
        candidates = sorted(self._matching(user_filter), key=lambda account: account.key)
        if not candidates:
            return None
        if self.random_source is None:
            raise RuntimeError("InMemoryUserRepository needs a random source to sample accounts")
        return candidates[self.random_source.pick_index(len(candidates))]

    def delete(self, username: str) -> bool:
        with self.lock:
            return self._accounts.pop(username_key(username), None) is not None

    def _matching(self, user_filter: Optional[UserFilter]) -> List[UserAccount]:
        with self.lock:
            accounts = list(self._accounts.values())
        if user_filter is None:
            return accounts
        return [account for account in accounts if user_filter.matches(account)]
