"""MongoDB user repository implementation"""
import logging
import re
from typing import List, Optional, Sequence

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from scorekeeper.application.ports.user_repository_port import UserRepositoryPort
from scorekeeper.domain.entities.user_account import UserAccount, username_key
from scorekeeper.domain.errors import ConcurrentModificationError, ConflictError, SettlementError
from scorekeeper.domain.queries import SortDirection, SortOrder, UserFilter

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    SortDirection.ASCENDING: ASCENDING,
    SortDirection.DESCENDING: DESCENDING,
}


def build_query(user_filter: Optional[UserFilter]) -> dict:
    """Translate a UserFilter into a MongoDB query document"""
    query = {}
    if user_filter is None:
        return query

    score = {}
    if user_filter.minimum_score is not None:
        score["$gte"] = user_filter.minimum_score
    if user_filter.maximum_score is not None:
        score["$lte"] = user_filter.maximum_score
    if score:
        query["score"] = score

    keyword = user_filter.keyword
    if keyword is not None:
        query["username"] = {"$regex": re.escape(keyword), "$options": "i"}

    if user_filter.excluded_keys:
        query["username_key"] = {"$nin": sorted(user_filter.excluded_keys)}

    ahead = user_filter.ahead_of
    if ahead is not None:
        query["$or"] = [
            {"score": {"$gt": ahead.score}},
            {"score": ahead.score, "attempts": {"$lt": ahead.attempts}},
            {"score": ahead.score, "attempts": ahead.attempts, "rounds": {"$lt": ahead.rounds}},
        ]
    return query


def build_sort(sort: Optional[SortOrder]) -> list:
    """Requested keys followed by username for a stable order"""
    keys = [(field_name, _DIRECTIONS[direction]) for field_name, direction in (sort or [])]
    keys.append(("username_key", ASCENDING))
    return keys


class MongoUserRepository(UserRepositoryPort):
    """MongoDB implementation of user repository

    Multi-account writes run in a transaction when ``use_transactions`` is
    set (replica set or mongos required). Otherwise they are applied one by
    one and earlier writes are rolled back if a later one fails.
    """

    def __init__(self, db: Database, client: Optional[MongoClient] = None, use_transactions: bool = True):
        self.db = db
        self.client = client
        self.collection = db.users
        self.use_transactions = use_transactions and client is not None

    def ensure_indexes(self) -> None:
        self.collection.create_index("username_key", unique=True)
        self.collection.create_index([
            ("score", DESCENDING),
            ("attempts", ASCENDING),
            ("rounds", ASCENDING),
        ])

    def get(self, username: str) -> Optional[UserAccount]:
        document = self.collection.find_one({"username_key": username_key(username)})
        return UserAccount.from_dict(document) if document else None

    def add(self, account: UserAccount) -> UserAccount:
        stored = account.evolve(version=1)
        try:
            self.collection.insert_one(stored.to_dict())
        except DuplicateKeyError:
            raise ConflictError(f"The username '{account.username}' is already taken.")
        return stored

    def save(self, account: UserAccount) -> UserAccount:
        return self._replace(account)

    def _replace(self, account: UserAccount, session: Optional[ClientSession] = None) -> UserAccount:
        """Write the next version if the stored one is still ``account.version``"""
        stored = account.evolve(version=account.version + 1)
        result = self.collection.replace_one(
            {"username_key": account.key, "version": account.version},
            stored.to_dict(),
            session=session
        )
        if result.matched_count == 0:
            logger.warning(f"Stale write for {account.username} at version {account.version}")
            raise ConcurrentModificationError(account.username)
        return stored

    def save_all(self, accounts: Sequence[UserAccount]) -> List[UserAccount]:
        if self.use_transactions:
            return self._save_all_in_transaction(accounts)
        return self._save_all_with_compensation(accounts)

    def _save_all_in_transaction(self, accounts: Sequence[UserAccount]) -> List[UserAccount]:
        try:
            with self.client.start_session() as session:
                return session.with_transaction(
                    lambda s: [self._replace(account, s) for account in accounts]
                )
        except PyMongoError as e:
            logger.error(f"Transaction for {[a.username for a in accounts]} failed: {e}")
            raise SettlementError("The accounts could not be updated together. No points were moved.")

    def _save_all_with_compensation(self, accounts: Sequence[UserAccount]) -> List[UserAccount]:
        originals = {a.key: self.collection.find_one({"username_key": a.key}) for a in accounts}
        written: List[UserAccount] = []
        try:
            for account in accounts:
                written.append(self._replace(account))
        except (ConcurrentModificationError, PyMongoError) as e:
            logger.warning(f"Multi-account write failed after {len(written)} leg(s): {e}")
            self._compensate(written, originals)
            if isinstance(e, ConcurrentModificationError):
                raise
            raise SettlementError("The accounts could not be updated together. No points were moved.")
        return written

    def _compensate(self, written: List[UserAccount], originals: dict) -> None:
        """Restore the previous content of already written accounts"""
        for account in written:
            original = originals.get(account.key)
            if original is None:
                continue
            restored = UserAccount.from_dict(original).evolve(version=account.version + 1)
            try:
                result = self.collection.replace_one(
                    {"username_key": account.key, "version": account.version},
                    restored.to_dict()
                )
            except PyMongoError as e:
                logger.error(f"Rollback of {account.username} failed: {e}")
                raise SettlementError(
                    f"The account '{account.username}' could not be restored after a failed update."
                )
            if result.matched_count == 0:
                logger.error(f"Rollback of {account.username} lost against a newer write")
                raise SettlementError(
                    f"The account '{account.username}' could not be restored after a failed update."
                )
            logger.info(f"Rolled back {account.username} to its previous state")

    def count(self, user_filter: Optional[UserFilter] = None) -> int:
        return self.collection.count_documents(build_query(user_filter))

    def find(
        self,
        user_filter: Optional[UserFilter] = None,
        sort: Optional[SortOrder] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[UserAccount]:
        cursor = self.collection.find(build_query(user_filter)).sort(build_sort(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [UserAccount.from_dict(document) for document in cursor]

    def sample_one(self, user_filter: Optional[UserFilter] = None) -> Optional[UserAccount]:
        pipeline = [
            {"$match": build_query(user_filter)},
            {"$sample": {"size": 1}},
        ]
        documents = list(self.collection.aggregate(pipeline))
        return UserAccount.from_dict(documents[0]) if documents else None

    def delete(self, username: str) -> bool:
        result = self.collection.delete_one({"username_key": username_key(username)})
        return result.deleted_count > 0
