from collections import deque
from datetime import datetime, timedelta, timezone

import pytest

from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.services.leaderboard_service import LeaderboardService
from scorekeeper.domain.entities.game_sessions import (
    ArrangeNumbersSession,
    GuessNumberSession,
    RockPaperScissorsSession
)
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.infrastructure.persistence.in_memory_user_repository import InMemoryUserRepository


class ScriptedRandomSource(RandomSourcePort):
    """Replays queued draws; falls back to the lowest values when a queue is empty"""

    def __init__(self):
        self.integers = deque()
        self.hits = deque()
        self.indexes = deque()

    def queue_integers(self, *draws):
        self.integers.extend(list(draw) for draw in draws)
        return self

    def queue_hits(self, *hits):
        self.hits.extend(hits)
        return self

    def queue_indexes(self, *indexes):
        self.indexes.extend(indexes)
        return self

    def distinct_integers(self, low, high, count):
        if self.integers:
            return self.integers.popleft()
        return list(range(low, low + count))

    def is_hit(self, probability):
        if self.hits:
            return self.hits.popleft()
        return False

    def pick_index(self, size):
        if self.indexes:
            return self.indexes.popleft() % size
        return 0


class FixedClock:
    def __init__(self, now=None):
        self.now = now or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def build_account(username, score=0, attempts=0, guess_rounds=0, arrange_rounds=0, duel_rounds=0, **changes):
    return UserAccount(
        username=username,
        display_name=changes.pop("display_name", username),
        score=score,
        attempts=attempts,
        guess_number=GuessNumberSession(rounds=guess_rounds),
        arrange_numbers=ArrangeNumbersSession(rounds=arrange_rounds),
        rock_paper_scissors=RockPaperScissorsSession(rounds=duel_rounds),
        **changes
    )


@pytest.fixture()
def random_source():
    return ScriptedRandomSource()


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def repository(random_source):
    return InMemoryUserRepository(random_source=random_source)


@pytest.fixture()
def leaderboard_service(repository):
    return LeaderboardService(repository)


@pytest.fixture()
def add_account(repository):
    """Store an account and return the stored snapshot"""
    def _add(username, **fields):
        return repository.add(build_account(username, **fields))
    return _add
