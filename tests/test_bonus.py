from datetime import timedelta

import pytest

from scorekeeper.application.use_cases.claim_bonus_points_use_case import ClaimBonusPointsUseCase
from scorekeeper.domain.errors import TooEarlyError
from scorekeeper.domain.games import bonus

from conftest import build_account


@pytest.fixture()
def use_case(repository, leaderboard_service, random_source, clock):
    return ClaimBonusPointsUseCase(repository, leaderboard_service, random_source, clock=clock)


@pytest.mark.parametrize("seconds, text", [
    (1, "1 second"),
    (59, "59 seconds"),
    (61, "1 minute and 1 second"),
    (600, "10 minutes and 0 seconds"),
    (3600, "1 hour, 0 minutes, and 0 seconds"),
    (10799, "2 hours, 59 minutes, and 59 seconds"),
])
def test_format_wait(seconds, text):
    assert bonus.format_wait(seconds) == text


def test_first_claim_is_always_allowed(clock, random_source):
    random_source.queue_hits(True)

    updated, outcome = bonus.claim(build_account("alice", score=3), clock(), random_source)

    assert outcome.points == 2
    assert updated.score == 5
    assert updated.claimed_bonus_points == 2
    assert updated.last_bonus_claim_at == clock()
    assert outcome.next_claim_at == clock() + timedelta(hours=3)


def test_remaining_cooldown_rounds_up(clock):
    account = build_account("alice", last_bonus_claim_at=clock() - timedelta(hours=3) + timedelta(milliseconds=200))

    assert bonus.remaining_cooldown(account, clock()) == 1


def test_second_claim_inside_window_is_too_early(add_account, use_case, repository, clock):
    add_account("alice", score=1)
    first = use_case.execute(repository.get("alice"))
    clock.advance(hours=1)

    second = use_case.execute(repository.get("alice"))

    assert first.status == 200
    assert second.status == 425
    assert second.metadata["remaining_seconds"] == 2 * 3600
    assert "2 hours, 0 minutes, and 0 seconds" in second.message
    assert repository.get("alice").score == 2


def test_claim_after_window_resets_timer(add_account, use_case, repository, clock, random_source):
    add_account("alice")
    use_case.execute(repository.get("alice"))
    clock.advance(hours=3)
    random_source.queue_hits(True)

    response = use_case.execute(repository.get("alice"))

    stored = repository.get("alice")
    assert response.status == 200
    assert stored.score == 3
    assert stored.claimed_bonus_points == 3
    assert stored.last_bonus_claim_at == clock()
    assert response.metadata["next_claim_at"] == (clock() + timedelta(hours=3)).isoformat()
    assert response.data.rank == 1


def test_configurable_cooldown(add_account, repository, leaderboard_service, random_source, clock):
    use_case = ClaimBonusPointsUseCase(
        repository, leaderboard_service, random_source, cooldown=timedelta(minutes=30), clock=clock
    )
    add_account("alice")
    use_case.execute(repository.get("alice"))
    clock.advance(minutes=29, seconds=30)

    with pytest.raises(TooEarlyError) as exc:
        bonus.claim(repository.get("alice"), clock(), random_source, cooldown=timedelta(minutes=30))

    assert exc.value.remaining_seconds == 30
    assert use_case.execute(repository.get("alice")).status == 425
