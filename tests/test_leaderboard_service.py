import pytest

from scorekeeper.application.dto.game_requests import FilterUsersRequest, LeaderboardRequest
from scorekeeper.application.use_cases.leaderboard_use_cases import FilterUsersUseCase, GetLeaderboardUseCase
from scorekeeper.domain.errors import InvalidInputError


@pytest.fixture()
def populated(add_account):
    # 25 accounts with scores 25..1, one attempt each
    return [add_account(f"player{n:02d}", score=n, attempts=1, guess_rounds=1) for n in range(1, 26)]


def test_rank_of_counts_accounts_strictly_ahead(add_account, leaderboard_service):
    leader = add_account("leader", score=10, attempts=1, guess_rounds=1)
    chaser = add_account("chaser", score=10, attempts=2, guess_rounds=1)
    add_account("tail", score=5)

    assert leaderboard_service.rank_of(leader) == 1
    assert leaderboard_service.rank_of(chaser) == 2


def test_equal_keys_share_a_rank_and_the_next_rank_is_skipped(add_account, leaderboard_service):
    accounts = [
        add_account(name, score=score, attempts=3, guess_rounds=1)
        for name, score in (("alice", 10), ("bob", 10), ("carol", 5))
    ]

    assert [leaderboard_service.rank_of(account) for account in accounts] == [1, 1, 3]


def test_fewer_rounds_breaks_attempts_tie(add_account, leaderboard_service):
    steady = add_account("steady", score=4, attempts=4, guess_rounds=2)
    slow = add_account("slow", score=4, attempts=4, guess_rounds=3)

    assert leaderboard_service.rank_of(steady) == 1
    assert leaderboard_service.rank_of(slow) == 2


def test_second_page_has_ranks_11_to_20(populated, leaderboard_service):
    response = GetLeaderboardUseCase(leaderboard_service).execute(LeaderboardRequest(page=2, limit=10))

    assert response.status == 200
    ranks = [entry.rank for entry in response.data]
    assert ranks == list(range(11, 21))
    assert [entry.score for entry in response.data] == list(range(15, 5, -1))
    assert response.metadata["pagination"] == {"page": 2, "limit": 10, "total_items": 25, "total_pages": 3}
    assert response.metadata["total_users"] == 25
    assert response.metadata["returned_users"] == 10


def test_last_page_is_partial(populated, leaderboard_service):
    response = GetLeaderboardUseCase(leaderboard_service).execute(LeaderboardRequest(page=3, limit=10))

    assert len(response.data) == 5
    assert response.data[-1].rank == 25


def test_page_without_limit_is_invalid(populated, leaderboard_service):
    response = GetLeaderboardUseCase(leaderboard_service).execute(LeaderboardRequest(page=2))

    assert response.status == 400
    assert response.data is None


def test_leaderboard_without_pagination_returns_everyone(populated, leaderboard_service):
    response = GetLeaderboardUseCase(leaderboard_service).execute(LeaderboardRequest())

    assert len(response.data) == 25
    assert response.data[0].username == "player25"
    assert response.metadata["pagination"] is None


def test_filter_by_score_range_and_keyword(add_account, leaderboard_service):
    add_account("Alice", score=30)
    add_account("malik", score=12)
    add_account("alina", score=8)
    add_account("bob", score=20)

    result = leaderboard_service.filter_users(
        sort_direction="Ascending", minimum_score=10, maximum_score=40, username_keyword="ALI"
    )

    assert [account.username for account in result.accounts] == ["malik", "Alice"]
    assert result.total_matches == 2
    assert result.total_users == 4


def test_filter_sorts_by_score_only(add_account, leaderboard_service):
    add_account("carol", score=5, attempts=9, guess_rounds=1)
    add_account("dave", score=5, attempts=1, guess_rounds=1)
    add_account("erin", score=7)

    response = FilterUsersUseCase(leaderboard_service).execute(FilterUsersRequest(sort_direction="desc"))

    assert [user.username for user in response.data] == ["erin", "carol", "dave"]
    assert not hasattr(response.data[0], "rank")


def test_keyword_is_matched_literally(add_account, leaderboard_service):
    add_account("a.b", score=1)
    add_account("axb", score=1)

    result = leaderboard_service.filter_users(sort_direction="Ascending", username_keyword="a.b")

    assert [account.username for account in result.accounts] == ["a.b"]


@pytest.mark.parametrize("direction", [None, "sideways", 3])
def test_filter_requires_sort_direction(leaderboard_service, direction):
    with pytest.raises(InvalidInputError):
        leaderboard_service.filter_users(sort_direction=direction)
