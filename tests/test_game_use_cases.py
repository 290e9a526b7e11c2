import pytest

from scorekeeper.application.dto.game_requests import (
    ArrangeNumbersRequest,
    GuessNumberRequest,
    PlayRockPaperScissorsRequest,
    PractiseRockPaperScissorsRequest
)
from scorekeeper.application.use_cases.arrange_numbers_use_case import ArrangeNumbersUseCase
from scorekeeper.application.use_cases.claim_bonus_points_use_case import ClaimBonusPointsUseCase
from scorekeeper.application.use_cases.guess_number_use_case import GuessNumberUseCase
from scorekeeper.application.use_cases.play_rock_paper_scissors_use_case import PlayRockPaperScissorsUseCase
from scorekeeper.application.use_cases.practise_rock_paper_scissors_use_case import PractiseRockPaperScissorsUseCase
from scorekeeper.domain.errors import SettlementError


@pytest.fixture()
def guess(repository, leaderboard_service, random_source):
    return GuessNumberUseCase(repository, leaderboard_service, random_source)


@pytest.fixture()
def arrange(repository, leaderboard_service, random_source):
    return ArrangeNumbersUseCase(repository, leaderboard_service, random_source)


@pytest.fixture()
def duel(repository, leaderboard_service, random_source):
    return PlayRockPaperScissorsUseCase(repository, leaderboard_service, random_source)


@pytest.fixture()
def bonus(repository, leaderboard_service, random_source, clock):
    return ClaimBonusPointsUseCase(repository, leaderboard_service, random_source, clock=clock)


def duel_request(choice="Rock", stake=1, opponent=None):
    return PlayRockPaperScissorsRequest(choice=choice, points_to_stake=stake, opponent_username=opponent)


def test_guess_round_flow_is_persisted(guess, add_account, repository, random_source):
    alice = add_account("alice")
    random_source.queue_integers([50, 70, 30])

    high = guess.execute(alice, GuessNumberRequest(guessed_number=51))
    hit = guess.execute(repository.get("alice"), GuessNumberRequest(guessed_number=50))

    assert high.status == 200
    assert high.message == "[ ROUND 1 ] Your guessed number (51) is too high! Try again."
    assert hit.message.startswith("[ ROUND 1 ] Congratulations! You have successfully guessed the BASIC number (50)")
    stored = repository.get("alice")
    assert (stored.score, stored.attempts, stored.rounds) == (1, 2, 1)
    assert not stored.guess_number.in_round
    assert hit.data.rank == 1


def test_stale_snapshot_is_a_conflict(guess, add_account, random_source):
    alice = add_account("alice")
    guess.execute(alice, GuessNumberRequest(guessed_number=10))

    response = guess.execute(alice, GuessNumberRequest(guessed_number=10))

    assert response.status == 409


def test_arrange_response_carries_hint(arrange, add_account, random_source):
    alice = add_account("alice")
    random_source.queue_integers([1, 2, 3, 5, 4])

    response = arrange.execute(alice, ArrangeNumbersRequest(arranged_numbers=[1, 2, 3, 4, 5]))

    assert response.status == 200
    assert response.data["hint"] == "[1] [2] [3] -4- -5-"
    assert "[X] = Correct position" in response.message
    assert response.data["attempts"] == 1


def test_duel_against_named_opponent(duel, add_account, repository, random_source):
    alice = add_account("alice", score=10)
    add_account("Bob", score=6)
    random_source.queue_indexes(2)

    response = duel.execute(alice, duel_request("Rock", 4, "bob"))

    assert response.status == 200
    assert response.data["result"] == "win"
    assert response.data["opponent_choice"] == "Scissors"
    assert repository.get("alice").score == 14
    assert repository.get("bob").score == 2
    assert repository.get("bob").rock_paper_scissors.rounds == 1
    assert "received 4 point(s) from 'Bob'" in response.message


def test_random_opponent_must_cover_the_stake(duel, add_account, repository, random_source):
    alice = add_account("alice", score=10)
    add_account("poor", score=2)
    add_account("rich", score=9)
    # opponent sample, then the opponent's hand
    random_source.queue_indexes(0, 1)

    response = duel.execute(alice, duel_request("Rock", 5))

    assert response.data["opponent"].username == "rich"
    assert response.data["result"] == "lose"
    assert repository.get("rich").score == 14
    assert repository.get("poor").score == 2


def test_no_eligible_random_opponent(duel, add_account):
    alice = add_account("alice", score=10)
    add_account("poor", score=2)

    response = duel.execute(alice, duel_request("Rock", 5))

    assert response.status == 404


def test_preconditions_in_order(duel, add_account):
    alice = add_account("alice", score=3)
    add_account("bob", score=1)

    assert duel.execute(alice, duel_request("Lizard", 0, "bob")).status == 400
    assert duel.execute(alice, duel_request("Lizard", 1, "bob")).status == 400
    assert duel.execute(alice, duel_request("Rock", 4, "nobody")).status == 422
    assert duel.execute(alice, duel_request("Rock", 1, "ALICE")).status == 409
    assert duel.execute(alice, duel_request("Rock", 1, "nobody")).status == 404
    response = duel.execute(alice, duel_request("Rock", 2, "bob"))
    assert response.status == 422
    assert "(Max: 1)" in response.message


def test_failed_settlement_reports_error(duel, add_account, repository, monkeypatch):
    alice = add_account("alice", score=5)
    add_account("bob", score=5)

    def fail(accounts):
        raise SettlementError("The accounts could not be updated together. No points were moved.")

    monkeypatch.setattr(repository, "save_all", fail)

    response = duel.execute(alice, duel_request("Rock", 1, "bob"))

    assert response.status == 500
    assert repository.get("alice").score == 5


def test_practise_changes_nothing(add_account, repository, random_source):
    alice = add_account("alice", score=2)
    random_source.queue_indexes(0)

    response = PractiseRockPaperScissorsUseCase(random_source).execute(
        alice, PractiseRockPaperScissorsRequest(choice="paper")
    )

    assert response.status == 200
    assert response.data["result"] == "win"
    assert repository.get("alice") == alice


@pytest.mark.parametrize("action", [
    lambda uc, account: uc["guess"].execute(account, GuessNumberRequest(guessed_number=500)),
    lambda uc, account: uc["arrange"].execute(account, ArrangeNumbersRequest(arranged_numbers=[1, 1, 2, 3, 4])),
    lambda uc, account: uc["duel"].execute(account, duel_request("Rock", 99)),
    lambda uc, account: uc["duel"].execute(account, duel_request("Rock", 1, "ghost")),
    lambda uc, account: uc["duel"].execute(account, duel_request("Rock", 1, "alice")),
    lambda uc, account: uc["bonus"].execute(account),
])
def test_rejected_actions_leave_account_untouched(guess, arrange, duel, bonus, add_account, repository, clock, action):
    # claimed a bonus just now, so the next claim is still cooling down
    alice = add_account("alice", score=3, attempts=2, guess_rounds=1, last_bonus_claim_at=clock())

    response = action({"guess": guess, "arrange": arrange, "duel": duel, "bonus": bonus}, alice)

    assert 400 <= response.status < 500
    assert repository.get("alice") == alice
