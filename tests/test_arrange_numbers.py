import pytest

from scorekeeper.domain.entities.game_sessions import IDLE, ArrangeNumbersRound, ArrangeNumbersSession
from scorekeeper.domain.errors import InvalidInputError
from scorekeeper.domain.games import arrange_numbers

from conftest import build_account

HIDDEN = (3, 1, 4, 5, 2)


@pytest.fixture()
def player():
    return build_account("alice", score=1).evolve(
        arrange_numbers=ArrangeNumbersSession(rounds=1, state=ArrangeNumbersRound(arrangement=HIDDEN))
    )


def test_exact_permutation_scores_two_and_ends_round(player, random_source):
    updated, outcome = arrange_numbers.play(player, [3, 1, 4, 5, 2], random_source)

    assert outcome.round_completed
    assert outcome.points == 2
    assert updated.score == 3
    assert updated.attempts == 1
    assert updated.arrange_numbers.state is IDLE
    assert updated.arrange_numbers.rounds == 1
    assert outcome.hint == "[3] [1] [4] [5] [2]"


def test_wrong_positions_give_markers(player, random_source):
    updated, outcome = arrange_numbers.play(player, [3, 2, 4, 1, 5], random_source)

    assert not outcome.round_completed
    assert outcome.correct_positions == 2
    assert outcome.markers == ("[3]", "-2-", "[4]", "-1-", "-5-")
    assert updated.score == player.score
    assert updated.attempts == player.attempts + 1
    assert updated.arrange_numbers == player.arrange_numbers


def test_idle_game_draws_new_permutation(random_source):
    account = build_account("bob")
    random_source.queue_integers([5, 4, 3, 2, 1])

    updated, outcome = arrange_numbers.play(account, [1, 2, 3, 4, 5], random_source)

    assert outcome.started_round
    assert outcome.round_number == 1
    assert outcome.correct_positions == 1
    assert updated.arrange_numbers.state == ArrangeNumbersRound(arrangement=(5, 4, 3, 2, 1))


@pytest.mark.parametrize("numbers", [
    None,
    [1, 2, 3, 4],
    [1, 2, 3, 4, 5, 1],
    [1, 2, 2, 4, 5],
    [0, 1, 2, 3, 4],
    [1, 2, 3, 4, 6],
    "12345",
    [1, 2, 3, 4, "x"],
])
def test_malformed_arrangement_rejected_before_mutation(player, random_source, numbers):
    with pytest.raises(InvalidInputError):
        arrange_numbers.play(player, numbers, random_source)


def test_duplicate_message_names_the_number():
    with pytest.raises(InvalidInputError) as exc:
        arrange_numbers.validate_arrangement([1, 2, 2, 4, 5])

    assert "number 2" in exc.value.message


def test_marker():
    assert arrange_numbers.marker(4, True) == "[4]"
    assert arrange_numbers.marker(4, False) == "-4-"
