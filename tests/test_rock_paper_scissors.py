import pytest

from scorekeeper.domain.entities.hand import Hand
from scorekeeper.domain.errors import InvalidInputError, UnprocessableError
from scorekeeper.domain.games import rock_paper_scissors as rps
from scorekeeper.domain.games.rock_paper_scissors import DuelResult

from conftest import build_account


@pytest.mark.parametrize("hand, other, result", [
    (Hand.ROCK, Hand.SCISSORS, DuelResult.WIN),
    (Hand.SCISSORS, Hand.PAPER, DuelResult.WIN),
    (Hand.PAPER, Hand.ROCK, DuelResult.WIN),
    (Hand.ROCK, Hand.PAPER, DuelResult.LOSE),
    (Hand.PAPER, Hand.PAPER, DuelResult.DRAW),
])
def test_resolve(hand, other, result):
    assert rps.resolve(hand, other) is result


def test_parse_hand_is_case_insensitive():
    assert rps.parse_hand("rOcK") is Hand.ROCK
    assert rps.parse_hand(" scissors ") is Hand.SCISSORS


@pytest.mark.parametrize("value", [None, "", "lizard", 3])
def test_parse_hand_rejects_unknown(value):
    with pytest.raises(InvalidInputError):
        rps.parse_hand(value)


@pytest.mark.parametrize("stake", [None, 0, -3, "5", True])
def test_stake_must_be_positive_integer(stake):
    with pytest.raises(InvalidInputError):
        rps.validate_stake(stake)


@pytest.mark.parametrize("opponent_hand, expected", [
    (Hand.SCISSORS, (17, 3)),
    (Hand.PAPER, (7, 13)),
    (Hand.ROCK, (12, 8)),
])
def test_settlement_is_zero_sum(random_source, opponent_hand, expected):
    challenger = build_account("alice", score=12)
    opponent = build_account("bob", score=8)

    winner, loser, outcome = rps.settle(
        challenger, opponent, Hand.ROCK, 5, random_source, opponent_hand=opponent_hand
    )

    assert (winner.score, loser.score) == expected
    assert winner.score + loser.score == challenger.score + opponent.score


def test_both_players_get_a_round_and_attempt_even_on_draw(random_source):
    challenger = build_account("alice", score=5, attempts=2, duel_rounds=1)
    opponent = build_account("bob", score=5)

    updated, rival, outcome = rps.settle(challenger, opponent, Hand.PAPER, 1, random_source, opponent_hand=Hand.PAPER)

    assert outcome.result is DuelResult.DRAW
    assert outcome.transferred == 0
    assert outcome.round_number == 2
    assert (updated.attempts, updated.rock_paper_scissors.rounds) == (3, 2)
    assert (rival.attempts, rival.rock_paper_scissors.rounds) == (1, 1)


def test_opponent_hand_is_drawn_when_not_given(random_source):
    random_source.queue_indexes(1)

    _, _, outcome = rps.settle(
        build_account("alice", score=3), build_account("bob", score=3), Hand.ROCK, 1, random_source
    )

    assert outcome.opponent_hand is Hand.PAPER
    assert outcome.result is DuelResult.LOSE


def test_stake_above_either_score_is_unprocessable(random_source):
    with pytest.raises(UnprocessableError) as exc:
        rps.check_challenger_funds(build_account("alice", score=4), 5)
    assert "(Max: 4)" in exc.value.message

    with pytest.raises(UnprocessableError):
        rps.settle(build_account("alice", score=10), build_account("bob", score=2), Hand.ROCK, 3, random_source)


def test_practise_uses_same_resolution(random_source):
    random_source.queue_indexes(2)

    outcome = rps.practise(Hand.ROCK, random_source)

    assert outcome.opponent_hand is Hand.SCISSORS
    assert outcome.result is DuelResult.WIN
