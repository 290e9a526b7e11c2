"""Guess-a-Number rules

Each round hides three distinct numbers from 1 to 100:

- basic: hinted after every wrong guess, +1 point and the round ends
- secret: no hints, +3 points and the round ends
- trap: no hints, -1 point, consumed, the round continues
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

from scorekeeper.domain.entities.game_sessions import IDLE, GuessNumberRound, GuessNumberSession
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import InvalidInputError

if TYPE_CHECKING:
    from scorekeeper.application.ports.random_source_port import RandomSourcePort

LOWEST_NUMBER = 1
HIGHEST_NUMBER = 100

BASIC_POINTS = 1
SECRET_POINTS = 3
TRAP_PENALTY = 1


class GuessVerdict(Enum):
    SECRET = "secret"
    TRAP = "trap"
    TOO_HIGH = "too_high"
    TOO_LOW = "too_low"
    BASIC = "basic"


@dataclass(frozen=True)
class GuessNumberOutcome:
    guess: int
    verdict: GuessVerdict
    round_number: int
    points: int
    started_round: bool

    @property
    def round_completed(self) -> bool:
        return self.verdict in (GuessVerdict.SECRET, GuessVerdict.BASIC)


def validate_guess(guess) -> int:
    if guess is None:
        raise InvalidInputError("The 'guessed_number' field is required.")
    if isinstance(guess, bool) or not isinstance(guess, int):
        raise InvalidInputError("The 'guessed_number' field must be a whole number.")
    if guess < LOWEST_NUMBER or guess > HIGHEST_NUMBER:
        raise InvalidInputError(
            f"Please enter a number from {LOWEST_NUMBER} to {HIGHEST_NUMBER} in the 'guessed_number' field."
        )
    return guess


def draw_round(random_source: 'RandomSourcePort') -> GuessNumberRound:
    basic, secret, trap = random_source.distinct_integers(LOWEST_NUMBER, HIGHEST_NUMBER, 3)
    return GuessNumberRound(basic=basic, secret=secret, trap=trap)


def evaluate(current: GuessNumberRound, guess: int) -> GuessVerdict:
    if guess == current.secret:
        return GuessVerdict.SECRET
    if guess == current.trap:
        return GuessVerdict.TRAP
    if guess > current.basic:
        return GuessVerdict.TOO_HIGH
    if guess < current.basic:
        return GuessVerdict.TOO_LOW
    return GuessVerdict.BASIC


def play(account: UserAccount, guess, random_source: 'RandomSourcePort') -> Tuple[UserAccount, GuessNumberOutcome]:
    """Apply one guess; starts a round first when the game is idle"""
    guess = validate_guess(guess)

    session = account.guess_number
    started_round = not session.in_round
    if started_round:
        session = GuessNumberSession(rounds=session.rounds + 1, state=draw_round(random_source))

    current = session.state
    verdict = evaluate(current, guess)

    points = 0
    if verdict is GuessVerdict.SECRET:
        points = SECRET_POINTS
        session = GuessNumberSession(rounds=session.rounds, state=IDLE)
    elif verdict is GuessVerdict.BASIC:
        points = BASIC_POINTS
        session = GuessNumberSession(rounds=session.rounds, state=IDLE)
    elif verdict is GuessVerdict.TRAP:
        points = -TRAP_PENALTY
        session = GuessNumberSession(rounds=session.rounds, state=current.consume_trap())

    updated = account.evolve(
        score=account.score + points,
        attempts=account.attempts + 1,
        guess_number=session,
    )
    outcome = GuessNumberOutcome(
        guess=guess,
        verdict=verdict,
        round_number=session.rounds,
        points=points,
        started_round=started_round,
    )
    return updated, outcome
