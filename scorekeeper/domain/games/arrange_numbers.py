"""Arrange-Numbers rules"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence, Tuple

from scorekeeper.domain.entities.game_sessions import IDLE, ArrangeNumbersRound, ArrangeNumbersSession
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import InvalidInputError

if TYPE_CHECKING:
    from scorekeeper.application.ports.random_source_port import RandomSourcePort

SEQUENCE_LENGTH = 5
COMPLETION_POINTS = 2


@dataclass(frozen=True)
class ArrangeNumbersOutcome:
    submitted: Tuple[int, ...]
    markers: Tuple[str, ...]
    correct_positions: int
    round_number: int
    points: int
    started_round: bool

    @property
    def round_completed(self) -> bool:
        return self.correct_positions == SEQUENCE_LENGTH

    @property
    def hint(self) -> str:
        return " ".join(self.markers)


def validate_arrangement(numbers) -> Tuple[int, ...]:
    valid = ", ".join(str(n) for n in range(1, SEQUENCE_LENGTH + 1))
    if numbers is None or isinstance(numbers, (str, bytes)) or not isinstance(numbers, Sequence):
        raise InvalidInputError(
            f"Please enter the sequence of the {SEQUENCE_LENGTH} numbers {valid} in the 'arranged_numbers' field."
        )
    if len(numbers) != SEQUENCE_LENGTH:
        raise InvalidInputError(
            f"Please enter exactly {SEQUENCE_LENGTH} numbers in the 'arranged_numbers' field. "
            f"The sequence can be any arrangement of the numbers {valid}."
        )
    checked: List[int] = []
    for number in numbers:
        if isinstance(number, bool) or not isinstance(number, int) or not 1 <= number <= SEQUENCE_LENGTH:
            raise InvalidInputError(f"Only the numbers {valid} are allowed in the 'arranged_numbers' field.")
        if number in checked:
            raise InvalidInputError(
                f"The number {number} is not allowed to appear more than once in the 'arranged_numbers' field."
            )
        checked.append(number)
    return tuple(checked)


def draw_round(random_source: 'RandomSourcePort') -> ArrangeNumbersRound:
    return ArrangeNumbersRound(
        arrangement=tuple(random_source.distinct_integers(1, SEQUENCE_LENGTH, SEQUENCE_LENGTH))
    )


def marker(number: int, in_place: bool) -> str:
    """[X] for a number in the correct position, -X- otherwise"""
    return f"[{number}]" if in_place else f"-{number}-"


def play(account: UserAccount, numbers, random_source: 'RandomSourcePort') -> Tuple[UserAccount, ArrangeNumbersOutcome]:
    submitted = validate_arrangement(numbers)

    session = account.arrange_numbers
    started_round = not session.in_round
    if started_round:
        session = ArrangeNumbersSession(rounds=session.rounds + 1, state=draw_round(random_source))

    hidden = session.state.arrangement
    matches = [number == expected for number, expected in zip(submitted, hidden)]
    correct = sum(matches)

    points = 0
    if correct == SEQUENCE_LENGTH:
        points = COMPLETION_POINTS
        session = ArrangeNumbersSession(rounds=session.rounds, state=IDLE)

    updated = account.evolve(
        score=account.score + points,
        attempts=account.attempts + 1,
        arrange_numbers=session,
    )
    outcome = ArrangeNumbersOutcome(
        submitted=submitted,
        markers=tuple(marker(n, ok) for n, ok in zip(submitted, matches)),
        correct_positions=correct,
        round_number=session.rounds,
        points=points,
        started_round=started_round,
    )
    return updated, outcome
