"""Rock-Paper-Scissors duel rules

A duel moves the stake from the loser to the winner. Both players get a
round and an attempt. Practice games use the same resolution rule and
change nothing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from scorekeeper.domain.entities.game_sessions import RockPaperScissorsSession
from scorekeeper.domain.entities.hand import Hand
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import InvalidInputError, UnprocessableError

if TYPE_CHECKING:
    from scorekeeper.application.ports.random_source_port import RandomSourcePort

MINIMUM_STAKE = 1


class DuelResult(Enum):
    """Result from the challenger's point of view"""

    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


@dataclass(frozen=True)
class DuelOutcome:
    challenger_hand: Hand
    opponent_hand: Hand
    result: DuelResult
    stake: int
    round_number: int

    @property
    def transferred(self) -> int:
        return 0 if self.result is DuelResult.DRAW else self.stake


@dataclass(frozen=True)
class PracticeOutcome:
    hand: Hand
    opponent_hand: Hand
    result: DuelResult


def parse_hand(value, field_name: str = "choice") -> Hand:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"The '{field_name}' field is required.")
    hand = Hand.parse(value)
    if hand is None:
        options = ", ".join(h.value for h in Hand)
        raise InvalidInputError(f"The '{field_name}' field must be one of: {options}.")
    return hand


def validate_stake(stake) -> int:
    if stake is None:
        raise InvalidInputError("The 'points_to_stake' field is required.")
    if isinstance(stake, bool) or not isinstance(stake, int):
        raise InvalidInputError("The 'points_to_stake' field must be a whole number.")
    if stake < MINIMUM_STAKE:
        raise InvalidInputError(f"The value of the 'points_to_stake' field must be at least {MINIMUM_STAKE}.")
    return stake


def check_challenger_funds(challenger: UserAccount, stake: int) -> None:
    if stake > challenger.score:
        raise UnprocessableError(
            f"You cannot stake more points than you currently have (Max: {challenger.score})."
        )


def check_opponent_funds(opponent: UserAccount, stake: int) -> None:
    if stake > opponent.score:
        raise UnprocessableError(
            f"You cannot stake more points than your opponent currently has (Max: {opponent.score})."
        )


def resolve(hand: Hand, opponent_hand: Hand) -> DuelResult:
    if hand is opponent_hand:
        return DuelResult.DRAW
    return DuelResult.WIN if hand.beats(opponent_hand) else DuelResult.LOSE


def draw_hand(random_source: 'RandomSourcePort') -> Hand:
    hands = Hand.members()
    return hands[random_source.pick_index(len(hands))]


def _played_round(account: UserAccount, score_delta: int) -> UserAccount:
    return account.evolve(
        score=account.score + score_delta,
        attempts=account.attempts + 1,
        rock_paper_scissors=RockPaperScissorsSession(rounds=account.rock_paper_scissors.rounds + 1),
    )


def settle(
    challenger: UserAccount,
    opponent: UserAccount,
    hand: Hand,
    stake: int,
    random_source: 'RandomSourcePort',
    opponent_hand: Optional[Hand] = None
) -> Tuple[UserAccount, UserAccount, DuelOutcome]:
    """Resolve a duel between two already validated accounts"""
    check_challenger_funds(challenger, stake)
    check_opponent_funds(opponent, stake)

    if opponent_hand is None:
        opponent_hand = draw_hand(random_source)
    result = resolve(hand, opponent_hand)

    delta = 0
    if result is DuelResult.WIN:
        delta = stake
    elif result is DuelResult.LOSE:
        delta = -stake

    updated_challenger = _played_round(challenger, delta)
    updated_opponent = _played_round(opponent, -delta)
    outcome = DuelOutcome(
        challenger_hand=hand,
        opponent_hand=opponent_hand,
        result=result,
        stake=stake,
        round_number=updated_challenger.rock_paper_scissors.rounds,
    )
    return updated_challenger, updated_opponent, outcome


def practise(hand: Hand, random_source: 'RandomSourcePort') -> PracticeOutcome:
    opponent_hand = draw_hand(random_source)
    return PracticeOutcome(hand=hand, opponent_hand=opponent_hand, result=resolve(hand, opponent_hand))
