"""Per-game session state embedded in the user account

Each variant is either idle or in a round carrying its hidden targets.
Sessions are immutable; transitions build new instances.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

# Replaces a consumed trap number; validated guesses are always in [1, 100]
CONSUMED_TRAP = 0


@dataclass(frozen=True)
class Idle:
    """No round in progress"""

    def to_dict(self) -> Optional[dict]:
        return None


IDLE = Idle()


@dataclass(frozen=True)
class GuessNumberRound:
    """Hidden numbers of a running Guess-a-Number round"""

    basic: int
    secret: int
    trap: int

    @property
    def trap_consumed(self) -> bool:
        return self.trap == CONSUMED_TRAP

    def consume_trap(self) -> 'GuessNumberRound':
        return GuessNumberRound(basic=self.basic, secret=self.secret, trap=CONSUMED_TRAP)

    def to_dict(self) -> dict:
        return {"basic": self.basic, "secret": self.secret, "trap": self.trap}

    @classmethod
    def from_dict(cls, data: dict) -> 'GuessNumberRound':
        return cls(
            basic=int(data["basic"]),
            secret=int(data["secret"]),
            trap=int(data.get("trap", CONSUMED_TRAP))
        )


@dataclass(frozen=True)
class ArrangeNumbersRound:
    """Hidden permutation of a running Arrange-Numbers round"""

    arrangement: Tuple[int, ...]

    def to_dict(self) -> dict:
        return {"arrangement": list(self.arrangement)}

    @classmethod
    def from_dict(cls, data: dict) -> 'ArrangeNumbersRound':
        return cls(arrangement=tuple(int(n) for n in data["arrangement"]))


GuessNumberState = Union[Idle, GuessNumberRound]
ArrangeNumbersState = Union[Idle, ArrangeNumbersRound]


@dataclass(frozen=True)
class GuessNumberSession:
    rounds: int = 0
    state: GuessNumberState = field(default=IDLE)

    @property
    def in_round(self) -> bool:
        return isinstance(self.state, GuessNumberRound)

    def to_dict(self) -> dict:
        return {"rounds": self.rounds, "round": self.state.to_dict()}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'GuessNumberSession':
        if not data:
            return cls()
        current = data.get("round")
        return cls(
            rounds=int(data.get("rounds", 0)),
            state=GuessNumberRound.from_dict(current) if current else IDLE
        )


@dataclass(frozen=True)
class ArrangeNumbersSession:
    rounds: int = 0
    state: ArrangeNumbersState = field(default=IDLE)

    @property
    def in_round(self) -> bool:
        return isinstance(self.state, ArrangeNumbersRound)

    def to_dict(self) -> dict:
        return {"rounds": self.rounds, "round": self.state.to_dict()}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'ArrangeNumbersSession':
        if not data:
            return cls()
        current = data.get("round")
        return cls(
            rounds=int(data.get("rounds", 0)),
            state=ArrangeNumbersRound.from_dict(current) if current else IDLE
        )


@dataclass(frozen=True)
class RockPaperScissorsSession:
    """Duels keep no state between calls, only the round counter"""

    rounds: int = 0

    def to_dict(self) -> dict:
        return {"rounds": self.rounds}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'RockPaperScissorsSession':
        if not data:
            return cls()
        return cls(rounds=int(data.get("rounds", 0)))
