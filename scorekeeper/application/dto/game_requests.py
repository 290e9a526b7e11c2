"""Game request DTOs

Fields keep the raw values sent by the caller; the domain rules validate
them so a malformed request is rejected before any state change.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Optional

_INTEGER = re.compile(r"[+-]?\d+")


def coerce_int(value: Any) -> Any:
    """Turn numeric strings into ints, leave everything else untouched"""
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
        return None if not text else value
    return value


def coerce_int_list(value: Any) -> Any:
    """Accept a list or a comma separated string of numbers"""
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
        return [coerce_int(part) for part in parts]
    if isinstance(value, (list, tuple)):
        return [coerce_int(item) for item in value]
    return value


@dataclass
class GuessNumberRequest:
    guessed_number: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> 'GuessNumberRequest':
        return cls(guessed_number=coerce_int(data.get('guessed_number')))


@dataclass
class ArrangeNumbersRequest:
    arranged_numbers: Any = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'ArrangeNumbersRequest':
        return cls(arranged_numbers=coerce_int_list(data.get('arranged_numbers')))


@dataclass
class PlayRockPaperScissorsRequest:
    choice: Any = None
    points_to_stake: Any = None
    opponent_username: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'PlayRockPaperScissorsRequest':
        opponent = data.get('opponent_username')
        if isinstance(opponent, str) and not opponent.strip():
            opponent = None
        return cls(
            choice=data.get('choice'),
            points_to_stake=coerce_int(data.get('points_to_stake')),
            opponent_username=opponent.strip() if isinstance(opponent, str) else opponent
        )


@dataclass
class PractiseRockPaperScissorsRequest:
    choice: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> 'PractiseRockPaperScissorsRequest':
        return cls(choice=data.get('choice'))


@dataclass
class LeaderboardRequest:
    page: Any = None
    limit: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> 'LeaderboardRequest':
        return cls(page=coerce_int(data.get('page')), limit=coerce_int(data.get('limit')))


@dataclass
class FilterUsersRequest:
    sort_direction: Any = None
    minimum_score: Any = None
    maximum_score: Any = None
    username_keyword: Optional[str] = None
    page: Any = None
    limit: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> 'FilterUsersRequest':
        return cls(
            sort_direction=data.get('sort_direction'),
            minimum_score=coerce_int(data.get('minimum_score')),
            maximum_score=coerce_int(data.get('maximum_score')),
            username_keyword=data.get('username_keyword'),
            page=coerce_int(data.get('page')),
            limit=coerce_int(data.get('limit'))
        )
