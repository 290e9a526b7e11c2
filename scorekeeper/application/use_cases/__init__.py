from .guess_number_use_case import GuessNumberUseCase
from .arrange_numbers_use_case import ArrangeNumbersUseCase
from .play_rock_paper_scissors_use_case import PlayRockPaperScissorsUseCase
from .practise_rock_paper_scissors_use_case import PractiseRockPaperScissorsUseCase
from .claim_bonus_points_use_case import ClaimBonusPointsUseCase
from .leaderboard_use_cases import GetLeaderboardUseCase, FilterUsersUseCase
from .account_use_cases import (
    RegisterAccountUseCase,
    GetProfileUseCase,
    ChangeDisplayNameUseCase,
    ChangePasswordUseCase,
    DeleteAccountUseCase
)

__all__ = [
    'GuessNumberUseCase',
    'ArrangeNumbersUseCase',
    'PlayRockPaperScissorsUseCase',
    'PractiseRockPaperScissorsUseCase',
    'ClaimBonusPointsUseCase',
    'GetLeaderboardUseCase',
    'FilterUsersUseCase',
    'RegisterAccountUseCase',
    'GetProfileUseCase',
    'ChangeDisplayNameUseCase',
    'ChangePasswordUseCase',
    'DeleteAccountUseCase'
]
