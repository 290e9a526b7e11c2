from .server_api_response import ServerApiResponse, DEFAULT_SUCCESS_MESSAGE
from .user_response import UserResponse, LeaderboardUserResponse
from .game_requests import (
    GuessNumberRequest,
    ArrangeNumbersRequest,
    PlayRockPaperScissorsRequest,
    PractiseRockPaperScissorsRequest,
    LeaderboardRequest,
    FilterUsersRequest
)
from .account_requests import RegisterRequest, ChangeDisplayNameRequest, ChangePasswordRequest

__all__ = [
    'ServerApiResponse',
    'DEFAULT_SUCCESS_MESSAGE',
    'UserResponse',
    'LeaderboardUserResponse',
    'GuessNumberRequest',
    'ArrangeNumbersRequest',
    'PlayRockPaperScissorsRequest',
    'PractiseRockPaperScissorsRequest',
    'LeaderboardRequest',
    'FilterUsersRequest',
    'RegisterRequest',
    'ChangeDisplayNameRequest',
    'ChangePasswordRequest'
]
