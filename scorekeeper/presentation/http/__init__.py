from .handlers import (
    HealthHandler,
    MetricsHandler,
    RegisterHandler,
    MyAccountHandler,
    DisplayNameHandler,
    PasswordHandler,
    ProfileHandler,
    UsersHandler,
    LeaderboardHandler,
    GuessNumberHandler,
    ArrangeNumbersHandler,
    PractiseRockPaperScissorsHandler,
    PlayRockPaperScissorsHandler,
    BonusHandler
)

__all__ = [
    'HealthHandler',
    'MetricsHandler',
    'RegisterHandler',
    'MyAccountHandler',
    'DisplayNameHandler',
    'PasswordHandler',
    'ProfileHandler',
    'UsersHandler',
    'LeaderboardHandler',
    'GuessNumberHandler',
    'ArrangeNumbersHandler',
    'PractiseRockPaperScissorsHandler',
    'PlayRockPaperScissorsHandler',
    'BonusHandler'
]
