"""
Scorekeeper - Clean Architecture Entry Point

Serves the game, ranking and account endpoints over HTTP REST. Storage is
selected with STORAGE_BACKEND (mongo by default, memory for local runs).
"""
import os
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from scorekeeper.config.container import Container
from scorekeeper.presentation.http.handlers import (
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

logger = logging.getLogger(__name__)


def init_sentry():
    """Initialize Sentry from the environment"""
    version = os.environ.get('APP_VERSION', '1.0.0')
    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[TornadoIntegration()],
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '1.0')),
        environment=os.environ.get('SENTRY_ENVIRONMENT', 'development'),
        profiles_sample_rate=float(os.environ.get('SENTRY_PROFILES_SAMPLE_RATE', '0')),
        debug=os.environ.get('SENTRY_DEBUG', 'false').lower() == 'true',
        release=f"scorekeeper@{version}",
        auto_session_tracking=True
    )


def make_app(container: Container = None):
    """Create Tornado application with Clean Architecture handlers"""
    container = container or Container.get_instance()
    authenticator = container.get_authenticator()

    def authenticated(**use_cases):
        return dict(authenticator=authenticator, **use_cases)

    routes = [
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/auth/register", RegisterHandler, {
            "register_use_case": container.get_register_account_use_case()
        }),
        (r"/users/me", MyAccountHandler, authenticated(
            profile_use_case=container.get_profile_use_case(),
            delete_account_use_case=container.get_delete_account_use_case()
        )),
        (r"/users/me/display-name", DisplayNameHandler, authenticated(
            change_display_name_use_case=container.get_change_display_name_use_case()
        )),
        (r"/users/me/password", PasswordHandler, authenticated(
            change_password_use_case=container.get_change_password_use_case()
        )),
        (r"/users/profile/([^/]+)", ProfileHandler, authenticated(
            profile_use_case=container.get_profile_use_case()
        )),
        (r"/users", UsersHandler, authenticated(
            filter_users_use_case=container.get_filter_users_use_case()
        )),
        (r"/games/leaderboard", LeaderboardHandler, authenticated(
            leaderboard_use_case=container.get_leaderboard_use_case()
        )),
        (r"/games/guess-number", GuessNumberHandler, authenticated(
            guess_number_use_case=container.get_guess_number_use_case()
        )),
        (r"/games/arrange-numbers", ArrangeNumbersHandler, authenticated(
            arrange_numbers_use_case=container.get_arrange_numbers_use_case()
        )),
        (r"/games/rock-paper-scissors/practise", PractiseRockPaperScissorsHandler, authenticated(
            practise_use_case=container.get_practise_rock_paper_scissors_use_case()
        )),
        (r"/games/rock-paper-scissors", PlayRockPaperScissorsHandler, authenticated(
            play_use_case=container.get_play_rock_paper_scissors_use_case()
        )),
        (r"/games/bonus", BonusHandler, authenticated(
            claim_bonus_use_case=container.get_claim_bonus_points_use_case()
        )),
    ]

    return web.Application(routes)


def main():
    logging.basicConfig(level=logging.INFO)
    init_sentry()

    app = make_app()
    port = int(os.environ.get('PORT', 8082))
    app.listen(port)

    logger.info(f"Scorekeeper started on :{port}")
    ioloop.IOLoop.current().start()


if __name__ == "__main__":
    main()
