"""HTTP REST handlers for the scorekeeper service"""
import json
import logging
from typing import Callable, Optional

import sentry_sdk
from tornado import web
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from scorekeeper.application.dto.account_requests import ChangeDisplayNameRequest, ChangePasswordRequest, RegisterRequest
from scorekeeper.application.dto.game_requests import (
    ArrangeNumbersRequest,
    FilterUsersRequest,
    GuessNumberRequest,
    LeaderboardRequest,
    PlayRockPaperScissorsRequest,
    PractiseRockPaperScissorsRequest
)
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.ports.authenticator_port import AuthenticatorPort
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.errors import GameRuleError, InvalidInputError

logger = logging.getLogger(__name__)


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class ApiHandler(web.RequestHandler):
    """Common plumbing: trace continuation, auth, body parsing, envelope output"""

    def initialize(self, authenticator: Optional[AuthenticatorPort] = None, **use_cases):
        self.authenticator = authenticator
        for name, use_case in use_cases.items():
            setattr(self, name, use_case)

    def handle(self, op: str, name: str, action: Callable[[], ServerApiResponse]) -> None:
        transaction = sentry_sdk.continue_trace({
            "sentry-trace": self.request.headers.get("sentry-trace"),
            "baggage": self.request.headers.get("baggage")
        }, op=op, name=name)

        with sentry_sdk.start_transaction(transaction):
            try:
                response = action()
            except GameRuleError as e:
                response = ServerApiResponse.from_error(e)
            except Exception as e:
                logger.error(f"Unhandled error in {name}: {e}")
                sentry_sdk.capture_exception(e)
                response = ServerApiResponse.internal_error()
            self.send(response)

    def send(self, response: ServerApiResponse) -> None:
        self.set_status(response.status)
        self.write(response.to_dict())

    def authenticate(self) -> UserAccount:
        account = self.authenticator.authenticate(self.request.headers)
        sentry_sdk.set_user({"id": account.key, "username": account.username})
        return account

    def json_body(self) -> dict:
        if not self.request.body:
            return {}
        try:
            data = json.loads(self.request.body)
        except ValueError:
            raise InvalidInputError("The request body must be valid JSON.")
        if not isinstance(data, dict):
            raise InvalidInputError("The request body must be a JSON object.")
        return data

    def query_args(self) -> dict:
        return {name: self.get_query_argument(name) for name in self.request.query_arguments}


class RegisterHandler(ApiHandler):

    def post(self):
        """POST /auth/register"""
        self.handle("auth.register", "register", lambda: self.register_use_case.execute(
            RegisterRequest.from_dict(self.json_body())
        ))


class MyAccountHandler(ApiHandler):

    def get(self):
        """GET /users/me - own profile with rank"""
        self.handle("user.profile", "my_profile", lambda: self.profile_use_case.execute(
            account=self.authenticate()
        ))

    def delete(self):
        """DELETE /users/me"""
        self.handle("user.delete", "delete_account", lambda: self.delete_account_use_case.execute(
            self.authenticate()
        ))


class DisplayNameHandler(ApiHandler):

    def put(self):
        """PUT /users/me/display-name"""
        def action():
            account = self.authenticate()
            return self.change_display_name_use_case.execute(
                account, ChangeDisplayNameRequest.from_dict(self.json_body())
            )
        self.handle("user.display_name", "change_display_name", action)


class PasswordHandler(ApiHandler):

    def put(self):
        """PUT /users/me/password"""
        def action():
            account = self.authenticate()
            return self.change_password_use_case.execute(
                account, ChangePasswordRequest.from_dict(self.json_body())
            )
        self.handle("user.password", "change_password", action)


class ProfileHandler(ApiHandler):

    def get(self, username: str):
        """GET /users/profile/{username}"""
        def action():
            self.authenticate()
            return self.profile_use_case.execute(username=username)
        self.handle("user.profile", "user_profile", action)


class UsersHandler(ApiHandler):

    def get(self):
        """GET /users - filter, sort and paginate accounts"""
        def action():
            self.authenticate()
            return self.filter_users_use_case.execute(FilterUsersRequest.from_dict(self.query_args()))
        self.handle("user.list", "filter_users", action)


class LeaderboardHandler(ApiHandler):

    def get(self):
        """GET /games/leaderboard"""
        def action():
            self.authenticate()
            return self.leaderboard_use_case.execute(LeaderboardRequest.from_dict(self.query_args()))
        self.handle("game.leaderboard", "leaderboard", action)


class GuessNumberHandler(ApiHandler):

    def post(self):
        """POST /games/guess-number"""
        def action():
            account = self.authenticate()
            return self.guess_number_use_case.execute(account, GuessNumberRequest.from_dict(self.json_body()))
        self.handle("game.guess_number", "guess_number", action)


class ArrangeNumbersHandler(ApiHandler):

    def post(self):
        """POST /games/arrange-numbers"""
        def action():
            account = self.authenticate()
            return self.arrange_numbers_use_case.execute(
                account, ArrangeNumbersRequest.from_dict(self.json_body())
            )
        self.handle("game.arrange_numbers", "arrange_numbers", action)


class PractiseRockPaperScissorsHandler(ApiHandler):

    def post(self):
        """POST /games/rock-paper-scissors/practise"""
        def action():
            account = self.authenticate()
            return self.practise_use_case.execute(
                account, PractiseRockPaperScissorsRequest.from_dict(self.json_body())
            )
        self.handle("game.rock_paper_scissors", "practise_rock_paper_scissors", action)


class PlayRockPaperScissorsHandler(ApiHandler):

    def post(self):
        """POST /games/rock-paper-scissors - duel another player for points"""
        def action():
            account = self.authenticate()
            return self.play_use_case.execute(
                account, PlayRockPaperScissorsRequest.from_dict(self.json_body())
            )
        self.handle("game.rock_paper_scissors", "play_rock_paper_scissors", action)


class BonusHandler(ApiHandler):

    def post(self):
        """POST /games/bonus"""
        self.handle("game.bonus", "claim_bonus", lambda: self.claim_bonus_use_case.execute(
            self.authenticate()
        ))
