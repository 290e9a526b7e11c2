"""Rock-Paper-Scissors practice use case"""
from scorekeeper.application.dto.game_requests import PractiseRockPaperScissorsRequest
from scorekeeper.application.dto.server_api_response import ServerApiResponse
from scorekeeper.application.ports.random_source_port import RandomSourcePort
from scorekeeper.application.use_cases.base_use_case import BaseUseCase
from scorekeeper.domain.entities.user_account import UserAccount
from scorekeeper.domain.games import rock_paper_scissors as rps
from scorekeeper.domain.games.rock_paper_scissors import DuelResult
from scorekeeper.metrics import track_action

_VERDICTS = {
    DuelResult.DRAW: "It is a draw.",
    DuelResult.WIN: "You won!",
    DuelResult.LOSE: "You lost...",
}


class PractiseRockPaperScissorsUseCase(BaseUseCase):
    """Play against the house for fun; nothing is stored"""

    action = "practise_rock_paper_scissors"

    def __init__(self, random_source: RandomSourcePort):
        self.random_source = random_source

    def execute(self, account: UserAccount, request: PractiseRockPaperScissorsRequest) -> ServerApiResponse:
        return self._respond(lambda: self._play(request))

    def _play(self, request: PractiseRockPaperScissorsRequest) -> ServerApiResponse:
        outcome = rps.practise(rps.parse_hand(request.choice), self.random_source)
        track_action(self.action, outcome.result.value)
        message = (
            f"Your choice: {{ {outcome.hand.value} }} versus Opponent's choice: "
            f"{{ {outcome.opponent_hand.value} }} | {_VERDICTS[outcome.result]} Use this endpoint to play again."
        )
        return ServerApiResponse.ok(
            message=message,
            data={
                "your_choice": outcome.hand.value,
                "opponent_choice": outcome.opponent_hand.value,
                "result": outcome.result.value,
            }
        )
