"""Contract between the protocol handler and whatever decides on the moves."""

from typing import Optional, Protocol

from penguins.core.shared_types import Team
from penguins.game.moves import Move
from penguins.game.state import GameState
from penguins.protocol.models import GameResult


class GameHandlerDelegate(Protocol):
    """
    Game logic driven by the GameHandler

    Every GameState handed over is a private copy, the delegate may keep it around.
    """

    team: Team

    def on_move_requested(self, game_state: GameState) -> Optional[Move]:
        """Return the move to send. Must be legal: nobody checks it before it goes out."""
        ...

    def on_game_state_updated(self, game_state: GameState) -> None: ...

    def on_game_ended(self) -> None: ...

    def on_game_result_received(self, result: GameResult) -> None: ...
