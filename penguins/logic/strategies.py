"""
Game logic: picks the moves the client plays.

Key idea: Use strategy pattern. A strategy is a plain function choosing among the legal moves,
GameLogic wraps it into the delegate the protocol handler talks to.
"""

import logging
import random
from typing import Callable, Optional

from penguins.core.exceptions import InvalidConfigError
from penguins.core.shared_types import Team
from penguins.game.moves import Move
from penguins.game.state import GameState
from penguins.protocol.models import GameResult

logger = logging.getLogger(__name__)


# --- STRATEGIES ---
def random_move(game_state: GameState, rng: random.Random) -> Optional[Move]:
    """Any legal move will do"""
    moves = game_state.possible_moves()
    if not moves:
        return None
    return rng.choice(moves)


def greedy_move(game_state: GameState, rng: random.Random) -> Optional[Move]:
    """Grab the floe with the most fish. Ties are broken randomly."""
    moves = game_state.possible_moves()
    if not moves:
        return None
    most_fish = max(game_state.board.state(move.destination).fish for move in moves)
    best_moves = [
        move
        for move in moves
        if game_state.board.state(move.destination).fish == most_fish
    ]
    return rng.choice(best_moves).with_hints(f"fish: {most_fish}")


# -- STRATEGY PATTERN: MOVE SELECTION ---
SelectMoveFn = Callable[[GameState, random.Random], Optional[Move]]
STRATEGIES: dict[str, SelectMoveFn] = {
    "random": random_move,
    "greedy": greedy_move,
}
DEFAULT_STRATEGY = "random"


class GameLogic:
    """Implements GameHandlerDelegate on top of a move selection strategy."""

    def __init__(
        self,
        team: Team,
        select_move: SelectMoveFn = random_move,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.team = team
        self.select_move = select_move
        self.rng = rng if rng is not None else random.Random()
        self.game_state: Optional[GameState] = None
        self.result: Optional[GameResult] = None

    def on_game_ended(self) -> None:
        logger.info("The game has ended")

    def on_game_result_received(self, result: GameResult) -> None:
        logger.info("The game result has been received")
        self.result = result

    def on_game_state_updated(self, game_state: GameState) -> None:
        logger.debug("The game state has been updated (turn %d)", game_state.turn)
        self.game_state = game_state

    def on_move_requested(self, game_state: GameState) -> Optional[Move]:
        logger.debug("A move is requested by the game server")
        self.game_state = game_state
        return self.select_move(game_state, self.rng)


def create_logic(strategy: str, team: Team) -> GameLogic:
    """Look up the strategy by name and build the game logic for `team`"""
    if strategy not in STRATEGIES:
        raise InvalidConfigError(
            f"Unknown strategy {strategy!r}. Pick one from {', '.join(STRATEGIES)}."
        )
    return GameLogic(team, STRATEGIES[strategy])
