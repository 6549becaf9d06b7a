"""Unit tests for /penguins/logic/strategies.py"""

import random
from unittest.mock import Mock, patch

import pytest

from penguins.core.exceptions import InvalidConfigError
from penguins.core.shared_types import Team
from penguins.game.board import Board
from penguins.game.coordinate import Coordinate
from penguins.game.moves import Move
from penguins.game.state import PLACEMENT_PLIES, GameState
from penguins.logic.strategies import (
    DEFAULT_STRATEGY,
    STRATEGIES,
    GameLogic,
    SelectMoveFn,
    create_logic,
    greedy_move,
    random_move,
)
from penguins.protocol.models import GameResult, Score, ScoreCause, Winner


@pytest.fixture
def sliding_state() -> GameState:
    """ONE on (0,0) can slide right over 1, 2 and 3 fish before hitting water"""
    return GameState(
        Team.ONE, Team.ONE, Board.from_notation("A123.B.."), turn=PLACEMENT_PLIES
    )


@pytest.fixture
def stuck_state() -> GameState:
    return GameState(
        Team.ONE,
        Team.ONE,
        Board.from_notation("A......./......../......B."),
        turn=PLACEMENT_PLIES,
    )


# --- STRATEGIES ---
@pytest.mark.parametrize("select_move", list(STRATEGIES.values()), ids=list(STRATEGIES))
@pytest.mark.parametrize("seed", range(5))
def test_strategies_pick_legal_moves(
    select_move: SelectMoveFn, seed: int, sliding_state: GameState, initial_board: Board
) -> None:
    placement_state = GameState.new_game(Team.TWO, initial_board)
    for state in (sliding_state, placement_state):
        move = select_move(state, random.Random(seed))
        assert move is not None
        assert move in state.possible_moves()


@pytest.mark.parametrize("select_move", list(STRATEGIES.values()), ids=list(STRATEGIES))
def test_strategies_without_moves(select_move: SelectMoveFn, stuck_state: GameState) -> None:
    assert select_move(stuck_state, random.Random(0)) is None


def test_random_move_is_reproducible(initial_board: Board) -> None:
    state = GameState.new_game(Team.ONE, initial_board)
    first = random_move(state, random.Random(42))
    second = random_move(state, random.Random(42))
    assert first == second


def test_greedy_move_takes_most_fish(sliding_state: GameState) -> None:
    move = greedy_move(sliding_state, random.Random(0))
    assert move == Move.drag(Coordinate(0, 0), Coordinate(3, 0))
    assert move is not None
    assert move.hints == ("fish: 3",)


def test_greedy_move_does_not_touch_the_state(sliding_state: GameState) -> None:
    before = sliding_state.copy()
    greedy_move(sliding_state, random.Random(0))
    assert sliding_state == before


# --- GAME LOGIC ---
def test_create_logic() -> None:
    logic = create_logic("greedy", Team.TWO)
    assert logic.team == Team.TWO
    assert logic.select_move is greedy_move

    assert create_logic(DEFAULT_STRATEGY, Team.ONE).select_move is random_move


def test_create_logic_with_unknown_strategy() -> None:
    with pytest.raises(InvalidConfigError):
        create_logic("clairvoyant", Team.ONE)


def test_game_logic_asks_its_strategy(sliding_state: GameState) -> None:
    planned = Move.drag(Coordinate(0, 0), Coordinate(1, 0))
    select_move = Mock(return_value=planned)
    rng = random.Random(7)
    logic = GameLogic(Team.ONE, select_move, rng)

    assert logic.on_move_requested(sliding_state) == planned
    select_move.assert_called_once_with(sliding_state, rng)
    assert logic.game_state is sliding_state


def test_create_logic_looks_up_registered_strategies() -> None:
    select_move = Mock(return_value=None)
    with patch.dict("penguins.logic.strategies.STRATEGIES", {"mock": select_move}):
        logic = create_logic("mock", Team.ONE)
    assert logic.select_move is select_move


def test_game_logic_keeps_latest_state_and_result(
    sliding_state: GameState, stuck_state: GameState
) -> None:
    logic = GameLogic(Team.ONE)
    assert logic.game_state is None
    assert logic.result is None

    logic.on_game_state_updated(sliding_state)
    logic.on_game_state_updated(stuck_state)
    assert logic.game_state is stuck_state

    result = GameResult(
        scores=[Score(cause=ScoreCause.REGULAR, values=["2", "12"])],
        winner=Winner(team=Team.ONE),
    )
    logic.on_game_result_received(result)
    logic.on_game_ended()
    assert logic.result == result
