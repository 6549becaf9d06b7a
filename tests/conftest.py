"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Optional

import pytest

from penguins.game.board import Board
from penguins.game.coordinate import BOARD_SIZE, Coordinate
from penguins.game.moves import Move

EMPTY_BOARD = "/".join(["." * BOARD_SIZE] * BOARD_SIZE)

# A full board as the server would hand it out: single-fish floes scattered around, a couple of melted fields
INITIAL_BOARD = "/".join(
    [
        "12131.41",
        "21222324",
        "13.33343",
        "14243444",
        "11112222",
        "33334.44",
        "12121212",
        "3.3.3.3.",
    ]
)

SYMBOL_TO_TOKEN: dict[str, str] = {".": "0", "A": "ONE", "B": "TWO"}


@pytest.fixture
def board_with_penguins() -> Callable[[dict[Coordinate, str], str], Board]:
    """Call the inner function with the penguins to place ('A' or 'B' per coordinate) on top of a base board"""

    def _create_board(
        penguins: dict[Coordinate, str], base: str = INITIAL_BOARD
    ) -> Board:
        rows = [list(row) for row in base.split("/")]
        for coordinate, symbol in penguins.items():
            rows[coordinate.y][coordinate.x] = symbol
        return Board.from_notation("/".join("".join(row) for row in rows))

    return _create_board


def _coordinate_xml(name: str, coordinate: Coordinate) -> str:
    doubled = coordinate.to_doubled()
    return f'<{name} x="{doubled.x}" y="{doubled.y}"/>'


@pytest.fixture
def memento_xml() -> Callable[..., str]:
    """
    Call the inner function to get a memento (state update) like the server sends it.
    ---

    * board: notation string (see Board.from_notation), sent as 64 <field> elements, row by row
    * last_move: reported as <lastMove> in doubled coordinates
    * passed: report an empty <lastMove/> instead
    """

    def _memento(
        board: str = INITIAL_BOARD,
        start_team: str = "ONE",
        turn: int = 0,
        last_move: Optional[Move] = None,
        passed: bool = False,
        room_id: str = "room-1",
    ) -> str:
        rows = board.split("/")
        board_xml = "".join(
            "<list>"
            + "".join(
                f"<field>{SYMBOL_TO_TOKEN.get(symbol, symbol)}</field>" for symbol in row
            )
            + "</list>"
            for row in rows
        )

        last_move_xml = ""
        if passed:
            last_move_xml = "<lastMove/>"
        elif last_move is not None:
            from_xml = (
                _coordinate_xml("from", last_move.start)
                if last_move.start is not None
                else ""
            )
            last_move_xml = (
                f"<lastMove>{from_xml}{_coordinate_xml('to', last_move.destination)}</lastMove>"
            )

        return (
            f'<room roomId="{room_id}"><data class="memento">'
            f'<state class="state" turn="{turn}">'
            f"<startTeam>{start_team}</startTeam>"
            f"<board>{board_xml}</board>"
            f"{last_move_xml}"
            f"<fishes><int>0</int><int>0</int></fishes>"
            f"</state></data></room>"
        )

    return _memento


@pytest.fixture
def initial_board() -> Board:
    return Board.from_notation(INITIAL_BOARD)
