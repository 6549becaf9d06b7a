"""
Geometry/Base movement rules

Penguins are placed on single-fish floes first, afterwards they slide in straight lines.
The Game State decides which of the two rules applies.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Self

from penguins.core.shared_types import Team
from penguins.game.coordinate import Coordinate, Direction
from penguins.game.field import FieldState


class Board(Protocol):
    """Just the parts the movement rules need"""

    def state(self, coordinate: Coordinate) -> FieldState: ...
    def locate_team(self, team: Team) -> list[Coordinate]: ...
    def ice_floes(self, fish: Optional[int] = None) -> list[Coordinate]: ...


@dataclass(frozen=True)
class Move:
    """
    A set move only has a destination, a drag move also has the start of the penguin.

    `hints` are free-form debug annotations sent along with the move. They are never interpreted
    and do not take part in comparisons.
    """

    destination: Coordinate
    start: Optional[Coordinate] = None
    hints: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def drag(cls, start: Coordinate, destination: Coordinate) -> Self:
        return cls(destination, start)

    @classmethod
    def set(cls, destination: Coordinate) -> Self:
        return cls(destination)

    @property
    def is_drag_move(self) -> bool:
        return self.start is not None

    def with_hints(self, *hints: str) -> Self:
        return replace(self, hints=self.hints + hints)

    def __str__(self) -> str:
        if self.start is None:
            return f"set ({self.destination.x},{self.destination.y})"
        return f"drag ({self.start.x},{self.start.y}) -> ({self.destination.x},{self.destination.y})"


# --- MOVEMENT RULES ---
def raycasting_moves(start: Coordinate, board: Board, direction: Direction) -> list[Move]:
    """
    Slide along a direction
    -----

    ---
    Walk away from the start one field at the time and collect every ice floe on the way.
    The first field that is not an ice floe (melted, or another penguin) or that lies off the board ends the ray.
    """
    moves: list[Move] = []
    distance = 1
    while True:
        destination = start.step(direction, distance)
        if not destination.is_within_bounds():
            break
        if not board.state(destination).is_ice_floe:
            break
        moves.append(Move.drag(start, destination))
        distance += 1
    return moves


def candidate_drag_moves(start: Coordinate, board: Board) -> list[Move]:
    """A penguin can slide in any of the six hex directions"""
    moves: list[Move] = []
    for direction in Direction:
        moves.extend(raycasting_moves(start, board, direction))
    return moves


def candidate_set_moves(board: Board) -> list[Move]:
    """Placing a penguin is only allowed on floes carrying exactly one fish"""
    return [Move.set(coordinate) for coordinate in board.ice_floes(fish=1)]


def team_drag_moves(team: Team, board: Board) -> list[Move]:
    moves: list[Move] = []
    for start in board.locate_team(team):
        moves.extend(candidate_drag_moves(start, board))
    return moves
