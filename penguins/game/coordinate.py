"""
A coordinate on the board and the six directions a penguin can slide in

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# The board is always 8x8 fields
BOARD_SIZE = 8

Vector = tuple[int, int]


class Direction(Enum):
    """Values are the names the game server uses."""

    UP_RIGHT = "UP_RIGHT"
    RIGHT = "RIGHT"
    DOWN_RIGHT = "DOWN_RIGHT"
    DOWN_LEFT = "DOWN_LEFT"
    LEFT = "LEFT"
    UP_LEFT = "UP_LEFT"

    @property
    def vector(self) -> Vector:
        return DIRECTION_VECTORS[self]


# One step in each direction, expressed in doubled coordinates.
# Moving sideways skips a column in doubled space, diagonals shift by one column and one row.
DIRECTION_VECTORS: dict[Direction, Vector] = {
    Direction.UP_RIGHT: (1, -1),
    Direction.RIGHT: (2, 0),
    Direction.DOWN_RIGHT: (1, 1),
    Direction.DOWN_LEFT: (-1, 1),
    Direction.LEFT: (-2, 0),
    Direction.UP_LEFT: (-1, -1),
}


@dataclass(frozen=True)
class Coordinate:
    """
    Board coordinate
    ----

    ---
    `x` is the column and `y` the row of the board array. Odd rows are shifted half a field to the right,
    which is what turns the square array into a hex grid.

    The wire protocol talks in *doubled* coordinates instead: every row uses only every other column
    (even columns on even rows, odd columns on odd rows), so that hex neighbours are plain integer offsets.
    """

    x: int
    y: int

    @classmethod
    def from_doubled(cls, x: int, y: int) -> Coordinate:
        """doubled (x, y) -> board (ceil(x / 2) - y mod 2, y)"""
        return cls(-(-x // 2) - y % 2, y)

    def to_doubled(self) -> Coordinate:
        return Coordinate(self.x * 2 + self.y % 2, self.y)

    def step(self, direction: Direction, distance: int = 1) -> Coordinate:
        """The coordinate `distance` fields away in `direction`. No bounds checking, callers take care of that."""
        doubled = self.to_doubled()
        dx, dy = direction.vector
        return Coordinate.from_doubled(doubled.x + dx * distance, doubled.y + dy * distance)

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_SIZE) and (0 <= self.y < BOARD_SIZE)
