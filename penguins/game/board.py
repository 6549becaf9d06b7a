"""The game board: a fixed square array of fields, indexed [x][y]"""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from penguins.core.shared_types import Team
from penguins.game.coordinate import BOARD_SIZE, Coordinate
from penguins.game.field import Field, FieldState


@dataclass
class Board:
    fields: list[list[Field]]

    @classmethod
    def empty(cls) -> Self:
        return cls(
            [
                [Field(Coordinate(x, y)) for y in range(BOARD_SIZE)]
                for x in range(BOARD_SIZE)
            ]
        )

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its compact text form.

        Rows are separated by slashes, starting with row y=0. Every row holds one character per field:
        * '.' an empty field (no ice floe)
        * '1' - '9' an ice floe with that many fish
        * 'A' / 'B' a penguin of team ONE / TWO

        ex) "1.2A..../..." -> (0,0) has one fish, (1,0) is empty, (2,0) two fish, (3,0) a penguin of team ONE
        """
        board = cls.empty()
        for y, row in enumerate(notation.split("/")):
            for x, symbol in enumerate(row):
                board.set(Field(Coordinate(x, y), FieldState.from_symbol(symbol)))
        return board

    def to_notation(self) -> str:
        return "/".join(
            "".join(self.get(x, y).state.to_symbol() for x in range(BOARD_SIZE))
            for y in range(BOARD_SIZE)
        )

    def get(self, x: int, y: int) -> Field:
        return self.fields[x][y]

    def field(self, coordinate: Coordinate) -> Field:
        return self.get(coordinate.x, coordinate.y)

    def state(self, coordinate: Coordinate) -> FieldState:
        return self.field(coordinate).state

    def set(self, field: Field) -> None:
        """Replace the field at `field.coordinate`. No bounds checking."""
        self.fields[field.coordinate.x][field.coordinate.y] = field

    def __iter__(self) -> Iterator[Field]:
        """Column by column, i.e. (0,0), (0,1), ..., (1,0), ..."""
        for column in self.fields:
            yield from column

    def locate_team(self, team: Team) -> list[Coordinate]:
        return [field.coordinate for field in self if field.state.is_occupied_by(team)]

    def ice_floes(self, fish: Optional[int] = None) -> list[Coordinate]:
        """All ice floes, or only those carrying exactly `fish` fish"""
        return [
            field.coordinate
            for field in self
            if field.state.is_ice_floe and (fish is None or field.state.fish == fish)
        ]

    def total_fish(self) -> int:
        """Tally the fish still floating around on the board"""
        return sum(field.state.fish for field in self)
