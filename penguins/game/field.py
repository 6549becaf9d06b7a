"""Defines what can be on a single field of the board"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from penguins.core.shared_types import Team
from penguins.game.coordinate import Coordinate


class FieldKind(Enum):
    EMPTY = auto()
    ICE_FLOE = auto()
    OCCUPIED = auto()


# Single characters used by Board.from_notation / Board.to_notation
EMPTY_SYMBOL = "."
TEAM_TO_SYMBOL: dict[Team, str] = {Team.ONE: "A", Team.TWO: "B"}
SYMBOL_TO_TEAM: dict[str, Team] = {value: key for key, value in TEAM_TO_SYMBOL.items()}


@dataclass(frozen=True)
class FieldState:
    """
    Exactly one of: nothing (the floe has melted), an ice floe carrying fish, or a penguin.

    Use the constructors below rather than the raw fields, they keep the combinations consistent.
    """

    kind: FieldKind
    fish: int = 0
    team: Optional[Team] = None

    @classmethod
    def empty(cls) -> Self:
        return cls(FieldKind.EMPTY)

    @classmethod
    def ice_floe(cls, fish: int) -> Self:
        # a floe without any fish is just water
        if fish < 0:
            raise ValueError(f"An ice floe cannot carry {fish} fish.")
        if fish == 0:
            return cls.empty()
        return cls(FieldKind.ICE_FLOE, fish=fish)

    @classmethod
    def occupied(cls, team: Team) -> Self:
        return cls(FieldKind.OCCUPIED, team=team)

    @classmethod
    def from_token(cls, token: str) -> Self:
        """Content of a <field> element: either a team ("ONE") or the number of fish ("0" - "4")"""
        token = token.strip()
        if token in {team.value for team in Team}:
            return cls.occupied(Team(token))
        if not token.isdigit():
            raise ValueError(f"Cannot interpret field content {token!r}.")
        return cls.ice_floe(int(token))

    @classmethod
    def from_symbol(cls, symbol: str) -> Self:
        if symbol == EMPTY_SYMBOL:
            return cls.empty()
        if symbol in SYMBOL_TO_TEAM:
            return cls.occupied(SYMBOL_TO_TEAM[symbol])
        return cls.ice_floe(int(symbol))

    def to_symbol(self) -> str:
        if self.kind == FieldKind.OCCUPIED:
            assert self.team is not None
            return TEAM_TO_SYMBOL[self.team]
        if self.kind == FieldKind.ICE_FLOE:
            return str(self.fish)
        return EMPTY_SYMBOL

    @property
    def is_empty(self) -> bool:
        return self.kind == FieldKind.EMPTY

    @property
    def is_ice_floe(self) -> bool:
        return self.kind == FieldKind.ICE_FLOE

    def is_occupied_by(self, team: Team) -> bool:
        return self.kind == FieldKind.OCCUPIED and self.team == team


@dataclass(frozen=True)
class Field:
    coordinate: Coordinate
    state: FieldState = field(default_factory=FieldState.empty)

    def is_occupiable(self) -> bool:
        """Penguins can only land on ice floes (any amount of fish)"""
        return self.state.is_ice_floe
