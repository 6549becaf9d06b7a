"""
The GameState is the single source of truth of a running game.
It owns the board and is responsible for generating and applying moves. The protocol layer is its only writer;
everybody else (the move strategies) works on copies.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from penguins.core.shared_types import Team
from penguins.game.board import Board
from penguins.game.coordinate import Coordinate
from penguins.game.field import Field, FieldState
from penguins.game.moves import Move, candidate_set_moves, team_drag_moves

PENGUINS_PER_TEAM = 4
# Both teams place all their penguins before anyone may slide
PLACEMENT_PLIES = 2 * PENGUINS_PER_TEAM


@dataclass
class GameState:
    start_team: Team
    current_team: Team
    board: Board = field(default_factory=Board.empty)
    turn: int = 0
    fish: dict[Team, int] = field(default_factory=lambda: {team: 0 for team in Team})

    @classmethod
    def new_game(cls, start_team: Team, board: Optional[Board] = None) -> Self:
        """Empty board (or the given one), the start team is to move."""
        return cls(
            start_team=start_team,
            current_team=start_team,
            board=board if board is not None else Board.empty(),
        )

    def copy(self) -> Self:
        """Independent snapshot: changing the copy never touches this state (and vice versa)."""
        return deepcopy(self)

    # --- BOARD ACCESS ---
    def get_field(self, coordinate: Coordinate) -> Field:
        return self.board.field(coordinate)

    def set_field(self, field: Field) -> None:
        self.board.set(field)

    def fish_count(self, team: Team) -> int:
        return self.fish[team]

    @property
    def player_one_fish_count(self) -> int:
        return self.fish[Team.ONE]

    @property
    def player_two_fish_count(self) -> int:
        return self.fish[Team.TWO]

    @property
    def is_placement_phase(self) -> bool:
        return self.turn < PLACEMENT_PLIES

    # --- RULES ---
    def possible_moves(self) -> list[Move]:
        """
        Moves the current team may play
        ----

        ----
        * placement phase: a set move onto every floe with a single fish
        * afterwards: every slide of every penguin of the current team

        The order is generation order and carries no meaning.
        """
        if self.is_placement_phase:
            return candidate_set_moves(self.board)
        return team_drag_moves(self.current_team, self.board)

    def can_move(self) -> bool:
        return len(self.possible_moves()) > 0

    def perform_move(self, move: Move) -> bool:
        """
        Apply a move for the current team.
        ----

        The move is NOT checked against `possible_moves()` (that would be far too slow in search loops),
        only the start and destination fields are looked at:

        * drag move: start holds a penguin of the current team, destination is an ice floe
        * set move: destination is an ice floe with exactly one fish

        Returns False (and leaves the state untouched) if these do not hold.
        """
        destination = self.board.state(move.destination)
        if not destination.is_ice_floe:
            return False

        if move.start is not None:
            if not self.board.state(move.start).is_occupied_by(self.current_team):
                return False
            self.set_field(Field(move.start))
        elif destination.fish != 1:
            return False

        self.set_field(
            Field(move.destination, FieldState.occupied(self.current_team))
        )
        self.fish[self.current_team] += destination.fish

        self.turn += 1
        self.current_team = self.current_team.opponent
        return True

    def skip_move(self) -> None:
        """The current team cannot (or did not) move: just hand over to the opponent. Turn counter stays."""
        self.current_team = self.current_team.opponent
