"""
The GameHandler talks to the game server for the whole lifetime of one game.
----

It consumes the server's XML stream element by element (SAX style), keeps the GameState in sync with what the
server reports, answers move requests with whatever the delegate (game logic) decides, and tells the delegate
about everything else that happens.

The server never sends a document, just a stream of sibling elements after an opening <protocol>.
One incremental parser is kept for the whole game and a synthetic <root> element is fed to it first,
so every read from the network can be fed as it arrives, no matter where the server's message got cut.
"""

import logging
import xml.sax
from enum import Enum, auto
from typing import Callable, Optional, Protocol
from xml.sax.handler import ContentHandler, feature_external_ges
from xml.sax.xmlreader import AttributesImpl

from penguins.core.exceptions import ProtocolError
from penguins.core.shared_types import Team
from penguins.game.coordinate import BOARD_SIZE, Coordinate
from penguins.game.field import Field, FieldState
from penguins.game.moves import Move
from penguins.game.state import GameState
from penguins.protocol.delegate import GameHandlerDelegate
from penguins.protocol.messages import join_message, move_message
from penguins.protocol.models import GameResult, Score, ScoreCause, Winner

logger = logging.getLogger(__name__)

ROOT_ELEMENT = b"<root>"


class Transport(Protocol):
    """Just the parts of a connection the handler needs"""

    def send(self, message: str) -> None: ...
    def receive(self) -> bytes: ...


DelegateFactory = Callable[[Team], GameHandlerDelegate]


class SkipPolicy(Enum):
    """
    How the handler notices that a team had to pass
    ----

    The server does not announce skipped turns, they have to be inferred.

    * LAST_MOVE: look at the reported last move. If the penguin that moved does not belong to the team we think
      is to move, that team passed first. A move request while the opponent is (supposedly) to move means the
      opponent passed as well. A <lastMove> without coordinates is a pass.
    * STATE_BOUNDARY: every state after the first stands for one elapsed turn. If no reported last move was
      applied while reading it, the team to move passed.
    """

    LAST_MOVE = auto()
    STATE_BOUNDARY = auto()


class GameHandler(ContentHandler):
    def __init__(
        self,
        transport: Transport,
        delegate_factory: DelegateFactory,
        reservation: Optional[str] = None,
        skip_policy: SkipPolicy = SkipPolicy.LAST_MOVE,
    ) -> None:
        super().__init__()
        self.transport = transport
        self.delegate_factory = delegate_factory
        self.reservation = reservation
        self.skip_policy = skip_policy

        self.delegate: Optional[GameHandlerDelegate] = None
        self.room_id: Optional[str] = None
        self.game_state: Optional[GameState] = None
        self.game_state_created = False
        self.leave_game = False

        # terminal phase
        self.score: Optional[Score] = None
        self.scores: list[Score] = []
        self.winner: Optional[Winner] = None
        self.game_result_received = False

        # parse context
        self.field_index = 0
        self.found_chars = ""
        self.last_move_start: Optional[Coordinate] = None
        self.last_move_destination: Optional[Coordinate] = None
        self.move_applied_in_state = False
        self._open_elements: list[str] = []

        self._start_handlers: dict[str, Callable[[AttributesImpl], None]] = {
            "data": self._start_data,
            "from": self._start_from,
            "joined": self._start_joined,
            "lastMove": self._start_last_move,
            "left": self._start_left,
            "score": self._start_score,
            "state": self._start_state,
            "to": self._start_to,
            "winner": self._start_winner,
        }
        self._end_handlers: dict[str, Callable[[], None]] = {
            "data": self._end_data,
            "field": self._end_field,
            "lastMove": self._end_last_move,
            "part": self._end_part,
            "score": self._end_score,
            "startTeam": self._end_start_team,
            "state": self._end_state,
        }

        self._parser = xml.sax.make_parser()
        self._parser.setFeature(feature_external_ges, False)
        self._parser.setContentHandler(self)
        self._parser.feed(ROOT_ELEMENT)

    # --- READ LOOP ---
    def handle_game(self) -> None:
        """Join a game and process the server's messages until the game is over. Transport must be connected."""
        self.transport.send(join_message(self.reservation))
        while not self.leave_game:
            self.feed(self.transport.receive())

    def feed(self, data: bytes | str) -> None:
        """Process one chunk of the server's stream. Chunks do not need to end on element boundaries."""
        if self.leave_game:
            return
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            self._parser.feed(data)
            # expat >= 2.6 may hold back a partially received token until a lot more data arrives
            if hasattr(self._parser, "flush"):
                self._parser.flush()
        except xml.sax.SAXParseException as exc:
            raise ProtocolError(f"The server sent malformed XML: {exc}") from exc

    # --- SAX CALLBACKS ---
    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        if self.leave_game:
            return
        self._open_elements.append(name)
        self.found_chars = ""
        handler = self._start_handlers.get(name)
        if handler is not None:
            handler(attrs)

    def characters(self, content: str) -> None:
        self.found_chars += content

    def endElement(self, name: str) -> None:
        if self.leave_game:
            return
        self._open_elements.pop()
        handler = self._end_handlers.get(name)
        if handler is not None:
            handler()

    # --- ELEMENT OPENED ---
    def _start_data(self, attrs: AttributesImpl) -> None:
        data_class = attrs.get("class")
        if data_class is None:
            raise ProtocolError("The class attribute of the data element is missing!")

        if data_class == "moveRequest":
            self._request_move()
        elif data_class == "result":
            self.game_result_received = True
        elif data_class == "welcomeMessage":
            team = _parse_team(attrs.get("color"))
            if team is None:
                raise ProtocolError(
                    "The team of the welcome message is missing or could not be parsed!"
                )
            logger.info("Playing as team %s", team)
            self.delegate = self.delegate_factory(team)
        elif data_class == "error":
            logger.error("The server reported an error: %s", attrs.get("message"))

    def _start_from(self, attrs: AttributesImpl) -> None:
        if self._parent_element() == "lastMove":
            self.last_move_start = _parse_doubled_coordinate(attrs, "start")

    def _start_to(self, attrs: AttributesImpl) -> None:
        if self._parent_element() == "lastMove":
            self.last_move_destination = _parse_doubled_coordinate(attrs, "destination")

    def _start_joined(self, attrs: AttributesImpl) -> None:
        room_id = attrs.get("roomId")
        if room_id is None:
            raise ProtocolError("The room ID is missing!")
        logger.info("Joined room %s", room_id)
        self.room_id = room_id

    def _start_last_move(self, attrs: AttributesImpl) -> None:
        self.last_move_start = None
        self.last_move_destination = None

    def _start_left(self, attrs: AttributesImpl) -> None:
        logger.info("Left the room")
        if self.delegate is not None:
            self.delegate.on_game_ended()
        self.leave_game = True

    def _start_score(self, attrs: AttributesImpl) -> None:
        cause = attrs.get("cause")
        if cause not in ScoreCause.__members__:
            raise ProtocolError(f"The score could not be parsed! cause={cause!r}")
        self.score = Score(cause=ScoreCause(cause), reason=attrs.get("reason"))

    def _start_state(self, attrs: AttributesImpl) -> None:
        self.field_index = 0
        self.move_applied_in_state = False

    def _start_winner(self, attrs: AttributesImpl) -> None:
        team = _parse_team(attrs.get("team") or attrs.get("color"))
        if team is None:
            raise ProtocolError("The winner could not be parsed!")
        self.winner = Winner(team=team, display_name=attrs.get("displayName"))

    # --- ELEMENT CLOSED ---
    def _end_data(self) -> None:
        if not self.game_result_received:
            return
        result = GameResult(scores=self.scores, winner=self.winner)
        logger.info(
            "Game result received. Winner: %s",
            result.winner.team if result.winner else "none (draw)",
        )
        if self.delegate is not None:
            self.delegate.on_game_result_received(result)
        self.leave_game = True

    def _end_field(self) -> None:
        # only the initial board is read, afterwards the board evolves through the reported moves
        if self.game_state_created:
            return
        if self.game_state is None:
            raise ProtocolError("Field data received before the start team!")
        if self.field_index >= BOARD_SIZE * BOARD_SIZE:
            raise ProtocolError("The server sent more fields than the board has!")

        coordinate = Coordinate(
            self.field_index % BOARD_SIZE, self.field_index // BOARD_SIZE
        )
        try:
            state = FieldState.from_token(self.found_chars)
        except ValueError as exc:
            raise ProtocolError("The field data could not be parsed!") from exc
        self.game_state.set_field(Field(coordinate, state))
        self.field_index += 1

    def _end_last_move(self) -> None:
        if not self.game_state_created:
            return
        assert self.game_state is not None

        start = self.last_move_start
        destination = self.last_move_destination
        self.last_move_start = None
        self.last_move_destination = None

        if destination is None:
            if self.skip_policy == SkipPolicy.LAST_MOVE:
                logger.info("No last move reported, %s passed", self.game_state.current_team)
                self.game_state.skip_move()
            return

        if start is None:
            move = Move.set(destination)
        else:
            move = Move.drag(start, destination)
            if self.skip_policy == SkipPolicy.LAST_MOVE and self.game_state.board.state(
                start
            ).is_occupied_by(self.game_state.current_team.opponent):
                logger.info("%s passed", self.game_state.current_team)
                self.game_state.skip_move()

        if not self.game_state.perform_move(move):
            raise ProtocolError(
                f"The last move ({move}) could not be performed on the game state!"
            )
        self.move_applied_in_state = True

    def _end_part(self) -> None:
        if self.score is not None:
            self.score.values.append(self.found_chars)

    def _end_score(self) -> None:
        if self.score is not None:
            self.scores.append(self.score)
            self.score = None

    def _end_start_team(self) -> None:
        if self.game_state is not None:
            return
        start_team = _parse_team(self.found_chars)
        if start_team is None:
            raise ProtocolError("The start team could not be parsed!")
        self.game_state = GameState.new_game(start_team)

    def _end_state(self) -> None:
        if self.game_state is None:
            raise ProtocolError("A state was received without a start team!")

        if (
            self.skip_policy == SkipPolicy.STATE_BOUNDARY
            and self.game_state_created
            and not self.move_applied_in_state
        ):
            logger.info("No move in this state, %s passed", self.game_state.current_team)
            self.game_state.skip_move()

        self.game_state_created = True
        logger.debug(
            "Turn %d, %s to move, board %s",
            self.game_state.turn,
            self.game_state.current_team,
            self.game_state.board.to_notation(),
        )
        if self.delegate is not None:
            self.delegate.on_game_state_updated(self.game_state.copy())

    # --- MOVE REQUEST ---
    def _request_move(self) -> None:
        """Ask the delegate for a move and send it right away."""
        if self.game_state is None or self.delegate is None or self.room_id is None:
            raise ProtocolError("A move was requested before the game was set up!")

        if (
            self.skip_policy == SkipPolicy.LAST_MOVE
            and self.delegate.team != self.game_state.current_team
        ):
            # the opponent could not move and it is our turn again
            logger.info("%s passed", self.game_state.current_team)
            self.game_state.skip_move()
            self.delegate.on_game_state_updated(self.game_state.copy())

        move = self.delegate.on_move_requested(self.game_state.copy())
        if move is None:
            logger.warning("The game logic did not return a move, sending an empty one")
        else:
            logger.info("Sending move %s", move)
        self.transport.send(move_message(self.room_id, move))

    # -- PRIVATE HELPERS ---
    def _parent_element(self) -> Optional[str]:
        """Name of the element enclosing the one that was just opened"""
        return self._open_elements[-2] if len(self._open_elements) > 1 else None


def _parse_team(value: Optional[str]) -> Optional[Team]:
    if value is None:
        return None
    value = value.strip()
    return Team(value) if value in {team.value for team in Team} else None


def _parse_doubled_coordinate(attrs: AttributesImpl, name: str) -> Coordinate:
    try:
        return Coordinate.from_doubled(int(attrs["x"]), int(attrs["y"]))
    except (KeyError, ValueError) as exc:
        raise ProtocolError(
            f"The {name} coordinate of the last move could not be parsed!"
        ) from exc
