"""
Outbound protocol messages
-----

Everything the client ever sends is built here. Coordinates leave the client as doubled coordinates.
"""

from typing import Optional
from xml.sax.saxutils import quoteattr

from penguins.game.coordinate import Coordinate
from penguins.game.moves import Move


def join_message(reservation: Optional[str] = None) -> str:
    """Opens the protocol and joins any open game, or the prepared one if a reservation code is given."""
    if not reservation:
        return "<protocol><join />"
    return f"<protocol><joinPrepared reservationCode={quoteattr(reservation)} />"


def _coordinate_element(name: str, coordinate: Coordinate) -> str:
    doubled = coordinate.to_doubled()
    return f'<{name} x="{doubled.x}" y="{doubled.y}" />'


def move_data(move: Optional[Move]) -> str:
    """The body of <data class="move">. Empty if there is no move to send."""
    if move is None:
        return ""
    elements: list[str] = []
    if move.start is not None:
        elements.append(_coordinate_element("from", move.start))
    elements.append(_coordinate_element("to", move.destination))
    elements.extend(f"<hint content={quoteattr(hint)} />" for hint in move.hints)
    return "".join(elements)


def move_message(room_id: str, move: Optional[Move]) -> str:
    return f'<room roomId={quoteattr(room_id)}><data class="move">{move_data(move)}</data></room>'
