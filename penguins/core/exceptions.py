"""
Exceptions shared by all layers.

Only the CLI converts these into exit codes; everything below it lets them propagate.
"""


class PenguinsError(Exception):
    """Top-level error of this package"""


class ProtocolError(PenguinsError):
    """The server sent something the client cannot make sense of (or that contradicts the tracked game state)."""


class TransportError(PenguinsError):
    """The connection to the game server broke down."""


class InvalidConfigError(PenguinsError):
    """A configuration value (usually coming from the command line) is not usable."""
