"""
Type definitions used across layers
"""

from enum import StrEnum


class Team(StrEnum):
    """The two players. Values are the tokens the game server uses on the wire."""

    ONE = "ONE"
    TWO = "TWO"

    @property
    def opponent(self) -> "Team":
        return Team.TWO if self == Team.ONE else Team.ONE
