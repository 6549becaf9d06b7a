"""Models of the data the server sends once the game is over"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from penguins.core.shared_types import Team


class ScoreCause(StrEnum):
    """Why a player got the score it got. Values are the server's names."""

    REGULAR = "REGULAR"
    LEFT = "LEFT"
    RULE_VIOLATION = "RULE_VIOLATION"
    SOFT_TIMEOUT = "SOFT_TIMEOUT"
    HARD_TIMEOUT = "HARD_TIMEOUT"
    UNKNOWN = "UNKNOWN"


class Score(BaseModel):
    cause: ScoreCause
    reason: Optional[str] = None
    values: list[str] = Field(default_factory=list)

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, value: Optional[str]) -> Optional[str]:
        # the server sends reason="" for regular scores
        if value is not None and not value.strip():
            return None
        return value


class Winner(BaseModel):
    team: Team
    display_name: Optional[str] = None


class GameResult(BaseModel):
    scores: list[Score]
    winner: Optional[Winner] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None
