"""Client configuration, usually filled in from the command line"""

from typing import Optional

from pydantic import BaseModel, field_validator

from penguins.core.exceptions import InvalidConfigError
from penguins.logic.strategies import DEFAULT_STRATEGY, STRATEGIES

EXECUTABLE_NAME = "penguins-client"
VERSION = "0.1.0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 13050


class ClientConfig(BaseModel):
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    reservation: Optional[str] = None
    strategy: str = DEFAULT_STRATEGY
    timeout: Optional[float] = None

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 2**16:
            raise InvalidConfigError(f"{value} is not a valid port number.")
        return value

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, value: str) -> str:
        if value not in STRATEGIES:
            raise InvalidConfigError(
                f"Unknown strategy {value!r}. Pick one from {', '.join(STRATEGIES)}."
            )
        return value

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise InvalidConfigError("The read timeout must be positive.")
        return value
