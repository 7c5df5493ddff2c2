from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from snakeclient.common.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SNAKE_NAME,
    DEFAULT_VENUE,
)


class Venue(str, Enum):
    TRAINING = "training"
    TOURNAMENT = "tournament"

    @classmethod
    def parse(cls, value: str) -> Venue:
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown venue {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class Settings:
    """Process defaults loaded from environment variables.

    The CLI uses these as argument defaults; anything given on the command
    line wins.
    """

    host: str = os.getenv("SNAKE_HOST", DEFAULT_HOST)
    port: int = int(os.getenv("SNAKE_PORT", str(DEFAULT_PORT)))
    venue: str = os.getenv("SNAKE_VENUE", DEFAULT_VENUE)
    snake_name: str = os.getenv("SNAKE_NAME", DEFAULT_SNAKE_NAME)
    log_level: str = os.getenv("SNAKE_LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class Config:
    """Connection parameters for one session. Never mutated after start."""

    host: str
    port: int
    venue: Venue
    display_name: str

    @property
    def url(self) -> str:
        return f"ws://{self.host}:{self.port}/{self.venue.value}"

    @property
    def is_training(self) -> bool:
        return self.venue is Venue.TRAINING


settings = Settings()
