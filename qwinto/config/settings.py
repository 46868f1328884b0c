"""
Qwinto - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Every variable is prefixed with QWINTO_, e.g. QWINTO_PLAYERS=3.
"""

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from qwinto.engine.base import (
    DEFAULT_MISS_POINTS,
    DEFAULT_NUM_DICE_ROLLS,
    DEFAULT_NUM_PLAYERS,
    DEFAULT_TERMINATION_POINTS,
    MAX_PLAYERS,
    MIN_PLAYERS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game
    players: int = Field(default=DEFAULT_NUM_PLAYERS, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    returns_type: Literal["win_loss", "point_difference", "total_points"] = "total_points"
    termination_points: int = Field(default=DEFAULT_TERMINATION_POINTS, lt=0)
    miss_points: int = Field(default=DEFAULT_MISS_POINTS, lt=0)
    num_dice_rolls: int = Field(default=DEFAULT_NUM_DICE_ROLLS, ge=1)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="QWINTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def game_parameters(self) -> dict[str, Any]:
        """Parameters for QwintoGame / load_game."""
        return {
            "players": self.players,
            "returns_type": self.returns_type,
            "termination_points": self.termination_points,
            "miss_points": self.miss_points,
            "num_dice_rolls": self.num_dice_rolls,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
