"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Each nested group has its own prefix (``SKIFREE_DISPLAY_``, ``SKIFREE_AI_``,
``SKIFREE_GAME_``); the API key is also accepted as plain ``GEMINI_API_KEY``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """Display-related settings."""

    model_config = SettingsConfigDict(env_prefix="SKIFREE_DISPLAY_", extra="ignore")

    # Reference viewport the simulation is tuned for
    width: int = 800
    height: int = 600

    # Rendering
    fps: int = 60
    scale: float = Field(default=1.0, gt=0.0, le=4.0)


class AISettings(BaseSettings):
    """Commentary provider settings."""

    model_config = SettingsConfigDict(env_prefix="SKIFREE_AI_", extra="ignore")

    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "SKIFREE_AI_GEMINI_API_KEY"),
    )

    model: str = "gemini-2.5-flash"
    temperature: float = Field(default=0.9, ge=0.0, le=2.0)

    timeout: float = 10.0
    max_retries: int = 2
    retry_delay: float = 1.0

    # Seconds to stay on canned lines after a quota error
    rate_limit_cooldown: float = 60.0


class GameSettings(BaseSettings):
    """Session settings."""

    model_config = SettingsConfigDict(env_prefix="SKIFREE_GAME_", extra="ignore")

    seed: Optional[int] = None
    leaderboard_size: int = Field(default=10, ge=1)
    leaderboard_path: Path = Field(
        default_factory=lambda: Path.home() / ".skifree" / "leaderboard.json"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKIFREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_file: Optional[Path] = None

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    ai: AISettings = Field(default_factory=AISettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def ai_enabled(self) -> bool:
        return bool(self.ai.gemini_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
