"""Configuration for SkiFree."""

from skifree.config.settings import (
    AISettings,
    DisplaySettings,
    GameSettings,
    Settings,
    get_settings,
)

__all__ = ["AISettings", "DisplaySettings", "GameSettings", "Settings", "get_settings"]
