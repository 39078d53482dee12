"""Configuration management for the Skirmish combat core.

Settings are loaded with pydantic-settings from environment variables and
an optional .env file. Damage formula constants are deliberately not
settings: they live in skirmish.core.constants.

Example:
    >>> from skirmish.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.gold_loss_percent
    50

Environment Variables:
    SKIRMISH_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SKIRMISH_JSON_LOGS: Emit JSON log lines instead of console output
    SKIRMISH_SAVE_PATH: Default file used by the save/load adapter
    SKIRMISH_GAME_SEED: Seed for the default dice roller
    SKIRMISH_GAME_GOLD_LOSS_PERCENT: Share of gold a defeated player loses
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from skirmish.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for game engine behavior.

    Attributes:
        seed: Seed for the default dice roller (None draws from the OS).
        gold_loss_percent: Percentage of gold a player hands over on defeat.
        default_respawn_location: Where a knocked-out player wakes up when
            no respawn location was given.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKIRMISH_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed: int | None = Field(
        default=None,
        description="Seed for the default dice roller",
    )
    gold_loss_percent: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Percentage of gold lost by a defeated player",
    )
    default_respawn_location: str = Field(
        default="a safe place",
        min_length=1,
        description="Fallback respawn location name",
    )


class StorageSettings(BaseSettings):
    """Configuration for the save file adapter.

    Attributes:
        save_path: File written by save_fighter and read by load_fighter.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKIRMISH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    save_path: Path = Field(
        default=Path("data/player.json"),
        description="Default save file",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Logging level.
        json_logs: Render logs as JSON.
        game: Game engine settings.
        storage: Save file settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKIRMISH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Skirmish",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Mostly useful in tests after environment variables change.
    """
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
