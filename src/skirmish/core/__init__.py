"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        SkirmishError: Base exception for all errors raised by the core.
        ConfigurationError: Configuration-related errors.
        GameEngineError, InvalidGameStateError, UnfightableEntityError,
        CombatError: Battle and entity contract violations.
        PersistenceError: Save file failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        log_context: Bind logging context for a with block.
"""

from __future__ import annotations

from skirmish.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from skirmish.core.exceptions import (
    CombatError,
    ConfigurationError,
    GameEngineError,
    InvalidGameStateError,
    PersistenceError,
    SkirmishError,
    UnfightableEntityError,
)
from skirmish.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    log_context,
)


__all__ = [
    # Exceptions
    "SkirmishError",
    "ConfigurationError",
    "GameEngineError",
    "InvalidGameStateError",
    "UnfightableEntityError",
    "CombatError",
    "PersistenceError",
    # Configuration
    "Settings",
    "GameSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "log_context",
    "get_logger",
    "bind_context",
    "clear_context",
]
