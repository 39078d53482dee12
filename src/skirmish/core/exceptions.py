"""Custom exception hierarchy for the Skirmish combat core.

All exceptions inherit from SkirmishError so callers can handle every
failure of the core at a single boundary while keeping domain context.

Only contract violations and infrastructure failures are raised. Mistakes
made by the player (naming an item they do not carry, unequipping something
that is not worn) are reported as failed outcomes, never as exceptions.

Example:
    >>> from skirmish.core.exceptions import CombatError
    >>> raise CombatError("No input source attached", combatant="Hero")
"""

from __future__ import annotations

from typing import Any


class SkirmishError(Exception):
    """Base exception for all Skirmish errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigurationError(SkirmishError):
    """Raised when settings are missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with the offending key.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(SkirmishError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is requested in a state that forbids it.

    This typically occurs when a battle is run twice or started with
    participants that cannot fight.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class UnfightableEntityError(InvalidGameStateError):
    """Raised when a battle is started with an entity that cannot fight.

    Every battle participant must be a Fighter. This is a contract
    violation by the caller, distinct from ordinary input mistakes.
    """

    def __init__(
        self,
        message: str,
        *,
        entity_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the type of the rejected entity.

        Args:
            message: Human-readable error description.
            entity_type: Class name of the entity that was rejected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_type:
            combined_details["entity_type"] = entity_type
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution cannot proceed.

    This includes a player-controlled fighter asked for a choice with no
    input collaborator attached, or a scripted input running dry.
    """

    def __init__(
        self,
        message: str,
        *,
        combatant: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            combatant: Name of the combatant involved.
            round_number: Current battle round when the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant:
            combined_details["combatant"] = combatant
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Domain Exceptions
# =============================================================================


class PersistenceError(SkirmishError):
    """Raised when a fighter cannot be written to or read from disk."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with the file involved.

        Args:
            message: Human-readable error description.
            path: Path of the save file.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path:
            combined_details["path"] = path
        super().__init__(message, details=combined_details)


__all__ = [
    "SkirmishError",
    "ConfigurationError",
    "GameEngineError",
    "InvalidGameStateError",
    "UnfightableEntityError",
    "CombatError",
    "PersistenceError",
]
