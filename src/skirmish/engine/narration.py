"""Append-only stream of player-facing text.

The core writes narrated lines here; a renderer reads them or subscribes
to receive each line as it is written. Narration is what the player sees
and is kept apart from structured logging.
"""

from __future__ import annotations

from collections.abc import Callable

from skirmish.core.logging import get_logger
from skirmish.models.outcome import Outcome


logger = get_logger(__name__)


class Narration:
    """Collects narrated lines in the order they were written."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._subscribers: list[Callable[[str], None]] = []

    @property
    def lines(self) -> list[str]:
        """Every line written so far."""
        return self._lines.copy()

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def subscribe(self, callback: Callable[[str], None]) -> None:
        """Register a callback invoked with every new line.

        Args:
            callback: Function to call with the written line.
        """
        self._subscribers.append(callback)

    def write(self, *lines: str) -> None:
        for line in lines:
            self._lines.append(line)
            self._notify(line)

    def record(self, outcome: Outcome) -> Outcome:
        """Write the outcome's messages and hand the outcome back."""
        self.write(*outcome.messages)
        return outcome

    def _notify(self, line: str) -> None:
        for callback in self._subscribers:
            try:
                callback(line)
            except Exception:
                logger.exception("Narration subscriber failed")


__all__ = [
    "Narration",
]
