"""Sources of player choices.

The core never reads a terminal itself. A Player asks its CommandInput
for every choice, and the caller decides where the answers come from.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from skirmish.core.exceptions import CombatError
from skirmish.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class CommandInput(Protocol):
    """Anything that can answer a prompt with a line of text."""

    def ask(self, prompt: str) -> str:
        """Show prompt and return the answer."""
        ...


class ScriptedInput:
    """Replays a fixed list of answers, for tests and demos.

    Example:
        >>> answers = ScriptedInput(["kick", "attack"])
        >>> answers.ask("Choose an attack:")
        'kick'
    """

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self._prompts: list[str] = []

    @property
    def prompts(self) -> list[str]:
        """Prompts asked so far."""
        return self._prompts.copy()

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def ask(self, prompt: str) -> str:
        """Return the next scripted answer.

        Raises:
            CombatError: If every answer was already used.
        """
        self._prompts.append(prompt)
        if not self._answers:
            raise CombatError(
                "Scripted input ran out of answers",
                details={"prompt": prompt, "asked": len(self._prompts)},
            )
        answer = self._answers.pop(0)
        logger.debug("Scripted answer", answer=answer)
        return answer


__all__ = [
    "CommandInput",
    "ScriptedInput",
]
