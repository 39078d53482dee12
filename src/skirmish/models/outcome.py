"""Result value returned by every mutating operation of the core."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Outcome(BaseModel):
    """Narrated result of an action, equip, item use or loot transfer.

    A failed outcome means the operation aborted without changing any
    state; its messages explain why.

    Attributes:
        ok: Whether the operation took effect.
        messages: Lines to show the player, in order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ok: bool = Field(default=True, description="Whether the operation took effect")
    messages: tuple[str, ...] = Field(default=(), description="Narrated lines")

    @classmethod
    def success(cls, *messages: str) -> Outcome:
        return cls(ok=True, messages=messages)

    @classmethod
    def failure(cls, *messages: str) -> Outcome:
        return cls(ok=False, messages=messages)

    def then(self, other: Outcome) -> Outcome:
        """Concatenate two outcomes; the result succeeds only if both did."""
        return Outcome(ok=self.ok and other.ok, messages=self.messages + other.messages)

    @property
    def text(self) -> str:
        return "\n".join(self.messages)


__all__ = [
    "Outcome",
]
