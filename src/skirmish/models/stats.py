"""Combat statistics of an entity.

StatBlock is an immutable snapshot. The only way to "change" stats is to
merge a partial update, which returns a new snapshot with every clamp
re-applied:

- max_hp, attack, defense and agility never drop below 1
- hp defaults to max_hp when unset and always lies in [0, max_hp]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from skirmish.core.constants import MIN_STAT_VALUE


STAT_NAMES: tuple[str, ...] = ("max_hp", "hp", "attack", "defense", "agility")
"""Every attribute of a StatBlock."""

POSITIVE_STATS: tuple[str, ...] = ("max_hp", "attack", "defense", "agility")
"""Attributes clamped to a minimum of 1."""

EQUIPMENT_AFFECTED_STATS: tuple[str, ...] = ("attack", "defense", "agility", "max_hp")
"""Attributes an equippable item may alter."""


class StatChange(BaseModel):
    """Fixed stat deltas granted by an equippable item while worn."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    attack: int = Field(default=0, description="Attack delta")
    defense: int = Field(default=0, description="Defense delta")
    agility: int = Field(default=0, description="Agility delta")
    max_hp: int = Field(default=0, description="Maximum HP delta")

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in EQUIPMENT_AFFECTED_STATS)


class StatBlock(BaseModel):
    """Immutable, always-valid snapshot of an entity's combat attributes.

    Attributes:
        max_hp: Maximum health points (>= 1).
        hp: Current health points, 0..max_hp.
        attack: Strength in battle (>= 1).
        defense: Protection from attacks (>= 1).
        agility: Speed of commands in battle (>= 1).

    Example:
        >>> stats = StatBlock(max_hp=30, attack=3, defense=2)
        >>> stats.hp
        30
        >>> stats.merge({"hp": -5}).hp
        0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_hp: int = Field(default=MIN_STAT_VALUE, ge=MIN_STAT_VALUE, description="Maximum HP")
    hp: int = Field(default=MIN_STAT_VALUE, ge=0, description="Current HP")
    attack: int = Field(default=MIN_STAT_VALUE, ge=MIN_STAT_VALUE, description="Attack")
    defense: int = Field(default=MIN_STAT_VALUE, ge=MIN_STAT_VALUE, description="Defense")
    agility: int = Field(default=MIN_STAT_VALUE, ge=MIN_STAT_VALUE, description="Agility")

    @model_validator(mode="before")
    @classmethod
    def clamp(cls, data: Any) -> Any:
        """Apply the stat clamps before field validation."""
        if not isinstance(data, Mapping):
            return data

        values = dict(data)
        for name in POSITIVE_STATS:
            value = values.get(name)
            values[name] = MIN_STAT_VALUE if value is None else max(int(value), MIN_STAT_VALUE)

        hp = values.get("hp")
        if hp is None:
            hp = values["max_hp"]
        values["hp"] = min(max(int(hp), 0), values["max_hp"])
        return values

    @property
    def is_dead(self) -> bool:
        return self.hp == 0

    def merge(self, partial: Mapping[str, int | None] | None = None, **changes: int | None) -> StatBlock:
        """Overlay a partial update and return the re-clamped snapshot.

        Args:
            partial: Mapping of stat names to new values.
            **changes: Same as partial, as keyword arguments.

        Returns:
            A new StatBlock; this one is left untouched.

        Raises:
            pydantic.ValidationError: If an unknown stat name is given.
        """
        data: dict[str, Any] = self.model_dump()
        data.update(partial or {})
        data.update(changes)
        return StatBlock.model_validate(data)

    def apply_change(self, change: StatChange, *, sign: int = 1) -> StatBlock:
        """Add (sign=1) or subtract (sign=-1) equipment deltas."""
        updates = {
            name: getattr(self, name) + sign * getattr(change, name)
            for name in EQUIPMENT_AFFECTED_STATS
            if getattr(change, name)
        }
        return self.merge(updates)

    def difference(self, earlier: StatBlock) -> dict[str, int]:
        """Return the non-zero per-stat change from earlier to this snapshot."""
        deltas = {name: getattr(self, name) - getattr(earlier, name) for name in STAT_NAMES}
        return {name: delta for name, delta in deltas.items() if delta}

    def shift(self, deltas: Mapping[str, int], *, sign: int = 1) -> StatBlock:
        """Add (sign=1) or subtract (sign=-1) raw per-stat deltas.

        Unlike apply_change, deltas may include hp. Every delta lands in one
        merge, so a restored max_hp makes room for restored hp.
        """
        updates = {name: getattr(self, name) + sign * delta for name, delta in deltas.items()}
        return self.merge(updates)


__all__ = [
    "STAT_NAMES",
    "POSITIVE_STATS",
    "EQUIPMENT_AFFECTED_STATS",
    "StatChange",
    "StatBlock",
]
