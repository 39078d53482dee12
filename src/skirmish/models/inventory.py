"""Containers owned by an entity: carried items and worn equipment.

An Inventory is an ordered list of (item, quantity) entries keyed by the
case-insensitive item name. Quantities are always at least 1; an entry is
dropped as soon as its quantity would reach 0.

An Outfit maps each EquipmentSlot to at most one worn item, together with
the stat change wearing it actually caused. Clamping can make that differ
from the item's nominal deltas, and taking the item off reverses exactly
what was applied. Moving items between the two containers is the Entity's
job (equip/unequip).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skirmish.models.items import AnyEquippable, AnyItem, Equippable, EquipmentSlot, Item


if TYPE_CHECKING:
    from skirmish.engine.dice import DiceRoller


class InventoryEntry(BaseModel):
    """One item and how many of it are held."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    item: AnyItem = Field(description="The held item")
    quantity: int = Field(default=1, ge=1, description="Units held")


class Inventory(BaseModel):
    """Ordered collection of held items.

    Example:
        >>> bag = Inventory.of([(Food(name="Apple", recovers=5), 2)])
        >>> bag.remove_item("apple")
        >>> bag.quantity_of("Apple")
        1
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    entries: list[InventoryEntry] = Field(default_factory=list, description="Held items")

    @field_validator("entries", mode="before")
    @classmethod
    def coerce_pairs(cls, value: Any) -> Any:
        """Accept (item, quantity) pairs alongside entry mappings."""
        if not isinstance(value, Sequence) or isinstance(value, str):
            return value
        coerced = []
        for element in value:
            if isinstance(element, tuple) and len(element) == 2:
                item, quantity = element
                coerced.append({"item": item, "quantity": quantity})
            else:
                coerced.append(element)
        return coerced

    @model_validator(mode="after")
    def check_unique_names(self) -> Inventory:
        seen: set[str] = set()
        for entry in self.entries:
            key = entry.item.name.casefold()
            if key in seen:
                raise ValueError(f"duplicate inventory entry: {entry.item.name}")
            seen.add(key)
        return self

    @classmethod
    def of(cls, pairs: Sequence[tuple[Item, int]] = ()) -> Inventory:
        """Build an inventory from (item, quantity) pairs."""
        return cls(entries=list(pairs))

    def __iter__(self) -> Iterator[InventoryEntry]:  # type: ignore[override]
        return iter(list(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, item: Item | str) -> bool:
        return self.entry(item) is not None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def entry(self, item: Item | str) -> InventoryEntry | None:
        """Find the entry for an item or item name (case-insensitive)."""
        for entry in self.entries:
            if entry.item.matches(item):
                return entry
        return None

    def find_item(self, item: Item | str) -> Item | None:
        found = self.entry(item)
        return found.item if found else None

    def quantity_of(self, item: Item | str) -> int:
        found = self.entry(item)
        return found.quantity if found else 0

    def add_item(self, item: Item, amount: int = 1) -> None:
        """Add amount units of item, stacking onto an existing entry.

        Raises:
            ValueError: If amount is not positive.
        """
        if amount < 1:
            raise ValueError(f"amount must be positive, got {amount}")

        found = self.entry(item)
        if found:
            found.quantity += amount
        else:
            self.entries.append(InventoryEntry(item=item, quantity=amount))

    def remove_item(self, item: Item | str, amount: int = 1) -> None:
        """Remove at most amount units of item; unknown items are ignored.

        Raises:
            ValueError: If amount is not positive.
        """
        if amount < 1:
            raise ValueError(f"amount must be positive, got {amount}")

        found = self.entry(item)
        if found is None:
            return
        if found.quantity <= amount:
            self.entries.remove(found)
        else:
            found.quantity -= amount

    def random_item(self, dice: DiceRoller) -> Item | None:
        if not self.entries:
            return None
        return dice.choice(self.entries).item

    def clear(self) -> None:
        self.entries.clear()

    def format_items(self) -> list[str]:
        return [f"* {entry.item.name} ({entry.quantity})" for entry in self.entries]


class Outfit(BaseModel):
    """Worn equipment, at most one item per slot."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    slots: dict[EquipmentSlot, AnyEquippable] = Field(
        default_factory=dict,
        description="Worn item per slot",
    )
    applied: dict[EquipmentSlot, dict[str, int]] = Field(
        default_factory=dict,
        description="Stat change each worn item caused when put on",
    )

    @model_validator(mode="after")
    def check_slots(self) -> Outfit:
        for slot, item in self.slots.items():
            if item.slot != slot:
                raise ValueError(f"{item.name} cannot be worn in the {slot} slot")
        stray = set(self.applied) - set(self.slots)
        if stray:
            raise ValueError(f"Stat changes recorded for empty slots: {sorted(stray)}")
        return self

    def __contains__(self, item: Item | str) -> bool:
        return self.find(item) is not None

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def is_empty(self) -> bool:
        return not self.slots

    def get(self, slot: EquipmentSlot) -> Equippable | None:
        return self.slots.get(slot)

    def find(self, item: Item | str) -> Equippable | None:
        """Find a worn item by item or name (case-insensitive)."""
        for worn in self.slots.values():
            if worn.matches(item):
                return worn
        return None

    def put(self, item: Equippable, applied: dict[str, int] | None = None) -> Equippable | None:
        """Wear item in its slot, returning whatever it displaced.

        Args:
            item: The item to wear.
            applied: Stat change wearing it caused; defaults to the item's
                nominal deltas.
        """
        previous = self.slots.get(item.slot)
        self.slots[item.slot] = item
        if applied is None:
            self.applied.pop(item.slot, None)
        else:
            self.applied[item.slot] = dict(applied)
        return previous

    def take(self, slot: EquipmentSlot) -> Equippable | None:
        self.applied.pop(slot, None)
        return self.slots.pop(slot, None)

    def applied_change(self, slot: EquipmentSlot) -> dict[str, int]:
        """Return the stat change to reverse when the item in slot comes off."""
        if slot in self.applied:
            return dict(self.applied[slot])
        worn = self.slots.get(slot)
        if worn is None:
            return {}
        nominal = worn.stat_change.model_dump()
        return {name: delta for name, delta in nominal.items() if delta}

    def items(self) -> list[Equippable]:
        return [self.slots[slot] for slot in EquipmentSlot if slot in self.slots]

    def format_equipment(self) -> list[str]:
        lines = []
        for slot in EquipmentSlot:
            worn = self.slots.get(slot)
            lines.append(f"* {slot.value.capitalize()}: {worn.name if worn else 'none'}")
        return lines


__all__ = [
    "InventoryEntry",
    "Inventory",
    "Outfit",
]
