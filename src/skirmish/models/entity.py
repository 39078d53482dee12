"""Entity: anything holding stats, carried items, worn equipment and gold.

Stats, inventory and outfit only change through the operations below.
Equip and unequip compute the next stats, outfit and inventory first and
commit them together, so an item is never both worn and carried and the
stats never reflect a half-applied change.

User mistakes (unknown item, item not worn) are reported through a failed
Outcome and leave the entity untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import (
    CANNOT_DROP_MESSAGE,
    MIN_HP_AFTER_UNEQUIP,
    NO_SUCH_ITEM_MESSAGE,
    NOT_EQUIPPED_MESSAGE,
)
from skirmish.core.logging import get_logger
from skirmish.models.inventory import Inventory, Outfit
from skirmish.models.items import Equippable, EquipmentSlot, Item
from skirmish.models.outcome import Outcome
from skirmish.models.stats import StatBlock


logger = get_logger(__name__)


def _floor_hp(stats: StatBlock) -> StatBlock:
    """Keep a reversal of equipment deltas from knocking an entity out."""
    if stats.hp < MIN_HP_AFTER_UNEQUIP:
        return stats.merge(hp=MIN_HP_AFTER_UNEQUIP)
    return stats


def _take_off(stats: StatBlock, outfit: Outfit, slot: EquipmentSlot) -> tuple[StatBlock, Equippable | None]:
    """Remove the item worn in slot and reverse the change it caused."""
    stats = _floor_hp(stats.shift(outfit.applied_change(slot), sign=-1))
    return stats, outfit.take(slot)


def _put_on(stats: StatBlock, outfit: Outfit, item: Equippable) -> tuple[StatBlock, Equippable | None]:
    """Wear item, taking off whatever held its slot first.

    Returns:
        (stats with the item worn, displaced item or None).
    """
    previous = None
    if outfit.get(item.slot) is not None:
        stats, previous = _take_off(stats, outfit, item.slot)
    worn = stats.apply_change(item.stat_change)
    outfit.put(item, applied=worn.difference(stats))
    return worn, previous


class Entity(BaseModel):
    """A named holder of stats, inventory, outfit and gold.

    Attributes:
        kind: Discriminator for the entity variant.
        name: Display name.
        stats: Current stat snapshot, replaced through set_stats.
        inventory: Carried items.
        outfit: Worn equipment.
        gold: Currency, never negative.
        escaped: Set by a successful escape during battle; not persisted.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    kind: Literal["entity"] = "entity"
    name: str = Field(default="Entity", min_length=1, description="Display name")
    stats: StatBlock = Field(default_factory=StatBlock, description="Combat stats")
    inventory: Inventory = Field(default_factory=Inventory, description="Carried items")
    outfit: Outfit = Field(default_factory=Outfit, description="Worn equipment")
    gold: int = Field(default=0, ge=0, description="Currency")
    escaped: bool = Field(default=False, exclude=True, description="Escaped this round")

    # =========================================================================
    # Stats and Gold
    # =========================================================================

    @property
    def is_dead(self) -> bool:
        return self.stats.is_dead

    def set_stats(self, partial: dict[str, int | None] | None = None, **changes: int | None) -> StatBlock:
        """Merge a partial stat update into the current stats.

        Args:
            partial: Mapping of stat names to new values.
            **changes: Same as partial, as keyword arguments.

        Returns:
            The new stat snapshot.
        """
        self.stats = self.stats.merge(partial, **changes)
        return self.stats

    def set_gold(self, amount: int) -> None:
        self.gold = max(amount, 0)

    def adjust_gold_by(self, delta: int) -> None:
        self.set_gold(self.gold + delta)

    # =========================================================================
    # Inventory
    # =========================================================================

    def add_item(self, item: Item, amount: int = 1) -> None:
        self.inventory.add_item(item, amount)

    def find_item(self, item: Item | str) -> Item | None:
        return self.inventory.find_item(item)

    def remove_item(self, item: Item | str, amount: int = 1) -> None:
        self.inventory.remove_item(item, amount)

    def clear_inventory(self) -> None:
        self.inventory.clear()

    def use_item(self, item: Item | str, target: Entity) -> Outcome:
        """Use a carried item on target, consuming one unit if consumable.

        Args:
            item: The item or its name.
            target: The entity on whom the item is used.
        """
        actual = self.find_item(item)
        if actual is None:
            return Outcome.failure(NO_SUCH_ITEM_MESSAGE)

        outcome = actual.use(self, target)
        if actual.consumable:
            self.remove_item(actual)
        return outcome

    def drop_item(self, item: Item | str) -> Outcome:
        """Discard one unit of a disposable item."""
        actual = self.find_item(item)
        if actual is None:
            return Outcome.failure(NO_SUCH_ITEM_MESSAGE)
        if not actual.disposable:
            return Outcome.failure(CANNOT_DROP_MESSAGE)

        self.remove_item(actual)
        return Outcome.success(f"You have dropped {actual.name}.")

    def add_loot(self, gold: int, treasures: Sequence[Item | None] = ()) -> Outcome:
        """Collect gold and items won in battle.

        None entries in treasures stand for "no treasure" and are skipped.
        """
        found = [treasure for treasure in treasures if treasure is not None]
        if gold <= 0 and not found:
            return Outcome.success("Loot: nothing!")

        messages = ["Loot:"]
        if gold > 0:
            self.adjust_gold_by(gold)
            messages.append(f"* {gold} gold")
        for treasure in found:
            self.add_item(treasure)
            messages.append(f"* {treasure.name}")

        logger.debug("Loot added", entity=self.name, gold=gold, items=len(found))
        return Outcome.success(*messages)

    # =========================================================================
    # Equipment
    # =========================================================================

    def wear(self, item: Equippable) -> Equippable | None:
        """Put an item straight into the outfit and apply its deltas.

        The item does not pass through the inventory. Whatever it displaces
        is returned instead of being carried.
        """
        outfit = self.outfit.model_copy(deep=True)
        stats, previous = _put_on(self.stats, outfit, item)

        self.stats = stats
        self.outfit = outfit
        self.on_equip(item, previous)
        return previous

    def equip_item(self, item: Item | str) -> Outcome:
        """Move a carried equippable item into its outfit slot.

        A previously worn item in the same slot goes back to the
        inventory with the stat change it caused reversed.
        """
        actual = self.find_item(item)
        if actual is None:
            return Outcome.failure(NO_SUCH_ITEM_MESSAGE)
        if not isinstance(actual, Equippable):
            return Outcome.failure(f"{actual.name} cannot be equipped!")

        outfit = self.outfit.model_copy(deep=True)
        inventory = self.inventory.model_copy(deep=True)

        stats, previous = _put_on(self.stats, outfit, actual)
        inventory.remove_item(actual)
        if previous is not None:
            inventory.add_item(previous)

        self.stats = stats
        self.outfit = outfit
        self.inventory = inventory
        self.on_equip(actual, previous)

        logger.debug(
            "Item equipped",
            entity=self.name,
            item=actual.name,
            displaced=previous.name if previous else None,
        )
        return Outcome.success(f"{self.name} equips {actual.name}!")

    def unequip_item(self, item: Item | str) -> Outcome:
        """Move a worn item back into the inventory."""
        worn = self.outfit.find(item)
        if worn is None:
            return Outcome.failure(NOT_EQUIPPED_MESSAGE)

        outfit = self.outfit.model_copy(deep=True)
        inventory = self.inventory.model_copy(deep=True)

        stats, _ = _take_off(self.stats, outfit, worn.slot)
        inventory.add_item(worn)

        self.stats = stats
        self.outfit = outfit
        self.inventory = inventory
        self.on_unequip(worn)

        logger.debug("Item unequipped", entity=self.name, item=worn.name)
        return Outcome.success(f"{self.name} unequips {worn.name}!")

    def on_equip(self, item: Equippable, previous: Equippable | None) -> None:
        """Called after item was put on, displacing previous if any."""

    def on_unequip(self, item: Equippable) -> None:
        """Called after item was taken off."""

    # =========================================================================
    # Display
    # =========================================================================

    def status_lines(self) -> list[str]:
        lines = ["Stats:", f"* HP: {self.stats.hp}/{self.stats.max_hp}"]
        lines.extend(
            f"* {stat.capitalize()}: {getattr(self.stats, stat)}"
            for stat in ("attack", "defense", "agility")
        )
        lines.extend(["", "Equipment:"])
        lines.extend(self.outfit.format_equipment())
        return lines

    def inventory_lines(self) -> list[str]:
        lines = [f"Current gold in pouch: {self.gold}.", ""]
        if self.inventory.is_empty:
            lines.append(f"{self.name}'s inventory is empty!")
        else:
            lines.append(f"{self.name}'s inventory:")
            lines.extend(self.inventory.format_items())
        return lines

    def __str__(self) -> str:
        return self.name


__all__ = [
    "Entity",
]
