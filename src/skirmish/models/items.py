"""Items an entity can carry, use, or wear.

Items are immutable values identified by their case-insensitive name. The
variants are closed and joined in the AnyItem discriminated union so
inventories and outfits round-trip through JSON:

- Item: plain object with no effect when used
- Food: restores HP, consumed on use by default
- Weapon, Shield, Helmet, Torso, Legs: equippable, one per EquipmentSlot
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from skirmish.models.actions import Attack
from skirmish.models.outcome import Outcome
from skirmish.models.stats import StatChange


if TYPE_CHECKING:
    from skirmish.models.entity import Entity


class EquipmentSlot(StrEnum):
    """Body slots of an outfit, in display order."""

    WEAPON = "weapon"
    SHIELD = "shield"
    HELMET = "helmet"
    TORSO = "torso"
    LEGS = "legs"


class Item(BaseModel):
    """Anything that can be held in an inventory.

    Attributes:
        kind: Discriminator for the item variant.
        name: Display name, also the item's identity.
        price: Cost in a shop.
        consumable: Whether one unit is lost upon use.
        disposable: Whether the item may be dropped or sold.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["item"] = "item"
    name: str = Field(default="Item", min_length=1, description="Item name")
    price: int = Field(default=0, ge=0, description="Cost in a shop")
    consumable: bool = Field(default=False, description="Lost upon use")
    disposable: bool = Field(default=True, description="Can be dropped or sold")

    def matches(self, item: Item | str) -> bool:
        """Compare identities by case-insensitive name."""
        name = item.name if isinstance(item, Item) else item
        return self.name.casefold() == name.strip().casefold()

    def use(self, user: Entity, target: Entity) -> Outcome:
        """Apply the item's effect to target.

        Args:
            user: The entity using the item.
            target: The entity on whom the item is used.
        """
        return Outcome.success("Nothing seems to happen.")

    def __str__(self) -> str:
        return self.name


class Food(Item):
    """Recovers HP when used."""

    kind: Literal["food"] = "food"
    name: str = Field(default="Food", min_length=1)
    consumable: bool = True
    recovers: int = Field(default=0, ge=0, description="HP recovered when used")

    def use(self, user: Entity, target: Entity) -> Outcome:
        recovered = min(self.recovers, target.stats.max_hp - target.stats.hp)
        target.set_stats(hp=target.stats.hp + recovered)

        if user is target:
            opening = f"{user.name} uses {self.name} and recovers {recovered} HP!"
        else:
            opening = (
                f"{user.name} uses {self.name} on {target.name}! "
                f"{target.name} recovers {recovered} HP!"
            )
        return Outcome.success(
            opening,
            f"{target.name}'s HP: {target.stats.hp}/{target.stats.max_hp}",
        )


class Equippable(Item):
    """An item worn in one outfit slot, altering stats while worn.

    Concrete variants must define the slot they occupy.

    Attributes:
        stat_change: Deltas applied on equip and reversed on unequip.
    """

    SLOT: ClassVar[EquipmentSlot | None] = None

    stat_change: StatChange = Field(default_factory=StatChange, description="Stat deltas")

    @property
    def slot(self) -> EquipmentSlot:
        if self.SLOT is None:
            raise NotImplementedError("An Equippable Item must have a slot")
        return self.SLOT

    def use(self, user: Entity, target: Entity) -> Outcome:
        return Outcome.success(f"Type 'equip {self.name}' to equip this item.")


class Weapon(Equippable):
    """Held in the weapon slot; may grant a battle command while held."""

    SLOT: ClassVar[EquipmentSlot] = EquipmentSlot.WEAPON

    kind: Literal["weapon"] = "weapon"
    name: str = Field(default="Weapon", min_length=1)
    attack: Attack | None = Field(default=None, description="Command granted while held")


class Shield(Equippable):
    SLOT: ClassVar[EquipmentSlot] = EquipmentSlot.SHIELD

    kind: Literal["shield"] = "shield"
    name: str = Field(default="Shield", min_length=1)


class Helmet(Equippable):
    SLOT: ClassVar[EquipmentSlot] = EquipmentSlot.HELMET

    kind: Literal["helmet"] = "helmet"
    name: str = Field(default="Helmet", min_length=1)


class Torso(Equippable):
    SLOT: ClassVar[EquipmentSlot] = EquipmentSlot.TORSO

    kind: Literal["torso"] = "torso"
    name: str = Field(default="Torso", min_length=1)


class Legs(Equippable):
    SLOT: ClassVar[EquipmentSlot] = EquipmentSlot.LEGS

    kind: Literal["legs"] = "legs"
    name: str = Field(default="Legs", min_length=1)


AnyItem = Annotated[
    Item | Food | Weapon | Shield | Helmet | Torso | Legs,
    Field(discriminator="kind", description="Any holdable item"),
]
"""Discriminated union of all item variants."""

AnyEquippable = Annotated[
    Weapon | Shield | Helmet | Torso | Legs,
    Field(discriminator="kind", description="Any wearable item"),
]
"""Discriminated union of the wearable item variants."""


__all__ = [
    "EquipmentSlot",
    "Item",
    "Food",
    "Equippable",
    "Weapon",
    "Shield",
    "Helmet",
    "Torso",
    "Legs",
    "AnyItem",
    "AnyEquippable",
]
