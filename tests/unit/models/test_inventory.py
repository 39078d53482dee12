"""Tests for Inventory and Outfit containers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skirmish.engine.dice import DiceRoller
from skirmish.models.items import EquipmentSlot, Food, Item, Shield, Weapon
from skirmish.models.inventory import Inventory, Outfit


class TestInventory:
    """Tests for the Inventory container."""

    def test_of_pairs(self, bread: Food) -> None:
        """Test construction from (item, quantity) pairs."""
        bag = Inventory.of([(bread, 2), (Item(name="Rope"), 1)])

        assert len(bag) == 2
        assert bag.quantity_of("bread") == 2
        assert "ROPE" in bag

    def test_duplicate_names_rejected(self) -> None:
        """Test two entries for one name are refused."""
        with pytest.raises(ValidationError):
            Inventory.of([(Item(name="Rope"), 1), (Item(name="rope"), 2)])

    def test_add_stacks(self, bread: Food) -> None:
        """Test adding a held item raises its quantity."""
        bag = Inventory()

        bag.add_item(bread)
        bag.add_item(Food(name="BREAD", recovers=5), 3)

        assert len(bag) == 1
        assert bag.quantity_of(bread) == 4

    def test_remove_decrements(self, bread: Food) -> None:
        """Test removing part of a stack."""
        bag = Inventory.of([(bread, 3)])

        bag.remove_item("bread", 2)

        assert bag.quantity_of(bread) == 1

    def test_remove_drops_entry_at_zero(self, bread: Food) -> None:
        """Test an entry disappears rather than reaching quantity 0."""
        bag = Inventory.of([(bread, 2)])

        bag.remove_item(bread, 5)

        assert bread not in bag
        assert bag.is_empty

    def test_remove_missing_ignored(self) -> None:
        """Test removing an absent item changes nothing."""
        bag = Inventory.of([(Item(name="Rope"), 1)])

        bag.remove_item("Lamp")

        assert bag.quantity_of("Rope") == 1

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amounts(self, bread: Food, amount: int) -> None:
        """Test quantities must be positive."""
        bag = Inventory()

        with pytest.raises(ValueError):
            bag.add_item(bread, amount)
        with pytest.raises(ValueError):
            bag.remove_item(bread, amount)

    def test_find_item(self, bread: Food) -> None:
        """Test lookup by name returns the held item."""
        bag = Inventory.of([(bread, 1)])

        assert bag.find_item("bReAd") == bread
        assert bag.find_item("cake") is None

    def test_iteration_order(self) -> None:
        """Test entries iterate in insertion order."""
        bag = Inventory()
        for name in ("c", "a", "b"):
            bag.add_item(Item(name=name))

        assert [entry.item.name for entry in bag] == ["c", "a", "b"]

    def test_random_item(self, bread: Food) -> None:
        """Test random pick from held items."""
        dice = DiceRoller(seed=1)

        assert Inventory().random_item(dice) is None
        assert Inventory.of([(bread, 1)]).random_item(dice) == bread

    def test_clear(self, bread: Food) -> None:
        """Test clearing empties the inventory."""
        bag = Inventory.of([(bread, 1)])

        bag.clear()

        assert bag.is_empty

    def test_format_items(self, bread: Food) -> None:
        """Test the display lines."""
        bag = Inventory.of([(bread, 2)])

        assert bag.format_items() == ["* Bread (2)"]


class TestOutfit:
    """Tests for the Outfit container."""

    def test_put_and_get(self, sword: Weapon) -> None:
        """Test wearing an item in its slot."""
        outfit = Outfit()

        assert outfit.put(sword) is None
        assert outfit.get(EquipmentSlot.WEAPON) == sword
        assert "sword" in outfit

    def test_put_displaces(self, sword: Weapon, axe: Weapon) -> None:
        """Test one item per slot."""
        outfit = Outfit()
        outfit.put(sword)

        assert outfit.put(axe) == sword
        assert len(outfit) == 1
        assert outfit.find("Axe") == axe

    def test_take(self, buckler: Shield) -> None:
        """Test removing from a slot."""
        outfit = Outfit()
        outfit.put(buckler)

        assert outfit.take(EquipmentSlot.SHIELD) == buckler
        assert outfit.take(EquipmentSlot.SHIELD) is None
        assert outfit.is_empty

    def test_wrong_slot_rejected(self, buckler: Shield) -> None:
        """Test a mapping cannot put an item into a foreign slot."""
        with pytest.raises(ValidationError):
            Outfit(slots={EquipmentSlot.WEAPON: buckler})

    def test_items_in_slot_order(self, sword: Weapon, buckler: Shield) -> None:
        """Test worn items are listed weapon first."""
        outfit = Outfit()
        outfit.put(buckler)
        outfit.put(sword)

        assert outfit.items() == [sword, buckler]

    def test_format_equipment(self, sword: Weapon) -> None:
        """Test the display lines list every slot."""
        outfit = Outfit()
        outfit.put(sword)

        assert outfit.format_equipment() == [
            "* Weapon: Sword",
            "* Shield: none",
            "* Helmet: none",
            "* Torso: none",
            "* Legs: none",
        ]

    def test_applied_change_defaults_to_nominal(self, sword: Weapon) -> None:
        """Test an item put on without a record reverses its own deltas."""
        outfit = Outfit()
        outfit.put(sword)

        assert outfit.applied_change(EquipmentSlot.WEAPON) == {"attack": 3, "agility": 1}
        assert outfit.applied_change(EquipmentSlot.SHIELD) == {}

    def test_applied_change_recorded(self, sword: Weapon, axe: Weapon) -> None:
        """Test the recorded change follows the slot's current item."""
        outfit = Outfit()
        outfit.put(sword, applied={"attack": 1})
        assert outfit.applied_change(EquipmentSlot.WEAPON) == {"attack": 1}

        outfit.put(axe)
        assert outfit.applied_change(EquipmentSlot.WEAPON) == {"attack": 5}

        outfit.take(EquipmentSlot.WEAPON)
        assert outfit.applied == {}

    def test_applied_change_for_empty_slot_rejected(self) -> None:
        """Test a recorded change needs an item in its slot."""
        with pytest.raises(ValidationError):
            Outfit(applied={EquipmentSlot.WEAPON: {"attack": 3}})
