"""Pydantic V2 models for fighters, their stats, items and commands.

Submodules:
    outcome: Narrated result of every mutating operation
    stats: StatBlock snapshot and equipment StatChange deltas
    actions: Battle commands (Attack, UseItem, Escape) and the damage formula
    items: Items and equippable items, one EquipmentSlot each
    inventory: Inventory and Outfit containers
    entity: Entity with equip/unequip, item use and loot
    fighter: Fighter capability with its Player and Monster variants

Example:
    >>> from skirmish.models import Food, create_player
    >>> hero = create_player("Hero", stats={"max_hp": 30, "hp": 10})
    >>> hero.add_item(Food(name="Bread", recovers=5))
    >>> hero.use_item("bread", hero).ok
    True
    >>> hero.stats.hp
    15
"""

from __future__ import annotations

# =============================================================================
# Outcomes and Stats
# =============================================================================
from skirmish.models.outcome import Outcome
from skirmish.models.stats import (
    EQUIPMENT_AFFECTED_STATS,
    POSITIVE_STATS,
    STAT_NAMES,
    StatBlock,
    StatChange,
)

# =============================================================================
# Battle Commands
# =============================================================================
from skirmish.models.actions import (
    Action,
    Attack,
    BattleCommand,
    Escape,
    UseItem,
    calculate_damage,
)

# =============================================================================
# Items and Containers
# =============================================================================
from skirmish.models.items import (
    AnyEquippable,
    AnyItem,
    Equippable,
    EquipmentSlot,
    Food,
    Helmet,
    Item,
    Legs,
    Shield,
    Torso,
    Weapon,
)
from skirmish.models.inventory import Inventory, InventoryEntry, Outfit

# =============================================================================
# Entities
# =============================================================================
from skirmish.models.entity import Entity
from skirmish.models.fighter import (
    AnyFighter,
    Fighter,
    Monster,
    Player,
    Treasure,
    create_monster,
    create_player,
)


__all__ = [
    # Outcomes and Stats
    "Outcome",
    "STAT_NAMES",
    "POSITIVE_STATS",
    "EQUIPMENT_AFFECTED_STATS",
    "StatBlock",
    "StatChange",
    # Battle Commands
    "Action",
    "Attack",
    "UseItem",
    "Escape",
    "BattleCommand",
    "calculate_damage",
    # Items and Containers
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
    "InventoryEntry",
    "Inventory",
    "Outfit",
    # Entities
    "Entity",
    "Fighter",
    "Player",
    "Monster",
    "Treasure",
    "AnyFighter",
    "create_player",
    "create_monster",
]
