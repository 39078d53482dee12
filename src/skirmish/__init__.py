"""Skirmish - combat and entity-state core of a turn-based text adventure.

Two fighters exchange battle commands until one is knocked out or one
escapes. Equipping items alters a fighter's stats, and inventories change
as a side effect of battles, item use and equipment.

Example:
    >>> from skirmish import Battle, DiceRoller, ScriptedInput, create_monster, create_player
    >>>
    >>> hero = create_player(
    ...     "Hero",
    ...     stats={"max_hp": 30, "attack": 3, "defense": 2},
    ...     command_input=ScriptedInput(["attack"] * 50),
    ... )
    >>> slime = create_monster("Slime", stats={"max_hp": 10, "attack": 1}, gold=5)
    >>> winner = Battle(hero, slime, dice=DiceRoller(seed=42)).determine_winner()

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Stats, items, inventories, entities and fighters.
    engine: Dice, narration, input and the battle state machine.
    storage: JSON save files.
"""

from __future__ import annotations

# Core
from skirmish.core.config import Settings, get_settings
from skirmish.core.logging import configure_logging
from skirmish.core.exceptions import SkirmishError

# Models
from skirmish.models import (
    Attack,
    Entity,
    Escape,
    Fighter,
    Food,
    Item,
    Monster,
    Outcome,
    Player,
    StatBlock,
    UseItem,
    create_monster,
    create_player,
)

# Engine
from skirmish.engine import Battle, BattleState, DiceRoller, Narration, ScriptedInput

# Storage
from skirmish.storage import load_fighter, save_fighter


__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "configure_logging",
    "SkirmishError",
    # Models
    "Outcome",
    "StatBlock",
    "Item",
    "Food",
    "Attack",
    "UseItem",
    "Escape",
    "Entity",
    "Fighter",
    "Player",
    "Monster",
    "create_player",
    "create_monster",
    # Engine
    "DiceRoller",
    "Narration",
    "ScriptedInput",
    "Battle",
    "BattleState",
    # Storage
    "save_fighter",
    "load_fighter",
    # Version
    "__version__",
]
