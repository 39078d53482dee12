"""Game-wide constants for the Skirmish combat core.

Damage formula constants are fixed by design and are not exposed as
settings.
"""

from __future__ import annotations

# =============================================================================
# Stat Rules
# =============================================================================

MIN_STAT_VALUE = 1
"""Lowest value max_hp, attack, defense and agility may take."""

MIN_HP_AFTER_UNEQUIP = 1
"""Removing equipment never leaves an entity with less HP than this."""

# =============================================================================
# Damage Formula
# =============================================================================

DEFENSE_SCALE = 10
"""Defense at which half of the incoming power is absorbed."""

MIN_DAMAGE_MULTIPLIER = 0.1
"""Defense can never absorb more than 90% of the incoming power."""

MIN_DAMAGE = 1
"""A successful attack always deals at least this much damage."""

DAMAGE_SPREAD_LOW = 0.9
"""Lower bound of the random spread applied to attack power."""

DAMAGE_SPREAD_HIGH = 1.1
"""Upper bound of the random spread applied to attack power."""

MAX_SUCCESS_RATE = 100
"""Success rates are percentages."""

# =============================================================================
# Player-Facing Messages
# =============================================================================

NO_SUCH_ITEM_MESSAGE = "What?! You don't have THAT!"
NOT_EQUIPPED_MESSAGE = "You are not equipping THAT!"
CANNOT_DROP_MESSAGE = "You cannot drop that item."

PASS_COMMAND = "pass"
"""Typed by a player to forfeit the current choice."""
