"""Storage module for Skirmish persistence.

Provides JSON save files for fighters (players and monsters).
"""

from skirmish.storage.saves import load_fighter, save_fighter

__all__ = [
    "save_fighter",
    "load_fighter",
]
