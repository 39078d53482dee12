"""Battle engine for Skirmish.

Submodules:
    dice: Seedable random source for every draw the core makes
    narration: Append-only stream of player-facing text
    input: CommandInput protocol and ScriptedInput answers
    battle: Battle state machine between two fighters

Example:
    >>> from skirmish.engine import Battle, DiceRoller, Narration
    >>>
    >>> narration = Narration()
    >>> battle = Battle(hero, goblin, dice=DiceRoller(seed=3), narration=narration)
    >>> winner = battle.determine_winner()
    >>> print(narration.text)
"""

from __future__ import annotations

from skirmish.engine.battle import Battle, BattleResult, BattleState
from skirmish.engine.dice import DiceRoller
from skirmish.engine.input import CommandInput, ScriptedInput
from skirmish.engine.narration import Narration


__all__ = [
    "DiceRoller",
    "Narration",
    "CommandInput",
    "ScriptedInput",
    "BattleState",
    "BattleResult",
    "Battle",
]
