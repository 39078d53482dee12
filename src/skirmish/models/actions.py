"""Battle commands a fighter can choose during a round.

Commands form a closed set of variants (Attack, UseItem, Escape) joined in
the BattleCommand discriminated union. Each variant is an immutable value
whose apply(actor, target, dice) is a pure function of the two fighters and
the random draws, returning a narrated Outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from skirmish.core.constants import (
    DAMAGE_SPREAD_HIGH,
    DAMAGE_SPREAD_LOW,
    DEFENSE_SCALE,
    MAX_SUCCESS_RATE,
    MIN_DAMAGE,
    MIN_DAMAGE_MULTIPLIER,
)
from skirmish.core.logging import get_logger
from skirmish.models.outcome import Outcome


if TYPE_CHECKING:
    from skirmish.engine.dice import DiceRoller
    from skirmish.models.fighter import Fighter

logger = get_logger(__name__)


def calculate_damage(attack: int, defense: int, strength: int, *, spread: float = 1.0) -> int:
    """Compute the damage of a successful attack.

    Power is attack * strength (scaled by the random spread). Defense
    removes a share defense / (defense + DEFENSE_SCALE) of it, but never
    more than 1 - MIN_DAMAGE_MULTIPLIER, and at least MIN_DAMAGE is dealt.

    Args:
        attack: Attacker's attack stat.
        defense: Defender's defense stat.
        strength: Strength of the command used.
        spread: Random multiplier in [DAMAGE_SPREAD_LOW, DAMAGE_SPREAD_HIGH].

    Returns:
        Damage to subtract from the defender's HP.

    Example:
        >>> calculate_damage(6, 2, 5)
        25
    """
    power = attack * strength * spread
    reduction = defense / (defense + DEFENSE_SCALE)
    multiplier = max(MIN_DAMAGE_MULTIPLIER, 1 - reduction)
    return max(MIN_DAMAGE, round(power * multiplier))


class Action(BaseModel, ABC):
    """Base of every battle command.

    Attributes:
        name: Command name, unique per fighter (case-insensitive).
        strength: Potency multiplier of the command.
        success_rate: Percent chance (0-100) the command takes effect.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="Action", min_length=1, description="Command name")
    strength: int = Field(default=1, ge=0, description="Potency multiplier")
    success_rate: int = Field(
        default=MAX_SUCCESS_RATE,
        ge=0,
        le=MAX_SUCCESS_RATE,
        description="Percent chance of success",
    )

    def matches(self, name: str) -> bool:
        return self.name.casefold() == name.strip().casefold()

    def is_unavailable(self, actor: Fighter) -> str | None:
        """Explain why the actor cannot use this command right now.

        Returns:
            A message for the player, or None when the command is usable.
        """
        return None

    @property
    def decisive(self) -> bool:
        """Whether using the command can bring a battle to an end."""
        return False

    def apply(self, actor: Fighter, target: Fighter, dice: DiceRoller) -> Outcome:
        """Run the success check, then resolve the command.

        A failed check leaves both fighters untouched.
        """
        if self.success_rate < MAX_SUCCESS_RATE and dice.percent() >= self.success_rate:
            logger.debug("Command failed", command=self.name, actor=actor.name)
            return Outcome.failure(f"{actor.name} tries to use {self.name}, but it fails.")
        return self.resolve(actor, target, dice)

    @abstractmethod
    def resolve(self, actor: Fighter, target: Fighter, dice: DiceRoller) -> Outcome:
        """Apply the command's effect once the success check passed."""
        raise NotImplementedError("A battle command must implement resolve")


class Attack(Action):
    """Damage-dealing command."""

    kind: Literal["attack"] = "attack"
    name: str = Field(default="Attack", min_length=1)

    @property
    def decisive(self) -> bool:
        return self.success_rate > 0

    def resolve(self, actor: Fighter, target: Fighter, dice: DiceRoller) -> Outcome:
        spread = dice.uniform(DAMAGE_SPREAD_LOW, DAMAGE_SPREAD_HIGH)
        damage = calculate_damage(
            actor.stats.attack,
            target.stats.defense,
            self.strength,
            spread=spread,
        )

        before = target.stats.hp
        target.set_stats(hp=before - damage)
        after = target.stats.hp

        logger.debug(
            "Attack resolved",
            command=self.name,
            actor=actor.name,
            target=target.name,
            damage=before - after,
        )
        return Outcome.success(
            f"{actor.name} uses {self.name}!",
            f"{target.name} takes {before - after} damage!",
            f"{target.name}'s HP: {before} -> {after}",
        )


class UseItem(Action):
    """Use an item from the actor's inventory on either fighter."""

    kind: Literal["use"] = "use"
    name: str = Field(default="Use", min_length=1)

    def is_unavailable(self, actor: Fighter) -> str | None:
        if actor.inventory.is_empty:
            return f"{actor.name}'s inventory is empty!"
        return None

    def resolve(self, actor: Fighter, target: Fighter, dice: DiceRoller) -> Outcome:
        choice = actor.choose_item_and_target(target, dice)
        if choice is None:
            return Outcome.failure(f"{actor.name} decides not to use anything.")

        item, whom = choice
        return actor.use_item(item, whom)


class Escape(Action):
    """Attempt to flee; likelier the faster the actor is than the target."""

    kind: Literal["escape"] = "escape"
    name: str = Field(default="Escape", min_length=1)

    @property
    def decisive(self) -> bool:
        return self.success_rate > 0

    def resolve(self, actor: Fighter, target: Fighter, dice: DiceRoller) -> Outcome:
        total_agility = actor.stats.agility + target.stats.agility
        if dice.chance(actor.stats.agility, total_agility):
            actor.escaped = True
            logger.info("Escape succeeded", actor=actor.name)
            return Outcome.success("Successful escape!")

        actor.escaped = False
        return Outcome.failure("Failed escape!")


BattleCommand = Annotated[
    Attack | UseItem | Escape,
    Field(discriminator="kind", description="A selectable battle command"),
]
"""Discriminated union of all battle command variants."""


__all__ = [
    "calculate_damage",
    "Action",
    "Attack",
    "UseItem",
    "Escape",
    "BattleCommand",
]
