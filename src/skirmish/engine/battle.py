"""Battle between two fighters.

A battle runs rounds until one fighter is knocked out or one escapes:

1. Turn order: a draw in [0, total agility) below the first fighter's
   agility lets it act first. Higher agility raises the odds of going
   first without guaranteeing it.
2. Both fighters choose a command, first fighter first, regardless of
   turn order. A fighter may forfeit by choosing nothing.
3. The commands resolve in turn order. After each one an escape ends the
   battle with no winner, and a knock-out skips the remaining command.

A decided battle gives the winner its spoils and sends the loser through
its death handling. An escape does neither.

A battle only starts when at least one fighter holds a decisive command
(an Attack or Escape that can succeed). Commands do not change while a
battle runs, so without one the rounds could never end.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from skirmish.core.exceptions import InvalidGameStateError, UnfightableEntityError
from skirmish.core.logging import get_logger, log_context
from skirmish.engine.dice import DiceRoller
from skirmish.engine.narration import Narration
from skirmish.models.fighter import Fighter


if TYPE_CHECKING:
    from skirmish.models.actions import Action

logger = get_logger(__name__)


# =============================================================================
# Battle State
# =============================================================================


class BattleState(StrEnum):
    """Lifecycle of a battle."""

    IN_PROGRESS = "in_progress"
    """Created, or rounds are being played."""

    FINISHED = "finished"
    """One fighter was knocked out."""

    ESCAPED = "escaped"
    """A fighter escaped; nobody won."""


@dataclass(frozen=True)
class BattleResult:
    """How a battle ended.

    Attributes:
        winner: The fighter left standing, None after an escape.
        loser: The knocked-out fighter, None after an escape.
        escaped: Whether the battle ended by escape.
        rounds: Number of rounds played.
    """

    winner: Fighter | None
    loser: Fighter | None
    escaped: bool
    rounds: int


# =============================================================================
# Battle
# =============================================================================


class Battle:
    """A single fight between two distinct fighters.

    The battle has exclusive use of both fighters until determine_winner
    returns. It can only be run once.

    Example:
        >>> battle = Battle(player, monster, dice=DiceRoller(seed=1))
        >>> winner = battle.determine_winner()
        >>> battle.result.rounds > 0
        True
    """

    def __init__(
        self,
        entity_a: object,
        entity_b: object,
        *,
        dice: DiceRoller | None = None,
        narration: Narration | None = None,
    ) -> None:
        """Initialize the battle.

        Args:
            entity_a: First participant, the reference for turn order.
            entity_b: Second participant.
            dice: Random source; defaults to one seeded from settings.
            narration: Stream receiving the narrated text.

        Raises:
            UnfightableEntityError: If a participant is not a Fighter, or
                both participants are the same fighter.
        """
        for entity in (entity_a, entity_b):
            if not isinstance(entity, Fighter):
                entity_type = type(entity).__name__
                raise UnfightableEntityError(
                    f"You can't start a battle with an Entity of type {entity_type} "
                    "as it is not a Fighter",
                    entity_type=entity_type,
                )
        if entity_a is entity_b:
            raise UnfightableEntityError(
                f"{entity_a.name} cannot fight itself",
                entity_type=type(entity_a).__name__,
            )

        self._entity_a: Fighter = entity_a
        self._entity_b: Fighter = entity_b
        self._dice = dice if dice is not None else DiceRoller.from_settings()
        self._narration = narration if narration is not None else Narration()
        self._state = BattleState.IN_PROGRESS
        self._round = 0
        self._result: BattleResult | None = None

        logger.debug(
            "Battle initialized",
            entity_a=entity_a.name,
            entity_b=entity_b.name,
            seed=self._dice.seed,
        )

    @property
    def participants(self) -> tuple[Fighter, Fighter]:
        return self._entity_a, self._entity_b

    @property
    def state(self) -> BattleState:
        return self._state

    @property
    def current_round(self) -> int:
        return self._round

    @property
    def narration(self) -> Narration:
        return self._narration

    @property
    def dice(self) -> DiceRoller:
        return self._dice

    @property
    def result(self) -> BattleResult | None:
        """How the battle ended, None while it has not been run."""
        return self._result

    def _anyone_dead(self) -> bool:
        return self._entity_a.is_dead or self._entity_b.is_dead

    def _can_be_decided(self) -> bool:
        return any(
            command.decisive
            for fighter in self.participants
            for command in fighter.battle_commands
        )

    def determine_opening_pair(self) -> tuple[Fighter, Fighter]:
        """Draw who acts first this round.

        Returns:
            (first actor, second actor).
        """
        total_agility = self._entity_a.stats.agility + self._entity_b.stats.agility
        if self._dice.below(total_agility) < self._entity_a.stats.agility:
            return self._entity_a, self._entity_b
        return self._entity_b, self._entity_a

    def _choose_actions(self) -> dict[int, Action | None]:
        choices: dict[int, Action | None] = {}
        for actor, opponent in (
            (self._entity_a, self._entity_b),
            (self._entity_b, self._entity_a),
        ):
            choices[id(actor)] = actor.choose_action(opponent, self._dice)
        return choices

    def _fight_to_finish_or_escape(self) -> bool:
        """Play rounds until a knock-out or an escape.

        Returns:
            True if the battle ended by escape.
        """
        while not self._anyone_dead():
            self._round += 1
            opening = self.determine_opening_pair()
            choices = self._choose_actions()
            logger.debug("Round started", round=self._round, first=opening[0].name)

            for actor, target in (opening, (opening[1], opening[0])):
                action = choices[id(actor)]
                if action is None:
                    logger.debug("Turn forfeited", round=self._round, actor=actor.name)
                    continue

                self._narration.record(action.apply(actor, target, self._dice))

                if actor.escaped:
                    actor.escaped = False
                    logger.info("Fighter escaped", round=self._round, actor=actor.name)
                    return True

                if self._anyone_dead():
                    break

        return False

    def determine_winner(self) -> Fighter | None:
        """Run the battle to its end.

        Returns:
            The winner, or None if a fighter escaped.

        Raises:
            InvalidGameStateError: If the battle was already run, both
                fighters are knocked out before it starts, or neither
                fighter holds a decisive command.
        """
        if self._state != BattleState.IN_PROGRESS or self._result is not None:
            raise InvalidGameStateError(
                "Battle has already been run",
                current_state=self._state,
                expected_states=[BattleState.IN_PROGRESS],
            )
        if self._entity_a.is_dead and self._entity_b.is_dead:
            raise InvalidGameStateError(
                "Both fighters are knocked out before the battle",
                current_state=self._state,
            )
        if not self._anyone_dead() and not self._can_be_decided():
            raise InvalidGameStateError(
                "Neither fighter has a command that can end the battle",
                current_state=self._state,
            )

        for fighter in self.participants:
            fighter.escaped = False

        with log_context(battle=f"{self._entity_a.name} vs {self._entity_b.name}", seed=self._dice.seed):
            return self._run()

    def _run(self) -> Fighter | None:
        logger.info(
            "Battle started",
            entity_a=self._entity_a.name,
            entity_b=self._entity_b.name,
        )
        self._narration.write(f"{self._entity_a.name} enters a battle with {self._entity_b.name}!")

        if self._fight_to_finish_or_escape():
            self._state = BattleState.ESCAPED
            self._result = BattleResult(winner=None, loser=None, escaped=True, rounds=self._round)
            return None

        if self._entity_a.is_dead:
            loser, winner = self._entity_a, self._entity_b
        else:
            loser, winner = self._entity_b, self._entity_a

        self._narration.record(winner.handle_victory(loser, self._dice))
        self._narration.record(loser.die())

        self._state = BattleState.FINISHED
        self._result = BattleResult(winner=winner, loser=loser, escaped=False, rounds=self._round)
        logger.info(
            "Battle finished",
            winner=winner.name,
            loser=loser.name,
            rounds=self._round,
        )
        return winner


__all__ = [
    "BattleState",
    "BattleResult",
    "Battle",
]
