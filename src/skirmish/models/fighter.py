"""Fighters: entities able to take part in a battle.

Fighter is the capability every battle participant must have. Its
variants differ only in how they choose what to do and in what happens
after a battle:

- Player: asks an attached CommandInput for every choice, wakes up healed
  at its respawn location when knocked out, hands over part of its gold.
- Monster: chooses at random, is discarded when it dies, drops gold and
  weighted treasure.

Both variants live in the AnyFighter discriminated union so a fighter can
be saved and loaded as JSON.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from skirmish.core.config import get_settings
from skirmish.core.constants import NO_SUCH_ITEM_MESSAGE, PASS_COMMAND
from skirmish.core.exceptions import CombatError
from skirmish.core.logging import get_logger
from skirmish.models.actions import Action, Attack, BattleCommand, Escape, UseItem
from skirmish.models.entity import Entity
from skirmish.models.inventory import Inventory
from skirmish.models.items import AnyItem, Equippable, Item, Weapon
from skirmish.models.outcome import Outcome
from skirmish.models.stats import StatBlock


if TYPE_CHECKING:
    from skirmish.engine.dice import DiceRoller
    from skirmish.engine.input import CommandInput

logger = get_logger(__name__)


# =============================================================================
# Fighter Capability
# =============================================================================


class Fighter(Entity, ABC):
    """An entity that can fight.

    Subclasses must implement every abstract operation; a subclass that
    misses one cannot be instantiated.

    Attributes:
        battle_commands: Commands the fighter may choose in battle, sorted
            by name, unique by case-insensitive name.
    """

    battle_commands: list[BattleCommand] = Field(
        default_factory=list,
        description="Available battle commands",
    )

    @field_validator("battle_commands")
    @classmethod
    def normalize_commands(cls, commands: list[Action]) -> list[Action]:
        """Sort commands by name; a later command replaces an earlier namesake."""
        unique: dict[str, Action] = {}
        for command in commands:
            unique[command.name.casefold()] = command
        return sorted(unique.values(), key=lambda command: command.name.casefold())

    # =========================================================================
    # Battle Commands
    # =========================================================================

    def add_battle_command(self, command: Action) -> None:
        self.battle_commands = [*self.battle_commands, command]

    def add_battle_commands(self, commands: Iterable[Action]) -> None:
        self.battle_commands = [*self.battle_commands, *commands]

    def remove_battle_command(self, command: Action | str) -> None:
        name = command.name if isinstance(command, Action) else command
        self.battle_commands = [c for c in self.battle_commands if not c.matches(name)]

    def find_battle_command(self, command: Action | str) -> Action | None:
        """Find a registered command by command or name (case-insensitive)."""
        name = command.name if isinstance(command, Action) else command
        for candidate in self.battle_commands:
            if candidate.matches(name):
                return candidate
        return None

    def battle_command_lines(self, header: str = "Battle Commands:") -> list[str]:
        return [header, *(f"❊ {command.name}" for command in self.battle_commands)]

    def status_lines(self) -> list[str]:
        """Entity status, followed by the battle commands when there are any."""
        lines = super().status_lines()
        if self.battle_commands:
            lines.extend(["", *self.battle_command_lines()])
        return lines

    def on_equip(self, item: Equippable, previous: Equippable | None) -> None:
        if isinstance(previous, Weapon) and previous.attack is not None:
            self.remove_battle_command(previous.attack)
        if isinstance(item, Weapon) and item.attack is not None:
            self.add_battle_command(item.attack)

    def on_unequip(self, item: Equippable) -> None:
        if isinstance(item, Weapon) and item.attack is not None:
            self.remove_battle_command(item.attack)

    # =========================================================================
    # Abstract Operations
    # =========================================================================

    @abstractmethod
    def choose_action(self, opponent: Fighter, dice: DiceRoller) -> Action | None:
        """Pick the command to use this round, or None to forfeit."""
        raise NotImplementedError("A Fighter must know how to choose an action.")

    @abstractmethod
    def choose_item_and_target(
        self,
        opponent: Fighter,
        dice: DiceRoller,
    ) -> tuple[Item, Fighter] | None:
        """Pick an inventory item and the fighter to use it on, or None."""
        raise NotImplementedError("A Fighter must know whether it can choose an item.")

    @abstractmethod
    def die(self) -> Outcome:
        """Handle being knocked out at the end of a lost battle."""
        raise NotImplementedError("A Fighter must know how to die.")

    @abstractmethod
    def handle_victory(self, loser: Fighter, dice: DiceRoller) -> Outcome:
        """Collect the spoils from the defeated fighter."""
        raise NotImplementedError("A Fighter must know how to handle victory.")

    @abstractmethod
    def sample_gold(self, dice: DiceRoller) -> int:
        """Return the gold handed to the winner."""
        raise NotImplementedError("A Fighter must know whether it returns gold.")

    @abstractmethod
    def sample_treasure(self, dice: DiceRoller) -> Item | None:
        """Return the treasure handed to the winner, if any."""
        raise NotImplementedError("A Fighter must know whether it returns treasure.")


# =============================================================================
# Player
# =============================================================================


class Player(Fighter):
    """Player-controlled fighter.

    Every choice is read from the attached CommandInput. Invalid answers
    are reported in the next prompt until a valid one or "pass" is given.

    Attributes:
        respawn_location: Where the player wakes up after losing a battle.
    """

    kind: Literal["player"] = "player"
    name: str = Field(default="Player", min_length=1)
    respawn_location: str = Field(
        default_factory=lambda: get_settings().game.default_respawn_location,
        min_length=1,
        description="Where the player wakes up after defeat",
    )

    _input: CommandInput | None = PrivateAttr(default=None)

    def attach_input(self, command_input: CommandInput | None) -> None:
        self._input = command_input

    @property
    def command_input(self) -> CommandInput | None:
        return self._input

    def _ask(self, prompt: str) -> str:
        if self._input is None:
            raise CombatError("Player has no input attached", combatant=self.name)
        return self._input.ask(prompt).strip()

    def _ask_passable(self, prompt: str) -> str | None:
        answer = self._ask(f"{prompt}\n(or type '{PASS_COMMAND}' to forfeit the turn): ")
        return None if answer.casefold() == PASS_COMMAND else answer

    def choose_action(self, opponent: Fighter, dice: DiceRoller) -> Action | None:
        header = "Choose an attack:"
        while True:
            answer = self._ask_passable("\n".join(self.battle_command_lines(header)))
            if answer is None:
                logger.debug("Player passed", player=self.name)
                return None

            command = self.find_battle_command(answer)
            if command is None:
                header = f"You don't have '{answer}'\nTry one of these:"
                continue

            reason = command.is_unavailable(self)
            if reason is not None:
                header = f"{reason}\nTry one of these:"
                continue
            return command

    def choose_item_and_target(
        self,
        opponent: Fighter,
        dice: DiceRoller,
    ) -> tuple[Item, Fighter] | None:
        item: Item | None = None
        prompt = "Which item would you like to use?"
        while item is None:
            answer = self._ask_passable("\n".join([*self.inventory_lines(), "", prompt]))
            if answer is None:
                return None
            item = self.find_item(answer)
            prompt = f"{NO_SUCH_ITEM_MESSAGE}\nWhich item would you like to use?"

        question = f"On whom will you use the item ({self.name} or {opponent.name})?"
        prompt = question
        while True:
            answer = self._ask_passable(prompt)
            if answer is None:
                return None
            for whom in (self, opponent):
                if whom.name.casefold() == answer.casefold():
                    return item, whom
            prompt = f"What?! Choose either {self.name} or {opponent.name}!\n{question}"

    def die(self) -> Outcome:
        self.set_stats(hp=self.stats.max_hp)
        logger.info("Player respawned", player=self.name, location=self.respawn_location)
        return Outcome.success(
            "After being knocked out in battle,",
            f"you wake up in {self.respawn_location}.",
        )

    def handle_victory(self, loser: Fighter, dice: DiceRoller) -> Outcome:
        gold = loser.sample_gold(dice)
        treasure = loser.sample_treasure(dice)
        return Outcome.success(f"{self.name} defeated the {loser.name}!").then(
            self.add_loot(gold, [treasure])
        )

    def sample_gold(self, dice: DiceRoller) -> int:
        """Hand over gold_loss_percent of the purse, rounded down."""
        lost = self.gold * get_settings().game.gold_loss_percent // 100
        self.adjust_gold_by(-lost)
        return lost

    def sample_treasure(self, dice: DiceRoller) -> Item | None:
        return None


# =============================================================================
# Monster
# =============================================================================


class Treasure(BaseModel):
    """One weighted entry of a monster's drop table.

    An entry without an item stands for "no drop".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    item: AnyItem | None = Field(default=None, description="Dropped item")
    odds: int = Field(default=1, ge=1, description="Relative weight")


class Monster(Fighter):
    """Autonomous fighter choosing its commands at random.

    Attributes:
        treasures: Weighted drop table sampled when the monster loses.
    """

    kind: Literal["monster"] = "monster"
    name: str = Field(default="Monster", min_length=1)
    treasures: list[Treasure] = Field(default_factory=list, description="Drop table")

    @field_validator("treasures", mode="before")
    @classmethod
    def coerce_pairs(cls, value: Any) -> Any:
        """Accept (item, odds) pairs alongside treasure mappings."""
        if not isinstance(value, Sequence) or isinstance(value, str):
            return value
        return [
            {"item": element[0], "odds": element[1]}
            if isinstance(element, tuple) and len(element) == 2
            else element
            for element in value
        ]

    def choose_action(self, opponent: Fighter, dice: DiceRoller) -> Action | None:
        available = [c for c in self.battle_commands if c.is_unavailable(self) is None]
        if not available:
            return None
        return dice.choice(available)

    def choose_item_and_target(
        self,
        opponent: Fighter,
        dice: DiceRoller,
    ) -> tuple[Item, Fighter] | None:
        item = self.inventory.random_item(dice)
        if item is None:
            return None
        return item, dice.choice([self, opponent])

    def die(self) -> Outcome:
        logger.info("Monster defeated", monster=self.name)
        return Outcome.success()

    def handle_victory(self, loser: Fighter, dice: DiceRoller) -> Outcome:
        gold = loser.sample_gold(dice)
        self.adjust_gold_by(gold)
        if gold > 0:
            return Outcome.success("Looks like you lost some gold...")
        return Outcome.success()

    def sample_gold(self, dice: DiceRoller) -> int:
        return dice.between(0, self.gold)

    def sample_treasure(self, dice: DiceRoller) -> Item | None:
        if not self.treasures:
            return None
        return dice.weighted([(treasure.item, treasure.odds) for treasure in self.treasures])

    def spawn(self) -> Monster:
        """Return a fresh copy to put into a new battle."""
        return self.model_copy(deep=True)


AnyFighter = Annotated[
    Player | Monster,
    Field(discriminator="kind", description="Any fighter variant"),
]
"""Discriminated union of the fighter variants."""


# =============================================================================
# Factories
# =============================================================================


def _outfit(fighter: Fighter, outfit: Iterable[Equippable]) -> None:
    for item in outfit:
        fighter.wear(item)


def create_player(
    name: str = "Player",
    *,
    stats: Mapping[str, int] | None = None,
    inventory: Sequence[tuple[Item, int]] = (),
    gold: int = 0,
    outfit: Iterable[Equippable] = (),
    battle_commands: Iterable[Action] | None = None,
    respawn_location: str | None = None,
    command_input: CommandInput | None = None,
) -> Player:
    """Create a player, already wearing its starting outfit.

    Args:
        name: Player name.
        stats: Base stats before the outfit's deltas.
        inventory: (item, quantity) pairs carried.
        gold: Starting gold.
        outfit: Items worn from the start.
        battle_commands: Commands; defaults to Attack, Escape and Use.
        respawn_location: Where to wake up after defeat; defaults to the
            game.default_respawn_location setting.
        command_input: Source of the player's choices.

    Returns:
        The new Player.
    """
    commands = list(battle_commands) if battle_commands is not None else [Attack(), Escape(), UseItem()]
    fields: dict[str, Any] = {
        "name": name,
        "stats": StatBlock.model_validate(dict(stats or {})),
        "inventory": Inventory.of(inventory),
        "gold": max(gold, 0),
        "battle_commands": commands,
    }
    if respawn_location is not None:
        fields["respawn_location"] = respawn_location

    player = Player(**fields)
    _outfit(player, outfit)
    player.attach_input(command_input)
    logger.debug("Player created", player=name)
    return player


def create_monster(
    name: str = "Monster",
    *,
    stats: Mapping[str, int] | None = None,
    inventory: Sequence[tuple[Item, int]] = (),
    gold: int = 0,
    outfit: Iterable[Equippable] = (),
    battle_commands: Iterable[Action] | None = None,
    treasures: Sequence[tuple[Item | None, int]] = (),
) -> Monster:
    """Create a monster, already wearing its outfit.

    Battle commands default to a single Attack.
    """
    commands = list(battle_commands) if battle_commands is not None else [Attack()]
    monster = Monster(
        name=name,
        stats=StatBlock.model_validate(dict(stats or {})),
        inventory=Inventory.of(inventory),
        gold=max(gold, 0),
        battle_commands=commands,
        treasures=list(treasures),
    )
    _outfit(monster, outfit)
    logger.debug("Monster created", monster=name)
    return monster


__all__ = [
    "Fighter",
    "Player",
    "Treasure",
    "Monster",
    "AnyFighter",
    "create_player",
    "create_monster",
]
