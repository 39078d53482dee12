"""Tests for the battle state machine."""

from __future__ import annotations

import pytest
import structlog

from skirmish.core.exceptions import InvalidGameStateError, UnfightableEntityError
from skirmish.engine.battle import Battle, BattleResult, BattleState
from skirmish.engine.dice import DiceRoller
from skirmish.engine.input import ScriptedInput
from skirmish.engine.narration import Narration
from skirmish.models.actions import Action, Attack, Escape, UseItem
from skirmish.models.entity import Entity
from skirmish.models.fighter import Fighter, Monster, Player, create_monster


class LowDice(DiceRoller):
    """Dice whose integer draws are always 0 and whose spread is neutral."""

    def below(self, upper: int) -> int:
        return 0

    def uniform(self, low: float, high: float) -> float:
        return 1.0


class TestBattleSetup:
    """Tests for battle construction."""

    def test_non_fighter_rejected(self, goblin: Monster) -> None:
        """Test a plain entity cannot enter a battle."""
        with pytest.raises(UnfightableEntityError) as exc_info:
            Battle(Entity(name="Statue"), goblin)

        assert exc_info.value.details["entity_type"] == "Entity"

    def test_arbitrary_object_rejected(self, goblin: Monster) -> None:
        """Test non-entities are rejected too."""
        with pytest.raises(UnfightableEntityError):
            Battle(goblin, object())

    def test_self_battle_rejected(self, goblin: Monster) -> None:
        """Test a fighter cannot fight itself."""
        with pytest.raises(UnfightableEntityError):
            Battle(goblin, goblin)

    def test_unfightable_is_invalid_state(self, goblin: Monster) -> None:
        """Test the contract violation is an InvalidGameStateError."""
        with pytest.raises(InvalidGameStateError):
            Battle(Entity(), goblin)

    def test_initial_state(self, hero: Player, goblin: Monster, dice: DiceRoller) -> None:
        """Test a new battle is in progress with no result."""
        battle = Battle(hero, goblin, dice=dice)

        assert battle.state == BattleState.IN_PROGRESS
        assert battle.result is None
        assert battle.current_round == 0
        assert battle.participants == (hero, goblin)
        assert battle.dice is dice

    def test_default_dice_from_settings(
        self, hero: Player, goblin: Monster, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the default dice is seeded from game.seed."""
        monkeypatch.setenv("SKIRMISH_GAME_SEED", "5")

        assert Battle(hero, goblin).dice.seed == 5


class TestTurnOrder:
    """Tests for agility-weighted turn order."""

    def test_weighted_by_agility(self, hero: Player, goblin: Monster) -> None:
        """Test agility 3 vs 1 acts first about three times in four."""
        battle = Battle(hero, goblin, dice=DiceRoller(seed=7))

        firsts = sum(battle.determine_opening_pair()[0] is hero for _ in range(4000))

        assert 0.72 < firsts / 4000 < 0.78

    def test_slower_still_acts_first_sometimes(self, hero: Player, goblin: Monster) -> None:
        """Test higher agility does not guarantee the first move."""
        battle = Battle(hero, goblin, dice=DiceRoller(seed=8))

        firsts = [battle.determine_opening_pair()[0].name for _ in range(200)]

        assert set(firsts) == {"Hero", "Goblin"}

    def test_low_draw_favors_first_entity(self, hero: Player, goblin: Monster) -> None:
        """Test a draw inside the first entity's agility picks it."""
        battle = Battle(goblin, hero, dice=LowDice(seed=0))

        assert battle.determine_opening_pair() == (goblin, hero)


class TestDeadAtStart:
    """Tests for battles where a participant is already knocked out."""

    def test_dead_second_loses(self, hero: Player, goblin: Monster, narration: Narration) -> None:
        """Test the battle resolves immediately against the dead fighter."""
        goblin.set_stats(hp=0)
        battle = Battle(hero, goblin, dice=DiceRoller(seed=1), narration=narration)

        assert battle.determine_winner() is hero
        assert battle.result == BattleResult(winner=hero, loser=goblin, escaped=False, rounds=0)
        assert narration.lines[0] == "Hero enters a battle with Goblin!"

    def test_dead_player_respawns(self, hero: Player, goblin: Monster) -> None:
        """Test a knocked-out player loses without a round and wakes up healed."""
        hero.set_stats(hp=0)

        winner = Battle(hero, goblin, dice=DiceRoller(seed=1)).determine_winner()

        assert winner is goblin
        assert hero.stats.hp == hero.stats.max_hp
        assert hero.gold == 20

    def test_both_dead_refused(self, hero: Player, goblin: Monster) -> None:
        """Test a battle between two knocked-out fighters cannot run."""
        hero.set_stats(hp=0)
        goblin.set_stats(hp=0)

        with pytest.raises(InvalidGameStateError):
            Battle(hero, goblin, dice=DiceRoller(seed=1)).determine_winner()


class TestUndecidableBattles:
    """Tests for battles no command could ever end."""

    def test_nothing_to_do_refused(self) -> None:
        """Test two fighters that can only use items from empty bags never start."""
        first = create_monster("First", battle_commands=[UseItem()])
        second = create_monster("Second", battle_commands=[UseItem()])
        battle = Battle(first, second, dice=DiceRoller(seed=1))

        with pytest.raises(InvalidGameStateError):
            battle.determine_winner()

        assert battle.current_round == 0
        assert battle.result is None

    def test_never_succeeding_commands_refused(self) -> None:
        """Test commands with a zero success rate cannot end a battle."""
        first = create_monster("First", battle_commands=[Attack(success_rate=0)])
        second = create_monster("Second", battle_commands=[Attack(success_rate=0), Escape(success_rate=0)])

        with pytest.raises(InvalidGameStateError):
            Battle(first, second, dice=DiceRoller(seed=1)).determine_winner()

    def test_one_decisive_command_is_enough(self) -> None:
        """Test a single fighter able to finish lets the battle run."""
        idle = create_monster("Idle", battle_commands=[Attack(success_rate=0)], stats={"max_hp": 5})
        hitter = create_monster("Hitter", battle_commands=[Attack(success_rate=50)])

        assert Battle(idle, hitter, dice=DiceRoller(seed=1)).determine_winner() is hitter

    def test_commands_are_decisive(self) -> None:
        """Test which commands count as able to end a battle."""
        assert Attack().decisive
        assert Escape().decisive
        assert not Attack(success_rate=0).decisive
        assert not UseItem().decisive


class TestRounds:
    """Tests for round resolution."""

    def test_death_skips_remaining_action(self) -> None:
        """Test a knock-out ends the round before the other fighter acts."""
        brute = create_monster("Brute", stats={"max_hp": 40, "attack": 50, "agility": 5})
        victim = create_monster("Victim", stats={"max_hp": 10, "attack": 9})
        battle = Battle(brute, victim, dice=LowDice(seed=0))

        assert battle.determine_winner() is brute
        assert brute.stats.hp == 40
        assert battle.result is not None
        assert battle.result.rounds == 1

    def test_escape_ends_without_winner(self, narration: Narration) -> None:
        """Test an escape ends the battle with no victory or death handling."""
        runner = create_monster("Runner", battle_commands=[Escape()], gold=30)
        chaser = create_monster("Chaser", stats={"attack": 20}, gold=5)
        battle = Battle(runner, chaser, dice=LowDice(seed=0), narration=narration)

        assert battle.determine_winner() is None
        assert battle.state == BattleState.ESCAPED
        assert battle.result == BattleResult(winner=None, loser=None, escaped=True, rounds=1)
        assert not runner.escaped
        assert runner.stats.hp == runner.stats.max_hp
        assert (runner.gold, chaser.gold) == (30, 5)
        assert narration.lines[-1] == "Successful escape!"

    def test_stale_escape_flag_ignored(self) -> None:
        """Test an escape flag left from earlier is not read as an escape."""
        brute = create_monster("Brute", stats={"max_hp": 40, "attack": 50, "agility": 5})
        victim = create_monster("Victim", stats={"max_hp": 10, "attack": 9})
        brute.escaped = True
        victim.escaped = True
        battle = Battle(brute, victim, dice=LowDice(seed=0))

        assert battle.determine_winner() is brute
        assert battle.state == BattleState.FINISHED
        assert not brute.escaped

    def test_forfeit_is_skipped(self, goblin: Monster) -> None:
        """Test a fighter with nothing to do never acts."""
        blob = Monster(name="Blob", stats={"max_hp": 12})
        battle = Battle(blob, goblin, dice=DiceRoller(seed=3))

        assert battle.determine_winner() is goblin
        assert goblin.stats.hp == 50

    def test_choices_in_pair_order(self) -> None:
        """Test both fighters choose first-entity first, whoever acts first."""
        calls: list[str] = []

        class Recording(Monster):
            def choose_action(self, opponent: Fighter, dice: DiceRoller) -> Action | None:
                calls.append(self.name)
                return super().choose_action(opponent, dice)

        first = Recording(name="First", stats={"max_hp": 30, "agility": 1}, battle_commands=[Attack()])
        second = Recording(name="Second", stats={"max_hp": 30, "agility": 9}, battle_commands=[Attack()])

        Battle(first, second, dice=DiceRoller(seed=4)).determine_winner()

        assert calls[0::2] == ["First"] * (len(calls) // 2)
        assert calls[1::2] == ["Second"] * (len(calls) // 2)

    def test_player_choices_drive_battle(self, hero: Player, narration: Narration) -> None:
        """Test the player's answers are used, passes included."""
        rat = create_monster("Rat", stats={"max_hp": 3, "attack": 1})
        hero.attach_input(ScriptedInput(["pass"] + ["attack"] * 10))

        winner = Battle(hero, rat, dice=DiceRoller(seed=2), narration=narration).determine_winner()

        assert winner is hero
        assert "Hero uses Attack!" in narration.lines


class TestDetermineWinner:
    """Tests for the end of a battle."""

    def test_runs_once(self, hero: Player, goblin: Monster) -> None:
        """Test a finished battle cannot be run again."""
        goblin.set_stats(hp=0)
        battle = Battle(hero, goblin, dice=DiceRoller(seed=1))
        battle.determine_winner()

        with pytest.raises(InvalidGameStateError):
            battle.determine_winner()

    def test_player_defeat(self, hero: Player, narration: Narration) -> None:
        """Test a beaten player respawns and hands over gold."""
        ogre = create_monster("Ogre", stats={"max_hp": 500, "attack": 40, "defense": 40, "agility": 5})
        hero.attach_input(ScriptedInput(["attack"] * 50))

        winner = Battle(hero, ogre, dice=DiceRoller(seed=6), narration=narration).determine_winner()

        assert winner is ogre
        assert hero.stats.hp == hero.stats.max_hp
        assert hero.gold == 20
        assert ogre.gold == 20
        assert "you wake up in the village inn." in narration.lines

    def test_monster_defeat(self, hero: Player, narration: Narration) -> None:
        """Test a beaten monster drops loot for the player."""
        rat = create_monster("Rat", stats={"max_hp": 2}, gold=0)
        hero.attach_input(ScriptedInput(["attack"] * 10))
        battle = Battle(hero, rat, dice=DiceRoller(seed=9), narration=narration)

        assert battle.determine_winner() is hero
        assert battle.state == BattleState.FINISHED
        assert rat.is_dead
        assert "Hero defeated the Rat!" in narration.lines
        assert "Loot: nothing!" in narration.lines

    def test_log_context_bound_while_running(self, hero: Player, goblin: Monster, narration: Narration) -> None:
        """Test log entries made during the battle carry the battle's names."""
        seen: list[dict[str, object]] = []
        narration.subscribe(lambda line: seen.append(structlog.contextvars.get_contextvars()))
        goblin.set_stats(hp=0)

        Battle(hero, goblin, dice=DiceRoller(seed=1), narration=narration).determine_winner()

        assert seen
        assert seen[0]["battle"] == "Hero vs Goblin"
        assert seen[0]["seed"] == 1
        assert "battle" not in structlog.contextvars.get_contextvars()
