"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Skirmish test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from skirmish.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "SKIRMISH_DEBUG": "true",
        "SKIRMISH_LOG_LEVEL": "DEBUG",
        "SKIRMISH_GAME_SEED": "99",
        "SKIRMISH_GAME_GOLD_LOSS_PERCENT": "25",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice() -> Any:
    """Provide a seeded dice roller.

    Returns:
        DiceRoller with a fixed seed.
    """
    from skirmish.engine.dice import DiceRoller

    return DiceRoller(seed=1234)


@pytest.fixture
def narration() -> Any:
    """Provide an empty narration stream."""
    from skirmish.engine.narration import Narration

    return Narration()


# =============================================================================
# Item Fixtures
# =============================================================================


@pytest.fixture
def bread() -> Any:
    """Food recovering 5 HP."""
    from skirmish.models.items import Food

    return Food(name="Bread", recovers=5)


@pytest.fixture
def sword() -> Any:
    """Weapon granting +3 attack and a Slash command."""
    from skirmish.models.actions import Attack
    from skirmish.models.items import Weapon
    from skirmish.models.stats import StatChange

    return Weapon(
        name="Sword",
        stat_change=StatChange(attack=3, agility=1),
        attack=Attack(name="Slash", strength=2),
    )


@pytest.fixture
def axe() -> Any:
    """Weapon granting +5 attack and a Chop command."""
    from skirmish.models.actions import Attack
    from skirmish.models.items import Weapon
    from skirmish.models.stats import StatChange

    return Weapon(
        name="Axe",
        stat_change=StatChange(attack=5),
        attack=Attack(name="Chop", strength=3, success_rate=80),
    )


@pytest.fixture
def buckler() -> Any:
    """Shield granting +2 defense and +5 max HP."""
    from skirmish.models.items import Shield
    from skirmish.models.stats import StatChange

    return Shield(name="Buckler", stat_change=StatChange(defense=2, max_hp=5))


# =============================================================================
# Fighter Fixtures
# =============================================================================


@pytest.fixture
def hero() -> Any:
    """Provide a player with the default commands and no input attached.

    Returns:
        Player with hp 30, attack 3, defense 2, agility 3.
    """
    from skirmish.models.fighter import create_player

    return create_player(
        "Hero",
        stats={"max_hp": 30, "attack": 3, "defense": 2, "agility": 3},
        gold=40,
        respawn_location="the village inn",
    )


@pytest.fixture
def goblin() -> Any:
    """Provide a monster that only attacks.

    Returns:
        Monster with hp 50, attack 6, defense 4, agility 1.
    """
    from skirmish.models.fighter import create_monster

    return create_monster(
        "Goblin",
        stats={"max_hp": 50, "attack": 6, "defense": 4, "agility": 1},
        gold=20,
    )


@pytest.fixture
def temp_save_path(tmp_path: Path) -> Path:
    """Provide a save file path inside a temporary directory.

    Args:
        tmp_path: Pytest temporary path fixture.

    Returns:
        Path of a not-yet-existing save file.
    """
    return tmp_path / "saves" / "fighter.json"
