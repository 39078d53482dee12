"""Seedable random source for battles and autonomous choices.

Every random draw the core makes (turn order, success checks, escape
attempts, damage spread, monster choices, loot sampling) goes through a
DiceRoller so tests can force deterministic outcomes.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from skirmish.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class DiceRoller:
    """Random number source owning a private generator.

    Example:
        >>> dice = DiceRoller(seed=7)
        >>> 0 <= dice.below(10) < 10
        True
    """

    def __init__(self, *, seed: int | None = None, rng: random.Random | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional seed for reproducible draws.
            rng: Optional generator to draw from instead of a new one.
        """
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @classmethod
    def from_settings(cls) -> DiceRoller:
        """Create a roller seeded from the game settings."""
        from skirmish.core.config import get_settings

        return cls(seed=get_settings().game.seed)

    @property
    def seed(self) -> int | None:
        """Seed the roller was created with, if any."""
        return self._seed

    def below(self, upper: int) -> int:
        """Draw a uniform integer in [0, upper).

        Raises:
            ValueError: If upper is not positive.
        """
        if upper <= 0:
            raise ValueError(f"upper bound must be positive, got {upper}")
        return self._rng.randrange(upper)

    def between(self, low: int, high: int) -> int:
        """Draw a uniform integer in [low, high]."""
        return self._rng.randint(low, high)

    def percent(self) -> int:
        """Draw a uniform integer in [0, 100)."""
        return self._rng.randrange(100)

    def chance(self, numerator: int, denominator: int) -> bool:
        """Return True with probability numerator / denominator."""
        return self.below(denominator) < numerator

    def uniform(self, low: float, high: float) -> float:
        """Draw a uniform float in [low, high]."""
        return self._rng.uniform(low, high)

    def choice(self, options: Sequence[T]) -> T:
        """Pick one element uniformly.

        Raises:
            IndexError: If options is empty.
        """
        return self._rng.choice(options)

    def weighted(self, pairs: Sequence[tuple[T, int]]) -> T:
        """Pick a value from (value, weight) pairs proportionally to weight.

        Raises:
            ValueError: If the weights do not add up to a positive total.
        """
        total = sum(weight for _, weight in pairs)
        draw = self.below(total)
        for value, weight in pairs:
            if draw < weight:
                return value
            draw -= weight
        return pairs[-1][0]


__all__ = [
    "DiceRoller",
]
