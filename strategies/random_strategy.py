"""Random strategy for baseline testing."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from strategies.base import Strategy

if TYPE_CHECKING:
    from eights_engine.actions import Action
    from eights_engine.state import GameState


class RandomStrategy(Strategy):
    """Strategy that selects actions uniformly at random.

    Stands in for the human player in simulations and watch mode.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
        """
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "Random"

    def select_action(self, state: GameState, legal_actions: list[Action]) -> Action:
        """Select a random legal action."""
        if not legal_actions:
            raise ValueError("No legal actions available")
        return self._rng.choice(legal_actions)
