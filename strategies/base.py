"""Base strategy interface for Crazy Eights players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eights_engine.actions import Action
    from eights_engine.notifications import Notification
    from eights_engine.state import GameState, Participant


class Strategy(ABC):
    """Abstract base class for player strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> Action:
        """Select an action from the list of legal actions.

        Args:
            state: Current game state.
            legal_actions: List of all legal actions for the turn owner.

        Returns:
            The selected action.
        """
        ...

    def on_game_start(self, state: GameState, seat: Participant) -> None:
        """Called when a game starts.

        Override to initialize per-game state.

        Args:
            state: Initial game state.
            seat: Which seat this strategy controls.
        """
        pass

    def on_game_end(self, state: GameState, winner: Participant | None) -> None:
        """Called when a game ends.

        Args:
            state: Final game state.
            winner: Winning seat, or None if the game stalled.
        """
        pass

    def on_action(self, state: GameState, notification: Notification) -> None:
        """Called after any action is applied (by either seat).

        Args:
            state: State after the action.
            notification: Description of the action.
        """
        pass
