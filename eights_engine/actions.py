"""Action types for Crazy Eights."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eights_engine.cards import Suit


@dataclass(frozen=True, slots=True)
class Action(ABC):
    """Base class for all actions."""

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable action description."""
        ...


@dataclass(frozen=True, slots=True)
class PlayCard(Action):
    """Play a card from hand onto the discard pile.

    ``declared_suit`` names the new suit in the same action when an eight is
    played. The opponent always declares; a player who plays an eight without
    declaring moves the game into suit picking.
    """

    card_id: str
    declared_suit: Suit | None = None

    def __str__(self) -> str:
        if self.declared_suit is not None:
            return f"Play {self.card_id} and call {self.declared_suit.label}"
        return f"Play {self.card_id}"


@dataclass(frozen=True, slots=True)
class DrawCard(Action):
    """Draw the top card of the draw pile."""

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class ChooseSuit(Action):
    """Choose the active suit after playing an eight."""

    suit: Suit

    def __str__(self) -> str:
        return f"Choose {self.suit.label}"


@dataclass(frozen=True, slots=True)
class Pass(Action):
    """Give up the turn, only allowed when the draw pile is empty."""

    def __str__(self) -> str:
        return "Pass"
