"""Exceptions raised by the Crazy Eights engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eights_engine.cards import Card


class EngineError(Exception):
    """Base class for engine errors."""

    pass


class DealError(EngineError):
    """Raised when a deck cannot produce a valid starting position."""

    pass


class IllegalActionError(EngineError):
    """Raised when an action is attempted out of turn or out of phase."""

    pass


class IllegalPlayError(EngineError):
    """Raised when a card matches neither the current suit nor the current rank."""

    def __init__(self, card: Card):
        super().__init__(f"Card {card} does not match the current suit or rank")
        self.card = card
