"""Card, Suit, and Rank models for Crazy Eights."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Card suits in the fixed enumeration order used for wild-suit tiebreaks."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }[self]

    @property
    def label(self) -> str:
        """Lowercase name used in card ids and on the wire."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> Suit:
        """Parse a suit from its label ("hearts") or symbol ("♥").

        Raises:
            ValueError: If the text names no suit.
        """
        text = label.strip().lower()
        for suit in cls:
            if text in (suit.label, suit.symbol, suit.label[0]):
                return suit
        raise ValueError(f"Unknown suit: {label!r}")


class Rank(IntEnum):
    """Card ranks (Ace=1 through King=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value == 1:
            return "A"
        elif self.value <= 10:
            return str(self.value)
        else:
            return self.name[0]


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card.

    Identity is the ``id`` alone: two cards with the same rank and suit but
    different ids are different cards as far as hands and piles are concerned.
    """

    id: str
    suit: Suit
    rank: Rank

    @property
    def is_wild(self) -> bool:
        """Whether this is an eight, which may always be played."""
        return self.rank == Rank.EIGHT

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"


def card_id(suit: Suit, rank: Rank) -> str:
    return f"{suit.label}-{rank.symbol}"


def create_deck() -> list[Card]:
    """Create a standard 52-card deck in canonical order (suit, then rank)."""
    return [Card(card_id(suit, rank), suit, rank) for suit in Suit for rank in Rank]


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = random.Random(seed)
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled
