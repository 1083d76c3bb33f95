"""Deterministic priority strategy used by the computer opponent.

Each turn resolves to exactly one of, in order:

1. Match - play the first non-eight in hand order that matches the current
   suit or rank.
2. Wild - play the first eight and name the suit held most often in what
   remains of the hand.
3. Draw - take the top card of the draw pile.
4. Pass - nothing to play and nothing to draw.

Scans always follow hand order, so identical hands and piles give identical
choices.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Iterable

from eights_engine.actions import ChooseSuit, DrawCard, Pass, PlayCard
from eights_engine.cards import Card, Rank, Suit
from eights_engine.state import GameStatus, Participant
from strategies.base import Strategy

if TYPE_CHECKING:
    from eights_engine.actions import Action
    from eights_engine.state import GameState


def choose_wild_suit(hand: Iterable[Card]) -> Suit:
    """Suit with the strictly highest count in ``hand``.

    Ties go to the suit enumerated first (hearts, diamonds, clubs, spades),
    so an empty hand names hearts.
    """
    counts = Counter(card.suit for card in hand)
    best = Suit.HEARTS
    for suit in Suit:
        if counts[suit] > counts[best]:
            best = suit
    return best


class HeuristicStrategy(Strategy):
    """Match first, then wild, then draw, then pass."""

    @property
    def name(self) -> str:
        return "Heuristic"

    def select_action(self, state: GameState, legal_actions: list[Action]) -> Action:
        """Select an action by the fixed priority order."""
        hand = state.hand(state.turn)

        if state.status == GameStatus.SUIT_PICKING:
            return ChooseSuit(choose_wild_suit(hand))

        matching = next(
            (
                card
                for card in hand
                if card.rank != Rank.EIGHT
                and (card.suit == state.current_suit or card.rank == state.current_rank)
            ),
            None,
        )
        if matching is not None:
            return PlayCard(matching.id)

        eight = next((card for card in hand if card.rank == Rank.EIGHT), None)
        if eight is not None:
            if state.turn != Participant.AI:
                # The player's eight names its suit in a separate step
                return PlayCard(eight.id)
            remaining = [card for card in hand if card.id != eight.id]
            return PlayCard(eight.id, declared_suit=choose_wild_suit(remaining))

        if state.draw_pile:
            return DrawCard()
        return Pass()
