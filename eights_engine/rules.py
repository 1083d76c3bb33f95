"""Play validation and legal action generation for Crazy Eights."""

from __future__ import annotations

from typing import Iterable

from eights_engine.actions import Action, ChooseSuit, DrawCard, Pass, PlayCard
from eights_engine.cards import Card, Rank, Suit
from eights_engine.state import GameState, GameStatus, Participant


def is_legal_play(card: Card, current_suit: Suit, current_rank: Rank) -> bool:
    """Whether ``card`` may be played onto the current suit and rank.

    An eight is always legal; any other card must match the suit or the rank.
    """
    return (
        card.rank == Rank.EIGHT
        or card.suit == current_suit
        or card.rank == current_rank
    )


def playable_cards(
    hand: Iterable[Card], current_suit: Suit, current_rank: Rank
) -> list[Card]:
    """Cards in ``hand`` that are legal to play, in hand order."""
    return [card for card in hand if is_legal_play(card, current_suit, current_rank)]


def generate_legal_actions(state: GameState) -> list[Action]:
    """Generate all legal actions for whoever holds the turn.

    Args:
        state: Current game state.

    Returns:
        List of legal actions. Empty before the deal and after the game ends.
    """
    match state.status:
        case GameStatus.SUIT_PICKING:
            return [ChooseSuit(suit) for suit in Suit]
        case GameStatus.PLAYING:
            return _generate_playing_actions(state)

    return []


def _generate_playing_actions(state: GameState) -> list[Action]:
    actions: list[Action] = []
    hand = state.hand(state.turn)

    for card in playable_cards(hand, state.current_suit, state.current_rank):
        if card.is_wild and state.turn == Participant.AI:
            # The opponent names its suit as part of the play
            actions.extend(PlayCard(card.id, declared_suit=suit) for suit in Suit)
        else:
            actions.append(PlayCard(card.id))

    if state.draw_pile:
        actions.append(DrawCard())
    else:
        actions.append(Pass())

    return actions
