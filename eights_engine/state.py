"""Immutable game state models for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from eights_engine.cards import Card, Rank, Suit, create_deck, shuffle_deck
from eights_engine.errors import DealError

HAND_SIZE = 8


class Participant(str, Enum):
    """The two seats at the table."""

    PLAYER = "player"
    AI = "ai"

    @property
    def other(self) -> Participant:
        return Participant.AI if self is Participant.PLAYER else Participant.PLAYER


class GameStatus(str, Enum):
    """Current phase of the game."""

    WAITING = "waiting"  # No cards dealt yet
    PLAYING = "playing"  # Normal alternating play
    SUIT_PICKING = "suit-picking"  # Player played an 8 and must name a suit
    GAME_OVER = "game-over"


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        player_hand: Human player's cards, in the order they were received
        ai_hand: Opponent's cards, in the order they were received
        draw_pile: Undealt cards; index 0 is drawn next
        discard_pile: Played cards; index 0 is the active card
        current_suit: Suit the next play must match
        current_rank: Rank the next play must match
        turn: Whose move it is
        status: Current game phase
        winner: Who emptied their hand first, or None
        turn_number: Number of turns resolved so far
    """

    player_hand: tuple[Card, ...] = ()
    ai_hand: tuple[Card, ...] = ()
    draw_pile: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()
    current_suit: Suit = Suit.HEARTS
    current_rank: Rank = Rank.ACE
    turn: Participant = Participant.PLAYER
    status: GameStatus = GameStatus.WAITING
    winner: Participant | None = None
    turn_number: int = 0

    @property
    def active_card(self) -> Card | None:
        """The most recently played card."""
        return self.discard_pile[0] if self.discard_pile else None

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def awaiting_opponent(self) -> bool:
        """Whether the opponent has a move pending."""
        return self.status == GameStatus.PLAYING and self.turn == Participant.AI

    def hand(self, participant: Participant) -> tuple[Card, ...]:
        if participant == Participant.PLAYER:
            return self.player_hand
        return self.ai_hand

    def all_cards(self) -> tuple[Card, ...]:
        """Every card in play, across hands and both piles."""
        return self.player_hand + self.ai_hand + self.draw_pile + self.discard_pile

    def with_hand(self, participant: Participant, hand: tuple[Card, ...]) -> GameState:
        """Return new state with one participant's hand replaced."""
        if participant == Participant.PLAYER:
            return replace(self, player_hand=hand)
        return replace(self, ai_hand=hand)

    def with_piles(
        self,
        draw_pile: tuple[Card, ...] | None = None,
        discard_pile: tuple[Card, ...] | None = None,
    ) -> GameState:
        """Return new state with updated draw and/or discard pile."""
        return replace(
            self,
            draw_pile=self.draw_pile if draw_pile is None else draw_pile,
            discard_pile=self.discard_pile if discard_pile is None else discard_pile,
        )

    def with_target(self, suit: Suit, rank: Rank) -> GameState:
        """Return new state with the suit and rank the next play must match."""
        return replace(self, current_suit=suit, current_rank=rank)

    def with_turn(self, turn: Participant) -> GameState:
        """Return new state with the turn handed to ``turn``."""
        return replace(self, turn=turn, turn_number=self.turn_number + 1)

    def with_status(self, status: GameStatus) -> GameState:
        return replace(self, status=status)

    def with_winner(self, winner: Participant) -> GameState:
        """Return new state with winner set and the game over."""
        return replace(self, status=GameStatus.GAME_OVER, winner=winner)


def create_waiting_state() -> GameState:
    """State shown before the first deal."""
    return GameState()


def create_initial_state(
    deck: list[Card] | None = None,
    seed: int | None = None,
    hand_size: int = HAND_SIZE,
) -> GameState:
    """Create the initial game state.

    Args:
        deck: Optional pre-ordered deck. If None, creates and shuffles a new deck.
        seed: Random seed for shuffling (only used if deck is None).
        hand_size: Cards dealt to each participant.

    Returns:
        Initial game state with cards dealt and the first card turned up.

    Raises:
        DealError: If the deck is too small or holds nothing but eights
            after the deal.
    """
    if deck is None:
        deck = shuffle_deck(create_deck(), seed)

    if len(deck) < hand_size * 2 + 1:
        raise DealError(f"Deck of {len(deck)} cards cannot deal two hands of {hand_size}")

    player_hand = tuple(deck[:hand_size])
    ai_hand = tuple(deck[hand_size : hand_size * 2])
    remaining = list(deck[hand_size * 2 :])

    # An eight may not start the discard pile
    start_index = next(
        (i for i, card in enumerate(remaining) if card.rank != Rank.EIGHT), None
    )
    if start_index is None:
        raise DealError("No non-eight card left to start the discard pile")
    starter = remaining.pop(start_index)

    return GameState(
        player_hand=player_hand,
        ai_hand=ai_hand,
        draw_pile=tuple(remaining),
        discard_pile=(starter,),
        current_suit=starter.suit,
        current_rank=starter.rank,
        turn=Participant.PLAYER,
        status=GameStatus.PLAYING,
        winner=None,
    )
