"""Turn engine for Crazy Eights.

``execute_action`` applies one action for whoever holds the turn and raises on
anything illegal. The ``start_game`` / ``play_card`` / ``draw_card`` /
``choose_suit`` / ``advance_opponent_turn`` functions wrap it for a
presentation layer: they never raise for a bad request, they hand back the
unchanged state with a notification saying why.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from eights_engine import notifications
from eights_engine.actions import Action, ChooseSuit, DrawCard, Pass, PlayCard
from eights_engine.cards import Card, Rank, Suit
from eights_engine.errors import IllegalActionError, IllegalPlayError
from eights_engine.notifications import Notification
from eights_engine.rules import generate_legal_actions, is_legal_play
from eights_engine.state import GameState, GameStatus, Participant, create_initial_state

if TYPE_CHECKING:
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


def execute_action(state: GameState, action: Action) -> tuple[GameState, Notification]:
    """Execute an action for the current turn owner.

    Args:
        state: Current game state.
        action: Action to execute.

    Returns:
        Tuple of (new state, notification describing what happened).

    Raises:
        IllegalActionError: If the action is out of turn, out of phase, or
            names a card the turn owner does not hold.
        IllegalPlayError: If the card matches neither suit nor rank.
    """
    if state.status in (GameStatus.WAITING, GameStatus.GAME_OVER):
        raise IllegalActionError("Game is not in progress")

    match action:
        case PlayCard():
            new_state, notification = _execute_play(state, action)
        case DrawCard():
            new_state, notification = _execute_draw(state)
        case ChooseSuit():
            new_state, notification = _execute_choose_suit(state, action)
        case Pass():
            new_state, notification = _execute_pass(state)
        case _:
            raise IllegalActionError(f"Unknown action type: {type(action)}")

    logger.debug("%s: %s -> %s", state.turn.value, action, new_state.status.value)
    return new_state, notification


def _find_card(hand: tuple[Card, ...], card_id: str) -> Card | None:
    return next((card for card in hand if card.id == card_id), None)


def _execute_play(state: GameState, action: PlayCard) -> tuple[GameState, Notification]:
    """Move a card from the turn owner's hand to the front of the discard pile."""
    if state.status != GameStatus.PLAYING:
        raise IllegalActionError("Can only play a card during normal play")

    actor = state.turn
    hand = state.hand(actor)
    card = _find_card(hand, action.card_id)
    if card is None:
        raise IllegalActionError(f"Card {action.card_id} not in {actor.value} hand")
    if not is_legal_play(card, state.current_suit, state.current_rank):
        raise IllegalPlayError(card)
    if action.declared_suit is not None and not card.is_wild:
        raise IllegalActionError("Only an eight can change the suit")
    if card.is_wild and action.declared_suit is None and actor == Participant.AI:
        raise IllegalActionError("The opponent must name a suit when playing an eight")

    new_hand = tuple(c for c in hand if c.id != card.id)
    new_state = state.with_hand(actor, new_hand).with_piles(
        discard_pile=(card,) + state.discard_pile
    )

    if card.is_wild and action.declared_suit is None:
        # Rank stays at the previous card's until the suit is chosen
        new_state = new_state.with_status(GameStatus.SUIT_PICKING)
        notification = notifications.wild_played(actor, card)
    elif card.is_wild:
        new_state = new_state.with_target(action.declared_suit, Rank.EIGHT).with_turn(
            actor.other
        )
        notification = notifications.wild_played(actor, card, action.declared_suit)
    else:
        new_state = new_state.with_target(card.suit, card.rank).with_turn(actor.other)
        notification = notifications.card_played(actor, card)

    return _check_win(new_state, actor, notification)


def _execute_draw(state: GameState) -> tuple[GameState, Notification]:
    """Move the top of the draw pile to the end of the turn owner's hand."""
    if state.status != GameStatus.PLAYING:
        raise IllegalActionError("Can only draw during normal play")

    # An empty draw pile forfeits the draw but still ends the turn
    if not state.draw_pile:
        return _execute_pass(state)

    actor = state.turn
    drawn_card = state.draw_pile[0]
    new_state = (
        state.with_hand(actor, state.hand(actor) + (drawn_card,))
        .with_piles(draw_pile=state.draw_pile[1:])
        .with_turn(actor.other)
    )
    return new_state, notifications.card_drawn(actor, drawn_card)


def _execute_choose_suit(
    state: GameState, action: ChooseSuit
) -> tuple[GameState, Notification]:
    if state.status != GameStatus.SUIT_PICKING:
        raise IllegalActionError("No suit to choose")

    new_state = (
        state.with_target(action.suit, Rank.EIGHT)
        .with_status(GameStatus.PLAYING)
        .with_turn(Participant.AI)
    )
    return new_state, notifications.suit_chosen(action.suit)


def _execute_pass(state: GameState) -> tuple[GameState, Notification]:
    if state.status != GameStatus.PLAYING:
        raise IllegalActionError("Can only pass during normal play")
    if state.draw_pile:
        raise IllegalActionError("Cannot pass while the draw pile has cards")

    actor = state.turn
    return state.with_turn(actor.other), notifications.turn_passed(actor)


def _check_win(
    state: GameState, actor: Participant, notification: Notification
) -> tuple[GameState, Notification]:
    """End the game if ``actor`` has just emptied their hand."""
    if state.hand(actor):
        return state, notification

    logger.info("Game over: %s wins", actor.value)
    return state.with_winner(actor), notifications.game_won(actor, notification.card)


def _apply(state: GameState, action: Action) -> tuple[GameState, Notification]:
    """Execute an action, turning rule violations into notifications."""
    try:
        return execute_action(state, action)
    except IllegalPlayError as e:
        logger.debug("Rejected: %s", e)
        return state, notifications.play_rejected(e.card)
    except IllegalActionError as e:
        logger.debug("Ignored: %s", e)
        return state, notifications.action_ignored(str(e))


def start_game(seed: int | None = None, deck: list[Card] | None = None) -> GameState:
    """Deal a new game.

    Args:
        seed: Random seed for the shuffle.
        deck: Optional pre-ordered deck, dealt without shuffling.

    Raises:
        DealError: If the deck cannot produce a starting position.
    """
    state = create_initial_state(deck=deck, seed=seed)
    logger.info(
        "New game: starter %s, %d cards in draw pile", state.active_card, len(state.draw_pile)
    )
    return state


def play_card(state: GameState, card_id: str) -> tuple[GameState, Notification]:
    """Play a card from the human player's hand."""
    if state.turn != Participant.PLAYER:
        return state, notifications.action_ignored("Not your turn")
    return _apply(state, PlayCard(card_id))


def draw_card(state: GameState) -> tuple[GameState, Notification]:
    """Draw a card for the human player."""
    if state.turn != Participant.PLAYER:
        return state, notifications.action_ignored("Not your turn")
    return _apply(state, DrawCard())


def choose_suit(state: GameState, suit: Suit) -> tuple[GameState, Notification]:
    """Name the new suit after the human player's eight."""
    return _apply(state, ChooseSuit(suit))


def advance_opponent_turn(
    state: GameState, strategy: Strategy | None = None
) -> tuple[GameState, Notification]:
    """Let the opponent take its one pending action.

    Args:
        state: Current game state.
        strategy: Opponent policy; defaults to :class:`HeuristicStrategy`.

    Returns:
        Tuple of (new state, notification). The state is unchanged when the
        opponent has nothing pending.
    """
    if not state.awaiting_opponent:
        return state, notifications.action_ignored("Not the opponent's turn")

    if strategy is None:
        from strategies.heuristic import HeuristicStrategy

        strategy = HeuristicStrategy()

    action = strategy.select_action(state, generate_legal_actions(state))
    logger.info("Opponent (%s) chose: %s", strategy.name, action)
    return execute_action(state, action)
