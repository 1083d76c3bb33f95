"""Crazy Eights game engine."""

from eights_engine.actions import Action, ChooseSuit, DrawCard, Pass, PlayCard
from eights_engine.cards import Card, Rank, Suit, create_deck, shuffle_deck
from eights_engine.engine import (
    advance_opponent_turn,
    choose_suit,
    draw_card,
    execute_action,
    play_card,
    start_game,
)
from eights_engine.errors import DealError, EngineError, IllegalActionError, IllegalPlayError
from eights_engine.notifications import Notification, NotificationKind
from eights_engine.rules import generate_legal_actions, is_legal_play, playable_cards
from eights_engine.state import GameState, GameStatus, Participant, create_initial_state

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "shuffle_deck",
    "GameState",
    "GameStatus",
    "Participant",
    "create_initial_state",
    "Action",
    "PlayCard",
    "DrawCard",
    "ChooseSuit",
    "Pass",
    "is_legal_play",
    "playable_cards",
    "generate_legal_actions",
    "Notification",
    "NotificationKind",
    "EngineError",
    "DealError",
    "IllegalActionError",
    "IllegalPlayError",
    "execute_action",
    "start_game",
    "play_card",
    "draw_card",
    "choose_suit",
    "advance_opponent_turn",
]
