"""Game session management for the web API.

Each session holds the one current :class:`GameState` for a table and
replaces it wholesale after every engine call. The opponent's move is
scheduled as an asyncio task after a short "thinking" delay; restarting or
deleting the game cancels that task, and a task that wakes to find the state
already replaced drops its move.
"""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from eights_engine.engine import (
    advance_opponent_turn,
    choose_suit,
    draw_card,
    play_card,
    start_game,
)
from eights_engine.notifications import game_started
from eights_engine.rules import playable_cards
from strategies.heuristic import HeuristicStrategy

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from eights_engine.cards import Card, Suit
    from eights_engine.notifications import Notification
    from eights_engine.state import GameState
    from strategies.base import Strategy

DEFAULT_THINKING_DELAY = float(os.environ.get("AI_THINKING_DELAY", "1.5"))


@dataclass
class GameSession:
    """An active game session."""

    id: str
    state: GameState
    opponent: Strategy
    created_at: datetime
    last_notification: Notification | None = None
    history: list[dict] = field(default_factory=list)

    # Callbacks for WebSocket notifications
    _state_listeners: list[Callable[[dict], None]] = field(default_factory=list)
    _opponent_task: asyncio.Task | None = None

    @property
    def playable_ids(self) -> list[str]:
        """Ids of the player's cards that may be played right now."""
        state = self.state
        return [
            c.id
            for c in playable_cards(state.player_hand, state.current_suit, state.current_rank)
        ]

    @property
    def opponent_pending(self) -> bool:
        return self._opponent_task is not None and not self._opponent_task.done()

    def add_listener(self, callback: Callable[[dict], None]) -> None:
        """Add a state change listener."""
        self._state_listeners.append(callback)

    def remove_listener(self, callback: Callable[[dict], None]) -> None:
        """Remove a state change listener."""
        if callback in self._state_listeners:
            self._state_listeners.remove(callback)

    def _notify_listeners(self, event: dict) -> None:
        for listener in self._state_listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("State listener failed for session %s", self.id)

    def apply(self, state: GameState, notification: Notification) -> GameState:
        """Replace the current state and tell listeners about it."""
        old_state = self.state
        self.state = state
        self.last_notification = notification

        if notification.changed_state:
            self.history.append(
                {
                    "turn": old_state.turn_number,
                    "actor": notification.actor.value if notification.actor else None,
                    "kind": notification.kind.value,
                    "message": notification.message,
                    "timestamp": datetime.now().isoformat(),
                }
            )

        self._notify_listeners(
            {
                "type": "game_state",
                "state": self.to_client_state(),
                "notification": notification_to_dict(notification),
            }
        )
        return state

    def cancel_opponent_turn(self) -> None:
        """Drop a scheduled opponent move, if any."""
        if self.opponent_pending:
            logger.info("Cancelling pending opponent turn for session %s", self.id)
            self._opponent_task.cancel()
        self._opponent_task = None

    def to_client_state(self) -> dict:
        """Convert game state to client-friendly format.

        The opponent's hand is reported as a count only.
        """
        state = self.state
        return {
            "game_id": self.id,
            "status": state.status.value,
            "turn": state.turn.value,
            "turn_number": state.turn_number,
            "winner": state.winner.value if state.winner else None,
            "current_suit": state.current_suit.label,
            "current_rank": state.current_rank.symbol,
            "player_hand": [_card_to_dict(c) for c in state.player_hand],
            "ai_hand_count": len(state.ai_hand),
            "draw_pile_count": len(state.draw_pile),
            "discard_pile": [_card_to_dict(c) for c in state.discard_pile],
            "playable": self.playable_ids,
            "opponent_thinking": self.opponent_pending,
        }


def _card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "id": card.id,
        "suit": card.suit.label,
        "suit_symbol": card.suit.symbol,
        "rank": card.rank.symbol,
        "display": str(card),
    }


def notification_to_dict(notification: Notification | None) -> dict | None:
    if notification is None:
        return None
    return {
        "kind": notification.kind.value,
        "message": notification.message,
        "actor": notification.actor.value if notification.actor else None,
        "card": _card_to_dict(notification.card) if notification.card else None,
        "suit": notification.suit.label if notification.suit else None,
    }


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self, thinking_delay: float = DEFAULT_THINKING_DELAY):
        """Initialize the session manager.

        Args:
            thinking_delay: Seconds the opponent waits before moving. Zero or
                less applies the opponent's move within the player's request.
        """
        self._sessions: dict[str, GameSession] = {}
        self.thinking_delay = thinking_delay

    def create_session(
        self, seed: int | None = None, opponent: Strategy | None = None
    ) -> GameSession:
        """Deal a new game in a new session."""
        session = GameSession(
            id=str(uuid.uuid4()),
            state=start_game(seed=seed),
            opponent=opponent or HeuristicStrategy(),
            created_at=datetime.now(),
            last_notification=game_started(),
        )
        self._sessions[session.id] = session
        logger.info("Created session %s (seed=%s)", session.id, seed)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session, dropping any pending opponent move."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.cancel_opponent_turn()
        logger.info("Deleted session %s", session_id)
        return True

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "status": s.state.status.value,
                "turn_number": s.state.turn_number,
                "winner": s.state.winner.value if s.state.winner else None,
            }
            for s in self._sessions.values()
        ]

    def restart(self, session: GameSession, seed: int | None = None) -> GameState:
        """Replace the session's game with a fresh deal."""
        session.cancel_opponent_turn()
        session.history.clear()
        logger.info("Restarting session %s", session.id)
        return session.apply(start_game(seed=seed), game_started())

    async def play_card(self, session: GameSession, card_id: str) -> Notification:
        state, notification = play_card(session.state, card_id)
        return await self._after_player_action(session, state, notification)

    async def draw_card(self, session: GameSession) -> Notification:
        state, notification = draw_card(session.state)
        return await self._after_player_action(session, state, notification)

    async def choose_suit(self, session: GameSession, suit: Suit) -> Notification:
        state, notification = choose_suit(session.state, suit)
        return await self._after_player_action(session, state, notification)

    async def _after_player_action(
        self, session: GameSession, state: GameState, notification: Notification
    ) -> Notification:
        if not notification.changed_state:
            session.last_notification = notification
            return notification

        session.apply(state, notification)

        if session.state.awaiting_opponent:
            if self.thinking_delay <= 0:
                self.run_opponent_turn(session)
            else:
                self.schedule_opponent_turn(session)

        return notification

    def run_opponent_turn(self, session: GameSession) -> Notification | None:
        """Apply the opponent's pending move right away."""
        if not session.state.awaiting_opponent:
            return None
        state, notification = advance_opponent_turn(session.state, session.opponent)
        session.apply(state, notification)
        logger.info("Session %s: %s", session.id, notification.message)
        return notification

    def schedule_opponent_turn(self, session: GameSession) -> asyncio.Task | None:
        """Schedule the opponent's move after the thinking delay.

        Must be called from a running event loop.
        """
        if session.opponent_pending or not session.state.awaiting_opponent:
            return None

        session._notify_listeners({"type": "ai_thinking"})
        task = asyncio.create_task(
            self._delayed_opponent_turn(session, session.state),
            name=f"opponent-{session.id}",
        )
        session._opponent_task = task
        return task

    async def _delayed_opponent_turn(
        self, session: GameSession, scheduled_for: GameState
    ) -> Notification | None:
        await asyncio.sleep(self.thinking_delay)

        if session.state is not scheduled_for:
            logger.info("Session %s: state replaced, dropping opponent move", session.id)
            return None

        session._opponent_task = None
        return self.run_opponent_turn(session)

    def shutdown(self) -> None:
        """Cancel every pending opponent move."""
        for session in self._sessions.values():
            session.cancel_opponent_turn()


# Global session manager instance
session_manager = GameSessionManager()
