"""Game runner for Crazy Eights simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from eights_engine.engine import advance_opponent_turn, execute_action, start_game
from eights_engine.rules import generate_legal_actions
from eights_engine.state import Participant
from strategies.heuristic import HeuristicStrategy

if TYPE_CHECKING:
    from eights_engine.notifications import Notification
    from eights_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: str | None  # "player", "ai", or None when the game stalled
    turns: int
    final_hand_sizes: tuple[int, int]
    player_strategies: tuple[str, str]
    seed: int | None
    duration_ms: float
    action_count: int


@dataclass
class EventRecord:
    """Record of a single applied action."""

    turn: int
    actor: str | None
    kind: str
    message: str


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, str]
    starter: str
    events: list[EventRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Crazy Eights games with a strategy in each seat."""

    def __init__(
        self,
        player_strategy: Strategy,
        opponent_strategy: Strategy | None = None,
        max_turns: int = 500,
        log_events: bool = True,
    ):
        """Initialize the game runner.

        Args:
            player_strategy: Strategy standing in for the human player.
            opponent_strategy: Opponent policy; defaults to the heuristic.
            max_turns: Turns before an unfinished game is called a draw. Games
                stall when the draw pile is empty and neither seat can play.
            log_events: Whether to record every notification.
        """
        self.strategies = {
            Participant.PLAYER: player_strategy,
            Participant.AI: opponent_strategy or HeuristicStrategy(),
        }
        self.max_turns = max_turns
        self.log_events = log_events

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for the shuffle.

        Returns:
            Tuple of (result, log). Log is None if log_events is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())
        names = (
            self.strategies[Participant.PLAYER].name,
            self.strategies[Participant.AI].name,
        )

        state = start_game(seed=seed)

        for seat, strategy in self.strategies.items():
            strategy.on_game_start(state, seat)

        game_log = None
        if self.log_events:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=names,
                starter=str(state.active_card),
            )

        action_count = 0

        while not state.is_game_over and state.turn_number < self.max_turns:
            turn = state.turn_number
            state, notification = self._step(state)
            action_count += 1

            if game_log:
                game_log.events.append(
                    EventRecord(
                        turn=turn,
                        actor=notification.actor.value if notification.actor else None,
                        kind=notification.kind.value,
                        message=notification.message,
                    )
                )

            for strategy in self.strategies.values():
                strategy.on_action(state, notification)

        if not state.is_game_over:
            logger.info("Game %s stalled after %d turns", game_id, state.turn_number)

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner.value if state.winner else None,
            turns=state.turn_number,
            final_hand_sizes=(len(state.player_hand), len(state.ai_hand)),
            player_strategies=names,
            seed=seed,
            duration_ms=duration_ms,
            action_count=action_count,
        )

        if game_log:
            game_log.result = result

        for strategy in self.strategies.values():
            strategy.on_game_end(state, state.winner)

        return result, game_log

    def _step(self, state: GameState) -> tuple[GameState, Notification]:
        """Apply one action for whoever holds the turn."""
        if state.awaiting_opponent:
            return advance_opponent_turn(state, self.strategies[Participant.AI])

        strategy = self.strategies[Participant.PLAYER]
        action = strategy.select_action(state, generate_legal_actions(state))
        return execute_action(state, action)


def run_batch(
    player_strategy: Strategy,
    opponent_strategy: Strategy | None,
    num_games: int,
    start_seed: int = 0,
    log_events: bool = False,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        player_strategy: Strategy standing in for the human player.
        opponent_strategy: Opponent policy; None for the heuristic.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        log_events: Whether to log events (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(player_strategy, opponent_strategy, log_events=log_events)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
