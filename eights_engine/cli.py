"""Command-line interface for Crazy Eights."""

from __future__ import annotations

import argparse
import logging
import time
from typing import TYPE_CHECKING

from eights_engine.cards import Suit
from eights_engine.engine import (
    advance_opponent_turn,
    choose_suit,
    draw_card,
    execute_action,
    play_card,
    start_game,
)
from eights_engine.notifications import game_started
from eights_engine.rules import generate_legal_actions, playable_cards
from eights_engine.state import GameStatus, Participant

if TYPE_CHECKING:
    from eights_engine.state import GameState


def format_state(state: GameState, show_opponent_hand: bool = False) -> str:
    """Format game state for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(
        f"Turn {state.turn_number} | {state.status.value} | "
        f"To match: {state.current_rank.symbol} / {state.current_suit.label}"
    )
    lines.append("=" * 60)

    if show_opponent_hand:
        ai_str = ", ".join(str(c) for c in state.ai_hand) or "(empty)"
        lines.append(f"  AI hand: {ai_str}")
    else:
        lines.append(f"  AI hand: [{len(state.ai_hand)} cards]")

    lines.append(f"\n  Discard: {state.active_card} | Draw pile: {len(state.draw_pile)} cards\n")

    playable = {
        c.id for c in playable_cards(state.player_hand, state.current_suit, state.current_rank)
    }
    hand_str = ", ".join(
        f"{i + 1}:{c}{'*' if c.id in playable else ''}"
        for i, c in enumerate(state.player_hand)
    )
    prefix = "→ " if state.turn == Participant.PLAYER else "  "
    lines.append(f"{prefix}Your hand: {hand_str or '(empty)'}")

    if state.is_game_over:
        winner = "You win" if state.winner == Participant.PLAYER else "AI wins"
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - {winner}!")
        lines.append("=" * 60)

    return "\n".join(lines)


def _read_suit() -> Suit | None:
    while True:
        choice = input("Choose a suit (h/d/c/s, q to quit): ").strip()
        if choice.lower() == "q":
            return None
        try:
            return Suit.from_label(choice)
        except ValueError:
            print("Please enter h, d, c or s")


def play_interactive(seed: int | None = None, delay: float = 1.0) -> None:
    """Play an interactive game against the heuristic opponent."""
    state = start_game(seed=seed)

    print("\nWelcome to Crazy Eights!")
    print("Type a card number to play it (* marks playable cards), 'd' to draw.")
    print("Eights are wild. Type 'q' to quit.\n")
    print(game_started())

    while not state.is_game_over:
        print(format_state(state))

        if state.awaiting_opponent:
            time.sleep(delay)
            state, notification = advance_opponent_turn(state)
        elif state.status == GameStatus.SUIT_PICKING:
            suit = _read_suit()
            if suit is None:
                print("Goodbye!")
                return
            state, notification = choose_suit(state, suit)
        else:
            choice = input("\nYour move: ").strip().lower()
            if choice == "q":
                print("Goodbye!")
                return
            if choice == "d":
                state, notification = draw_card(state)
            else:
                try:
                    index = int(choice) - 1
                except ValueError:
                    print("Please enter a card number, 'd' or 'q'")
                    continue
                if not 0 <= index < len(state.player_hand):
                    print(f"Please enter a number 1-{len(state.player_hand)}")
                    continue
                state, notification = play_card(state, state.player_hand[index].id)

        print(f"\n{notification}\n")

    print(format_state(state, show_opponent_hand=True))


def watch_game(
    seed: int | None = None, delay: float = 0.5, max_turns: int = 500
) -> GameState:
    """Watch a random stand-in play the heuristic opponent.

    A game that reaches ``max_turns`` without a winner is called a draw.
    """
    from strategies.random_strategy import RandomStrategy

    stand_in = RandomStrategy(seed=seed)
    state = start_game(seed=seed)

    print("\nWatching: Random vs Heuristic")
    print("Press Ctrl+C to stop.\n")

    try:
        while not state.is_game_over:
            if state.turn_number >= max_turns:
                print("Stalled - draw\n")
                break

            print(format_state(state, show_opponent_hand=True))

            if state.awaiting_opponent:
                state, notification = advance_opponent_turn(state)
            else:
                action = stand_in.select_action(state, generate_legal_actions(state))
                state, notification = execute_action(state, action)

            print(f"\n{notification}")
            time.sleep(delay)
            print("\n" + "-" * 60 + "\n")

    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, show_opponent_hand=True))
    return state


def run_simulation(num_games: int = 100, seed: int = 42) -> None:
    """Run stand-in strategies against the heuristic opponent and report results."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1")

    from simulation.runner import run_batch
    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    for stand_in in (RandomStrategy(seed=seed), HeuristicStrategy()):
        print(f"\nRunning {num_games} games: {stand_in.name} vs Heuristic")

        results = run_batch(stand_in, None, num_games, start_seed=seed)

        player_wins = sum(1 for r in results if r.winner == Participant.PLAYER.value)
        ai_wins = sum(1 for r in results if r.winner == Participant.AI.value)
        stalled = sum(1 for r in results if r.winner is None)
        avg_turns = sum(r.turns for r in results) / len(results)
        avg_duration = sum(r.duration_ms for r in results) / len(results)

        print(f"\nResults ({stand_in.name} vs Heuristic):")
        print(f"  {stand_in.name} wins: {player_wins} ({100*player_wins/num_games:.1f}%)")
        print(f"  Heuristic wins: {ai_wins} ({100*ai_wins/num_games:.1f}%)")
        print(f"  Stalled: {stalled} ({100*stalled/num_games:.1f}%)")
        print(f"  Average turns: {avg_turns:.1f}")
        print(f"  Average duration: {avg_duration:.2f}ms")


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Crazy Eights card game")
    parser.add_argument("--verbose", action="store_true", help="Show engine logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against the AI")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument(
        "--delay", type=float, default=1.0, help="AI thinking delay (seconds)"
    )

    watch_parser = subparsers.add_parser("watch", help="Watch a random player vs the AI")
    watch_parser.add_argument("--seed", type=int, help="Random seed")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )
    watch_parser.add_argument(
        "--max-turns", type=int, default=500, help="Turns before a stalled game is a draw"
    )

    sim_parser = subparsers.add_parser("simulate", help="Run many games headless")
    sim_parser.add_argument("--games", type=int, default=100, help="Number of games")
    sim_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "play":
        play_interactive(seed=args.seed, delay=args.delay)
    elif args.command == "watch":
        watch_game(seed=args.seed, delay=args.delay, max_turns=args.max_turns)
    elif args.command == "simulate":
        if args.games < 1:
            sim_parser.error("--games must be at least 1")
        run_simulation(num_games=args.games, seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
