"""Opponent and stand-in strategies for Crazy Eights."""

from strategies.base import Strategy
from strategies.heuristic import HeuristicStrategy, choose_wild_suit
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "RandomStrategy",
    "HeuristicStrategy",
    "choose_wild_suit",
]
