"""Headless game simulation."""

from simulation.runner import (
    EventRecord,
    GameLog,
    GameResult,
    GameRunner,
    run_batch,
)

__all__ = [
    "EventRecord",
    "GameLog",
    "GameResult",
    "GameRunner",
    "run_batch",
]
