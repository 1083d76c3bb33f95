"""Tests for the random stand-in strategy."""

import pytest

from eights_engine.rules import generate_legal_actions
from eights_engine.state import create_initial_state
from strategies.random_strategy import RandomStrategy


class TestRandomStrategy:
    def test_selects_a_legal_action(self):
        state = create_initial_state(seed=3)
        legal = generate_legal_actions(state)
        assert RandomStrategy(seed=1).select_action(state, legal) in legal

    def test_seeded_choices_repeat(self):
        state = create_initial_state(seed=3)
        legal = generate_legal_actions(state)
        first = [RandomStrategy(seed=9).select_action(state, legal) for _ in range(5)]
        second = [RandomStrategy(seed=9).select_action(state, legal) for _ in range(5)]
        assert first == second

    def test_no_legal_actions(self):
        with pytest.raises(ValueError):
            RandomStrategy().select_action(create_initial_state(seed=3), [])
