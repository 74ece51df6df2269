"""Shared pytest fixtures and markers for all tests."""

import pytest

from treeplay.engine.context import Player
from treeplay.engine.randomness import SeededRandom
from treeplay.models.game import from_extensive_form, from_matrix
from treeplay.models.tree import decision, payoff


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks multi-game runs and tournaments"
    )


class ScriptedRandom:
    """RandomSource returning pre-set indices, for deterministic chance draws."""

    def __init__(self, weighted=(), uniform=()):
        self.weighted = list(weighted)
        self.uniform = list(uniform)

    def pick_weighted(self, dist):
        return self.weighted.pop(0)

    def pick_uniform(self, n):
        return self.uniform.pop(0)


@pytest.fixture
def scripted_random():
    """Factory for a scripted random source."""
    return ScriptedRandom


@pytest.fixture
def seeded_random():
    return SeededRandom(42)


@pytest.fixture
def pd_game():
    """Prisoner's Dilemma with string moves."""
    return from_matrix(["C", "D"], [[2, 2], [0, 3], [3, 0], [1, 1]])


@pytest.fixture
def one_shot_game():
    """One decision for player 1 between moves A and B."""
    tree = decision(1, [("A", payoff([1, 0])), ("B", payoff([0, 1]))])
    return from_extensive_form(tree, num_players=2)


@pytest.fixture
def constant_player():
    """Factory for a player that always plays the same move."""

    def make(name, m):
        return Player(name, lambda ctx: m)

    return make
