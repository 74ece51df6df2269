"""Randomness for chance nodes and random strategies.

The engine only ever asks for two things: an index drawn from a weighted
distribution, and an index drawn uniformly from ``range(n)``. Anything
implementing ``RandomSource`` can stand in, e.g. a scripted source in tests.
"""

from __future__ import annotations

import random
from typing import Any, Optional, Protocol, runtime_checkable

from treeplay.models.payoffs import Distribution


@runtime_checkable
class RandomSource(Protocol):
    """Source of random choices used by the execution engine."""

    def pick_weighted(self, dist: Distribution[Any]) -> int:
        """Index of an outcome, drawn with probability weight / total weight."""
        ...

    def pick_uniform(self, n: int) -> int:
        """Index drawn uniformly from ``range(n)``."""
        ...


class SeededRandom:
    """RandomSource backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def pick_weighted(self, dist: Distribution[Any]) -> int:
        total = dist.total_weight
        if total <= 0:
            raise ValueError("Cannot pick from an empty distribution")
        r = self._random.randrange(total)
        for index, weight in enumerate(dist.weights):
            if r < weight:
                return index
            r -= weight
        raise AssertionError("unreachable: weights exhausted")

    def pick_uniform(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot pick uniformly from {n} options")
        return self._random.randrange(n)
