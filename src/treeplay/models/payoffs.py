"""Payoff vectors, weighted distributions and small list helpers.

A payoff is a ``ByPlayer`` of floats: position ``i`` (0-based) belongs to
player ``i + 1``. Distributions are lists of ``(weight, value)`` pairs where
weights are relative frequencies, so ``[(3, a), (1, b)]`` makes ``a`` three
times as likely as ``b``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Sequence, TypeVar, overload

from treeplay.errors import MalformedTreeError, TypeMismatchError

T = TypeVar("T")


@dataclass(frozen=True, init=False)
class ByPlayer(Generic[T]):
    """Immutable per-player sequence. Index 0 holds player 1's entry."""

    values: tuple[T, ...]

    def __init__(self, values: Iterable[T]) -> None:
        object.__setattr__(self, "values", tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index):
        return self.values[index]

    def __add__(self, other: "ByPlayer") -> "ByPlayer":
        """Elementwise sum of two equal-length vectors."""
        if not isinstance(other, ByPlayer):
            return NotImplemented
        if len(self) != len(other):
            raise TypeMismatchError(
                f"Cannot add payoffs for {len(self)} and {len(other)} players"
            )
        return ByPlayer(a + b for a, b in zip(self.values, other.values))

    def for_player(self, player: int) -> T:
        """Entry for a 1-based player index."""
        return self.values[player - 1]

    def as_list(self) -> list[T]:
        return list(self.values)

    def __repr__(self) -> str:
        return f"ByPlayer({list(self.values)!r})"


Payoff = ByPlayer[float]


def make_payoff(values: Iterable[float]) -> Payoff:
    """Build a payoff vector, coercing every entry to float."""
    return ByPlayer(float(v) for v in values)


@dataclass(frozen=True, init=False)
class Distribution(Generic[T]):
    """Discrete distribution given by relative integer weights.

    Raises:
        MalformedTreeError: If any weight is not a positive integer
    """

    outcomes: tuple[tuple[int, T], ...]

    def __init__(self, outcomes: Iterable[tuple[int, T]]) -> None:
        pairs = tuple((weight, value) for weight, value in outcomes)
        for weight, value in pairs:
            if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
                raise MalformedTreeError(
                    f"Distribution weights must be positive integers, got {weight!r} for {value!r}"
                )
        object.__setattr__(self, "outcomes", pairs)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[tuple[int, T]]:
        return iter(self.outcomes)

    def __add__(self, other: "Distribution") -> "Distribution":
        if not isinstance(other, Distribution):
            return NotImplemented
        return Distribution(self.outcomes + other.outcomes)

    @property
    def weights(self) -> list[int]:
        return [w for w, _ in self.outcomes]

    @property
    def values(self) -> list[T]:
        return [v for _, v in self.outcomes]

    @property
    def total_weight(self) -> int:
        return sum(self.weights)

    def probability(self, index: int) -> float:
        """Probability of the outcome at ``index``."""
        return self.outcomes[index][0] / self.total_weight


def uniform(values: Iterable[T]) -> Distribution[T]:
    """Distribution giving every value weight 1."""
    return Distribution((1, v) for v in values)


def expand_dist(dist: Iterable[tuple[int, T]]) -> list[T]:
    """Repeat each value by its weight: ``[(2, a), (1, b)] -> [a, a, b]``."""
    return [value for weight, value in dist for _ in range(weight)]


def chunk(size: int, items: Sequence[T]) -> list[list[T]]:
    """Break a list into consecutive chunks of ``size`` elements."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def at_or_last(items: Sequence[T], index: int) -> T:
    """Element at ``index``, or the last element when ``index`` runs past the end.

    Used for phase lists like ``initially(a, [b, c])`` where the final phase
    repeats forever.
    """
    if index < 0:
        raise ValueError(f"Negative index passed to at_or_last: {index}")
    if not items:
        raise ValueError("at_or_last requires a non-empty sequence")
    return items[min(index, len(items) - 1)]


# =============================================================================
# Payoff helpers
# =============================================================================


def winner(num_players: int, w: int) -> Payoff:
    """Player ``w`` wins ``num_players - 1``, everybody else loses 1."""
    return make_payoff(num_players - 1 if p == w else -1 for p in range(1, num_players + 1))


def loser(num_players: int, l: int) -> Payoff:
    """Player ``l`` loses ``num_players - 1``, everybody else wins 1."""
    return make_payoff(1 - num_players if p == l else 1 for p in range(1, num_players + 1))


def tie(num_players: int) -> Payoff:
    return make_payoff([0.0] * num_players)
