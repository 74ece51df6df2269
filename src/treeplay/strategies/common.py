"""Common strategies and strategy combinators.

Usage:
    fink = pure("D")
    alternator = periodic(["C", "D"])
    tit_for_tat = initially_then(pure("C"), his(prev(move)))
    ccd = initially(pure("C"), next_(pure("C"), finally_(pure("D"))))
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from treeplay.engine.context import ExecutionContext, StatefulStrategy, Strategy
from treeplay.models.payoffs import at_or_last, expand_dist
from treeplay.models.tree import available_moves
from treeplay.strategies.query import Query


def pure(m: Any) -> Query:
    """Always play ``m``."""
    return Query(lambda ctx: m, f"pure({m!r})")


def _random_move(ctx: ExecutionContext) -> Any:
    moves = available_moves(ctx.location)
    return moves[ctx.random.pick_uniform(len(moves))]


random_move: Query = Query(_random_move, "random")


def random_from(moves: Sequence[Any]) -> Query:
    """Pick uniformly from ``moves``.

    Raises:
        ValueError: If ``moves`` is empty
    """
    options = list(moves)
    if not options:
        raise ValueError("random_from needs at least one move")
    return Query(lambda ctx: options[ctx.random.pick_uniform(len(options))], f"random_from({options!r})")


def mixed(dist: Iterable[tuple[int, Any]]) -> Query:
    """Play moves according to a weighted distribution.

    ``mixed([(5, "C"), (1, "D")])`` cooperates five times out of six.
    """
    return random_from(expand_dist(dist))


def periodic(moves: Sequence[Any]) -> Query:
    """Play ``moves[k mod len(moves)]`` in game ``k + 1``."""
    pattern = list(moves)
    if not pattern:
        raise ValueError("periodic needs at least one move")
    return Query(lambda ctx: pattern[ctx.num_games % len(pattern)], f"periodic({pattern!r})")


def initially(s: Strategy, rest: Sequence[Strategy]) -> Query:
    """Play ``s`` in the first game, then ``rest[0]``, ``rest[1]``, ...

    The last strategy keeps being played once the list runs out.
    """
    phases = [s, *rest]
    return Query(lambda ctx: at_or_last(phases, ctx.num_games)(ctx), "initially")


def next_(s: Strategy, rest: Sequence[Strategy]) -> list[Strategy]:
    return [s, *rest]


def finally_(s: Strategy) -> list[Strategy]:
    return [s]


def initially_then(a: Strategy, b: Strategy) -> Query:
    """Play ``a`` in the first game and ``b`` in every game after it."""
    return initially(a, finally_(b))


__all__ = [
    "StatefulStrategy",
    "pure",
    "random_move",
    "random_from",
    "mixed",
    "periodic",
    "initially",
    "next_",
    "finally_",
    "initially_then",
]
