"""Read-only queries over the execution context.

A Query wraps a function ``ctx -> value``. Queries are callable, so every
query is also a strategy, and selectors build new queries out of old ones:

    his(prev(move))        # the other player's move in the last game
    my(score)              # my current score
    each(his, every(move)) # the other player's move in every game, most recent first
    gamen(1, payoff)       # payoff of the very first game

Two families of selectors exist:

- Player selectors (``my``, ``his``/``her``, ``our``, ``their``,
  ``playern``) pick from a per-player value. ``my`` is the player deciding
  at the current location; ``his`` is the next player after me, wrapping
  around, which is the opponent in a two-player game.
- Game selectors (``every``, ``first``, ``firstn``, ``prev``, ``prevn``,
  ``gamen``) pick from a per-game value. History is kept most recent first;
  the offset arithmetic lives on ``treeplay.engine.history.ByGame``.

Selecting a game or player that does not exist raises IndexOutOfRangeError.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from treeplay.engine.context import ExecutionContext
from treeplay.engine.history import ByGame, player_entry
from treeplay.errors import IndexOutOfRangeError, NotADecisionNodeError
from treeplay.models.payoffs import ByPlayer, Payoff, make_payoff
from treeplay.models.tree import DecisionNode


class Query:
    """A read-only computation over an ExecutionContext."""

    __slots__ = ("fn", "name")

    def __init__(self, fn: Callable[[ExecutionContext], Any], name: str | None = None) -> None:
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "query")

    def __call__(self, ctx: ExecutionContext) -> Any:
        return self.fn(ctx)

    def map(self, f: Callable[[Any], Any]) -> "Query":
        """Query whose result is ``f`` applied to this query's result."""
        return Query(lambda ctx: f(self.fn(ctx)), f"map({self.name})")

    def __repr__(self) -> str:
        return f"Query({self.name})"


def as_query(x: Callable[[ExecutionContext], Any]) -> Query:
    return x if isinstance(x, Query) else Query(x)


def constant(value: Any) -> Query:
    """Query that ignores the context and returns ``value``."""
    return Query(lambda ctx: value, f"constant({value!r})")


# =============================================================================
# Base queries
# =============================================================================


def _my_index(ctx: ExecutionContext) -> int:
    node = ctx.location
    if not isinstance(node, DecisionNode):
        raise NotADecisionNodeError(
            f"No deciding player at a {type(node).__name__}; "
            "player selectors can only be used while a player is deciding"
        )
    return node.player - 1


def _moves(ctx: ExecutionContext) -> ByGame[ByPlayer[tuple[Any, ...]]]:
    return ctx.summaries.map(lambda s: s.moves)


def _last_moves(ctx: ExecutionContext) -> ByGame[ByPlayer[Any]]:
    # Moves are most recent first, so the head is the last move of the game.
    # A player who made no move in a game gets None.
    return _moves(ctx).map(lambda ms: ByPlayer(m[0] if m else None for m in ms))


def _payoffs(ctx: ExecutionContext) -> ByGame[Payoff]:
    return ctx.summaries.map(lambda s: s.payoff)


def _score(ctx: ExecutionContext) -> Payoff:
    total = make_payoff([0.0] * ctx.num_players)
    for p in _payoffs(ctx):
        total = total + p
    return total


location: Query = Query(lambda ctx: ctx.location, "location")
info_group: Query = Query(lambda ctx: ctx.info_group, "info_group")
game: Query = Query(lambda ctx: ctx.game, "game")
players: Query = Query(lambda ctx: list(ctx.players), "players")
num_games: Query = Query(lambda ctx: ctx.num_games, "num_games")
is_first_game: Query = Query(lambda ctx: ctx.num_games == 0, "is_first_game")
transcript: Query = Query(lambda ctx: ctx.transcript, "transcript")
transcripts: Query = Query(lambda ctx: ctx.transcripts, "transcripts")
summaries: Query = Query(lambda ctx: ctx.summaries, "summaries")
moves: Query = Query(_moves, "moves")
move: Query = Query(_last_moves, "move")
payoff: Query = Query(_payoffs, "payoff")
score: Query = Query(_score, "score")
my_index: Query = Query(_my_index, "my_index")


# =============================================================================
# Player selectors
# =============================================================================


def my(x: Callable[[ExecutionContext], Sequence[Any]]) -> Query:
    """My entry of a per-player value."""
    x = as_query(x)
    return Query(lambda ctx: player_entry(x(ctx), _my_index(ctx)), f"my({x.name})")


def his(x: Callable[[ExecutionContext], Sequence[Any]]) -> Query:
    """The next player's entry of a per-player value."""
    x = as_query(x)

    def select(ctx: ExecutionContext) -> Any:
        return player_entry(x(ctx), (_my_index(ctx) + 1) % ctx.num_players)

    return Query(select, f"his({x.name})")


her = his


def our(x: Callable[[ExecutionContext], Sequence[Any]]) -> Query:
    """Every player's entry, in player order."""
    x = as_query(x)
    return Query(lambda ctx: list(x(ctx)), f"our({x.name})")


def their(x: Callable[[ExecutionContext], Sequence[Any]]) -> Query:
    """Every entry except mine, in player order."""
    x = as_query(x)

    def select(ctx: ExecutionContext) -> list[Any]:
        values = list(x(ctx))
        i = _my_index(ctx)
        return values[:i] + values[i + 1:]

    return Query(select, f"their({x.name})")


def playern(i: int, x: Callable[[ExecutionContext], Sequence[Any]]) -> Query:
    """Player ``i``'s entry (1-based)."""
    x = as_query(x)

    def select(ctx: ExecutionContext) -> Any:
        if i < 1:
            raise IndexOutOfRangeError(f"No player {i}: players are numbered from 1")
        return player_entry(x(ctx), i - 1)

    return Query(select, f"playern({i}, {x.name})")


# =============================================================================
# Game selectors
# =============================================================================


def every(x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """All games, most recent first."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).every(), f"every({x.name})")


def first(x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """The earliest game."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).first(), f"first({x.name})")


def firstn(n: int, x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """The ``n`` earliest games, most recent first."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).firstn(n), f"firstn({n}, {x.name})")


def prev(x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """The most recent game."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).prev(), f"prev({x.name})")


def prevn(n: int, x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """The ``n`` most recent games, most recent first."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).prevn(n), f"prevn({n}, {x.name})")


def gamen(i: int, x: Callable[[ExecutionContext], ByGame[Any]]) -> Query:
    """Game number ``i``, counting from 1."""
    x = as_query(x)
    return Query(lambda ctx: x(ctx).gamen(i), f"gamen({i}, {x.name})")


def each(
    selector: Callable[[Query], Query],
    x: Callable[[ExecutionContext], Sequence[Any]],
) -> Query:
    """Apply ``selector`` to every element of a list-valued query.

    Example:
        each(his, every(move))  # the other player's last move in every game
    """
    x = as_query(x)
    return Query(
        lambda ctx: [selector(constant(v))(ctx) for v in x(ctx)],
        f"each({getattr(selector, '__name__', 'selector')}, {x.name})",
    )


__all__ = [
    "Query",
    "as_query",
    "constant",
    # Base queries
    "location",
    "info_group",
    "game",
    "players",
    "num_games",
    "is_first_game",
    "transcript",
    "transcripts",
    "summaries",
    "moves",
    "move",
    "payoff",
    "score",
    "my_index",
    # Player selectors
    "my",
    "his",
    "her",
    "our",
    "their",
    "playern",
    # Game selectors
    "every",
    "first",
    "firstn",
    "prev",
    "prevn",
    "gamen",
    "each",
]
