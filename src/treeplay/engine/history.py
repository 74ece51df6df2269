"""Execution history: events, transcripts, summaries and per-game views.

Everything here is ordered most recent first: a transcript lists the last
event of a game first, and a ``ByGame`` lists the just-finished game first.
All of the offset conventions used by strategies (``prev``, ``first``,
``gamen`` and friends) are implemented once, on ``ByGame``:

    games = ByGame([p3, p2, p1])   # p3 is the most recent game
    games.prev()      -> p3
    games.first()     -> p1
    games.gamen(2)    -> p2        # counting from game 1
    games.prevn(2)    -> [p3, p2]
    games.firstn(2)   -> [p2, p1]  # earliest two, still most recent first
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Sequence, TypeVar, Union

from treeplay.errors import IndexOutOfRangeError
from treeplay.models.payoffs import ByPlayer, Payoff

T = TypeVar("T")


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class DecisionEvent:
    """``player`` (1-based) played ``move``."""

    player: int
    move: Any


@dataclass(frozen=True)
class ChanceEvent:
    """Chance picked the outcome at 1-based position ``index``."""

    index: int


@dataclass(frozen=True)
class PayoffEvent:
    """The game ended with ``payoff``."""

    payoff: Payoff


Event = Union[DecisionEvent, ChanceEvent, PayoffEvent]
Transcript = tuple[Event, ...]


@dataclass(frozen=True)
class Summary:
    """Condensed record of one game.

    Attributes:
        moves: Moves made by each player in that game, most recent first
        payoff: Final payoff
    """

    moves: ByPlayer[tuple[Any, ...]]
    payoff: Payoff


def summarize(num_players: int, transcript: Sequence[Event], payoff: Payoff) -> Summary:
    """Build the summary of a game from its (most recent first) transcript."""
    moves: list[list[Any]] = [[] for _ in range(num_players)]
    for event in transcript:
        if isinstance(event, DecisionEvent):
            moves[event.player - 1].append(event.move)
        elif not isinstance(event, (ChanceEvent, PayoffEvent)):
            raise TypeError(f"Not a transcript event: {event!r}")
    return Summary(ByPlayer(tuple(ms) for ms in moves), payoff)


# =============================================================================
# Per-game view
# =============================================================================


@dataclass(frozen=True, init=False)
class ByGame(Generic[T]):
    """Immutable per-game sequence, most recent game first."""

    entries: tuple[T, ...]

    def __init__(self, entries: Iterable[T]) -> None:
        object.__setattr__(self, "entries", tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> T:
        return self.entries[index]

    def __repr__(self) -> str:
        return f"ByGame({list(self.entries)!r})"

    @property
    def num_games(self) -> int:
        return len(self.entries)

    def map(self, fn) -> "ByGame":
        return ByGame(fn(e) for e in self.entries)

    def every(self) -> list[T]:
        """All entries, most recent first."""
        return list(self.entries)

    def prev(self) -> T:
        """Entry of the most recent game."""
        if not self.entries:
            raise IndexOutOfRangeError("No previous game: no games have been played")
        return self.entries[0]

    def prevn(self, n: int) -> list[T]:
        """Entries of the ``n`` most recent games, most recent first."""
        if n < 0:
            raise IndexOutOfRangeError(f"Cannot take {n} games")
        return list(self.entries[:n])

    def first(self) -> T:
        """Entry of the earliest game."""
        if not self.entries:
            raise IndexOutOfRangeError("No first game: no games have been played")
        return self.entries[-1]

    def firstn(self, n: int) -> list[T]:
        """Entries of the ``n`` earliest games, most recent first."""
        if n < 0:
            raise IndexOutOfRangeError(f"Cannot take {n} games")
        if n == 0:
            return []
        return list(self.entries[-n:])

    def gamen(self, i: int) -> T:
        """Entry of game number ``i``, counting from game 1."""
        n = len(self.entries)
        if not 1 <= i <= n:
            raise IndexOutOfRangeError(f"No game {i}: {n} games have been played")
        return self.entries[n - i]


def player_entry(values: Sequence[T], index: int) -> T:
    """Entry of a per-player sequence at a 0-based index."""
    if not 0 <= index < len(values):
        raise IndexOutOfRangeError(
            f"No player {index + 1}: only {len(values)} players"
        )
    return values[index]
