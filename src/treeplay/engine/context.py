"""Execution context for repeated play.

The ExecutionContext holds everything a run knows: the game, the players,
the current location in the tree, the transcript of the game in progress and
the history of finished games. It is owned and mutated by the GameRunner;
strategies receive it to read from (see ``treeplay.strategies.query``) and
must not call its mutating methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from treeplay.engine.history import (
    ByGame,
    Event,
    PayoffEvent,
    Summary,
    Transcript,
    summarize,
)
from treeplay.engine.randomness import RandomSource, SeededRandom
from treeplay.models.game import GameDefinition
from treeplay.models.info import InfoGroup
from treeplay.models.tree import ChanceNode, DecisionNode, GameTree, PayoffNode


class ExecutionPhase(Enum):
    """What the runner has to do next, given the current node."""

    AWAITING_DECISION = "awaiting_decision"
    AWAITING_CHANCE = "awaiting_chance"
    TERMINAL = "terminal"


def phase_of(node: GameTree) -> ExecutionPhase:
    if isinstance(node, DecisionNode):
        return ExecutionPhase.AWAITING_DECISION
    if isinstance(node, ChanceNode):
        return ExecutionPhase.AWAITING_CHANCE
    if isinstance(node, PayoffNode):
        return ExecutionPhase.TERMINAL
    raise TypeError(f"Not a game tree node: {node!r}")


# A strategy maps the execution context to a move.
Strategy = Callable[["ExecutionContext"], Any]


class StatefulStrategy:
    """Strategy with private state threaded between its decisions.

    ``step(ctx, state)`` returns ``(move, new_state)``. The runner keeps the
    state per seat, outside the execution context, and passes it back on
    that seat's next decision. The state lives for the whole run.

    Usage:
        def step(ctx, count):
            return ("C" if count % 2 == 0 else "D"), count + 1

        Player("Alternator", StatefulStrategy(0, step))
    """

    def __init__(self, initial: Any, step: Callable[["ExecutionContext", Any], tuple[Any, Any]]) -> None:
        self.initial = initial
        self.step = step

    def __repr__(self) -> str:
        return f"StatefulStrategy(initial={self.initial!r})"


@dataclass(eq=False)
class Player:
    """A named strategy.

    Attributes:
        name: Display name
        strategy: Callable returning a move given the execution context, or
            a StatefulStrategy carrying private state between decisions
    """

    name: str
    strategy: Strategy

    def __str__(self) -> str:
        return self.name


class ExecutionContext:
    """State of one run of repeated play.

    Attributes:
        game: The game being played
        players: Players in seat order; ``players[0]`` is player 1
        random: Randomness shared by chance nodes and random strategies
    """

    def __init__(
        self,
        game: GameDefinition,
        players: Sequence[Player],
        random_source: Optional[RandomSource] = None,
    ) -> None:
        if len(players) < game.num_players:
            raise ValueError(
                f"Game needs {game.num_players} players, got {len(players)}"
            )
        self.game = game
        self.players: tuple[Player, ...] = tuple(players)
        self.random: RandomSource = random_source or SeededRandom()
        self._location: GameTree = game.tree
        # Both kept in chronological order; exposed most recent first.
        self._events: list[Event] = []
        self._games: list[tuple[Transcript, Summary]] = []

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def location(self) -> GameTree:
        """Current node of the game in progress."""
        return self._location

    @property
    def phase(self) -> ExecutionPhase:
        return phase_of(self._location)

    @property
    def info_group(self) -> InfoGroup:
        """Information group of the current location."""
        return self.game.info(self._location)

    @property
    def num_players(self) -> int:
        return self.game.num_players

    @property
    def transcript(self) -> Transcript:
        """Events of the game in progress, most recent first."""
        return tuple(reversed(self._events))

    @property
    def num_games(self) -> int:
        """Number of finished games."""
        return len(self._games)

    @property
    def history(self) -> ByGame[tuple[Transcript, Summary]]:
        """``(transcript, summary)`` of every finished game, most recent first."""
        return ByGame(reversed(self._games))

    @property
    def transcripts(self) -> ByGame[Transcript]:
        return ByGame(t for t, _ in reversed(self._games))

    @property
    def summaries(self) -> ByGame[Summary]:
        return ByGame(s for _, s in reversed(self._games))

    # -------------------------------------------------------------------------
    # Mutation (GameRunner only)
    # -------------------------------------------------------------------------

    def descend(self, event: Event, child: GameTree) -> None:
        """Record ``event`` and move to ``child``."""
        self._events.append(event)
        self._location = child

    def finish_game(self) -> Summary:
        """Close the game at the current payoff node and start the next one.

        The summary and the closed transcript (ending with its PayoffEvent)
        are pushed onto the history; location and transcript are reset.
        """
        node = self._location
        if not isinstance(node, PayoffNode):
            raise TypeError(f"Cannot finish a game at a {type(node).__name__}")
        summary = summarize(self.num_players, tuple(reversed(self._events)), node.payoff)
        self._events.append(PayoffEvent(node.payoff))
        self._games.append((tuple(reversed(self._events)), summary))
        self.discard_game()
        return summary

    def discard_game(self) -> None:
        """Drop the game in progress without touching the history."""
        self._events = []
        self._location = self.game.tree
