"""Game runner: drives an ExecutionContext through repeated play.

Each step looks at the node under the cursor:

1. DECISION - ask the deciding player's strategy for a move, check it is
   available, record it and descend
2. CHANCE - draw an outcome from the node's distribution and descend
3. TERMINAL - summarize the game, push it onto the history and reset the
   cursor to the root for the next game

If anything goes wrong during a game (an illegal move, a failing strategy
or query) the partial game is discarded, the history is left as it was and
the error propagates to the caller.

Usage:
    ctx = run_iterations(pd, [tit_for_tat, pavlov], 10)
    print(format_score(ctx))
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from treeplay.config import ExecutionConfig
from treeplay.engine.context import (
    ExecutionContext,
    ExecutionPhase,
    Player,
    StatefulStrategy,
)
from treeplay.engine.history import ChanceEvent, DecisionEvent, Summary
from treeplay.engine.randomness import RandomSource, SeededRandom
from treeplay.errors import IllegalMoveError
from treeplay.models.game import GameDefinition
from treeplay.models.tree import (
    ChanceNode,
    DecisionNode,
    available_moves,
    child_for_move,
    children,
)

logger = logging.getLogger(__name__)


class GameRunner:
    """Runs repeated games of one GameDefinition between fixed players.

    Attributes:
        context: The execution context being driven
        random: Source of randomness for chance nodes and random strategies
        config: Run settings
    """

    def __init__(
        self,
        game: GameDefinition,
        players: Sequence[Player],
        random_source: Optional[RandomSource] = None,
        config: Optional[ExecutionConfig] = None,
    ) -> None:
        """Initialize the runner.

        Args:
            game: Game to play
            players: One player per seat, player 1 first
            random_source: Randomness collaborator (default: SeededRandom
                seeded from config.random_seed)
            config: Run settings (default: ExecutionConfig())

        Raises:
            ValueError: If there are fewer players than the game needs
        """
        self.config = config or ExecutionConfig()
        self.random: RandomSource = random_source or SeededRandom(self.config.random_seed)
        self.context = ExecutionContext(game, players, self.random)
        # Private state of stateful strategies, keyed by 1-based seat.
        self._strategy_states: dict[int, Any] = {}

    @property
    def phase(self) -> ExecutionPhase:
        return self.context.phase

    def step(self) -> Optional[Summary]:
        """Advance the game by one node.

        Returns:
            The game's Summary if this step finished a game, otherwise None

        Raises:
            IllegalMoveError: If a strategy returns a move that is not available
        """
        ctx = self.context
        node = ctx.location

        if isinstance(node, DecisionNode):
            move = self._decide(node)
            legal = available_moves(node)
            if move not in legal:
                raise IllegalMoveError(node.player, move, legal)
            logger.debug(f"Player {node.player} ({ctx.players[node.player - 1]}) plays {move!r}")
            ctx.descend(DecisionEvent(node.player, move), child_for_move(node, move))
            return None

        if isinstance(node, ChanceNode):
            index = self.random.pick_weighted(node.dist)
            logger.debug(f"Chance picks outcome {index + 1} of {len(node.dist)}")
            ctx.descend(ChanceEvent(index + 1), children(node)[index])
            return None

        summary = ctx.finish_game()
        logger.debug(f"Game {ctx.num_games} finished with payoff {list(summary.payoff)}")
        if self.config.log_transcripts:
            transcript, _ = ctx.history.prev()
            logger.debug(f"Transcript of game {ctx.num_games}: {list(reversed(transcript))}")
        return summary

    def _decide(self, node: DecisionNode) -> Any:
        strategy = self.context.players[node.player - 1].strategy
        if isinstance(strategy, StatefulStrategy):
            state = self._strategy_states.get(node.player, strategy.initial)
            move, new_state = strategy.step(self.context, state)
            self._strategy_states[node.player] = new_state
            return move
        return strategy(self.context)

    def run_game(self) -> Summary:
        """Play one game to the end.

        Returns:
            Summary of the finished game

        Raises:
            Any error raised while playing. The partial game is discarded
            and the history is unchanged.
        """
        saved_states = dict(self._strategy_states)
        try:
            while True:
                summary = self.step()
                if summary is not None:
                    return summary
        except Exception as e:
            logger.warning(f"Aborting game {self.context.num_games + 1}: {e}")
            self.context.discard_game()
            self._strategy_states = saved_states
            raise

    def run_iterations(self, iterations: Optional[int] = None) -> ExecutionContext:
        """Play ``iterations`` games (default: config.iterations).

        Returns:
            The execution context, holding the accumulated history
        """
        if iterations is None:
            iterations = self.config.iterations
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")
        for _ in range(iterations):
            self.run_game()
        logger.info(
            f"Played {iterations} games between "
            f"{', '.join(p.name for p in self.context.players)}"
        )
        return self.context


def run_game(
    game: GameDefinition,
    players: Sequence[Player],
    random_source: Optional[RandomSource] = None,
    config: Optional[ExecutionConfig] = None,
) -> ExecutionContext:
    """Play a single game and return the resulting context."""
    runner = GameRunner(game, players, random_source, config)
    runner.run_game()
    return runner.context


def run_iterations(
    game: GameDefinition,
    players: Sequence[Player],
    iterations: int,
    random_source: Optional[RandomSource] = None,
    config: Optional[ExecutionConfig] = None,
) -> ExecutionContext:
    """Play ``iterations`` games and return the resulting context."""
    runner = GameRunner(game, players, random_source, config)
    return runner.run_iterations(iterations)
