"""Round-robin tournaments between two-player strategies.

Every pairing of the player pool plays a fresh run of repeated games, so
no strategy state leaks from one pairing into the next. Each player's score
from a pairing is added to its tournament total, and players are ranked by
that total.

Usage:
    results = round_robin(pd, PD_PLAYERS, TournamentConfig(iterations=100))
    print(format_results(results))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from itertools import combinations, combinations_with_replacement
from typing import Optional, Sequence

from treeplay.config import ExecutionConfig, TournamentConfig
from treeplay.engine.context import Player
from treeplay.engine.randomness import SeededRandom
from treeplay.engine.runner import GameRunner
from treeplay.models.game import GameDefinition

logger = logging.getLogger(__name__)


@dataclass
class PairingResult:
    """Outcome of one pairing."""

    player_a: str
    player_b: str
    games: int = 0
    score_a: float = 0.0
    score_b: float = 0.0

    @property
    def avg_a(self) -> float:
        return self.score_a / self.games if self.games > 0 else 0.0

    @property
    def avg_b(self) -> float:
        return self.score_b / self.games if self.games > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "player_a": self.player_a,
            "player_b": self.player_b,
            "games": self.games,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "avg_a": round(self.avg_a, 4),
            "avg_b": round(self.avg_b, 4),
        }


@dataclass
class TournamentResults:
    """Results of a round-robin tournament."""

    pairings: list[PairingResult] = field(default_factory=list)
    totals: dict[str, float] = field(default_factory=dict)

    def add_pairing(self, result: PairingResult) -> None:
        self.pairings.append(result)
        self.totals[result.player_a] = self.totals.get(result.player_a, 0.0) + result.score_a
        if result.player_b != result.player_a:
            self.totals[result.player_b] = self.totals.get(result.player_b, 0.0) + result.score_b

    @property
    def ranking(self) -> list[tuple[str, float]]:
        """``(name, total)`` pairs, best first; ties keep entry order."""
        return sorted(self.totals.items(), key=lambda item: -item[1])

    @property
    def winner(self) -> Optional[str]:
        ranking = self.ranking
        return ranking[0][0] if ranking else None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "pairings": [p.to_dict() for p in self.pairings],
            "ranking": [{"player": name, "score": score} for name, score in self.ranking],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def play_pairing(
    game: GameDefinition,
    player_a: Player,
    player_b: Player,
    iterations: int,
    seed: Optional[int] = None,
) -> PairingResult:
    """Play ``iterations`` games of ``player_a`` (player 1) against ``player_b``."""
    runner = GameRunner(
        game,
        [player_a, player_b],
        SeededRandom(seed),
        ExecutionConfig(iterations=iterations, random_seed=seed),
    )
    result = PairingResult(player_a=player_a.name, player_b=player_b.name)
    for _ in range(iterations):
        summary = runner.run_game()
        result.games += 1
        result.score_a += summary.payoff[0]
        result.score_b += summary.payoff[1]
    logger.info(
        f"{player_a.name} vs {player_b.name}: "
        f"{result.score_a:g} - {result.score_b:g} over {result.games} games"
    )
    return result


def round_robin(
    game: GameDefinition,
    players: Sequence[Player],
    config: Optional[TournamentConfig] = None,
) -> TournamentResults:
    """Play every pairing of ``players`` in a two-player game.

    Raises:
        ValueError: If the game is not a two-player game or fewer than two
            players are entered
    """
    config = config or TournamentConfig()
    if game.num_players != 2:
        raise ValueError(f"Round-robin needs a two-player game, got {game.num_players} players")
    if len(players) < 2:
        raise ValueError(f"Round-robin needs at least two players, got {len(players)}")
    names = [p.name for p in players]
    if len(set(names)) != len(names):
        raise ValueError(f"Player names must be unique, got {names}")

    pair_fn = combinations_with_replacement if config.include_self_play else combinations
    results = TournamentResults(totals={name: 0.0 for name in names})
    for k, (a, b) in enumerate(pair_fn(players, 2)):
        # Each pairing gets its own reproducible seed.
        seed = config.random_seed + k if config.random_seed is not None else None
        results.add_pairing(play_pairing(game, a, b, config.iterations, seed))

    logger.info(f"Tournament finished: {len(results.pairings)} pairings, winner {results.winner}")
    return results


def format_results(results: TournamentResults) -> str:
    """Render pairings and ranking as a text table."""
    lines = [f"{'Pairing':<40} {'Games':>6} {'Score A':>9} {'Score B':>9}", "-" * 67]
    for p in results.pairings:
        pairing = f"{p.player_a} vs {p.player_b}"
        lines.append(f"{pairing:<40} {p.games:>6} {p.score_a:>9g} {p.score_b:>9g}")
    lines.append("")
    lines.append(f"{'Rank':<6}{'Player':<34} {'Score':>9}")
    lines.append("-" * 50)
    for rank, (name, score) in enumerate(results.ranking, start=1):
        lines.append(f"{rank:<6}{name:<34} {score:>9g}")
    return "\n".join(lines) + "\n"
