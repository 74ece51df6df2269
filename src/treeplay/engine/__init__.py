"""Execution engine for treeplay.

This module contains everything needed to play games repeatedly:
- history: Events, transcripts, summaries and per-game views
- randomness: Random source used by chance nodes and random strategies
- context: Execution context read by strategies
- runner: Game loop driving the context through repeated play
- tournament: Round-robin tournaments over a player pool

Usage:
    from treeplay.engine import Player, run_iterations
    from treeplay.strategies import pure

    ctx = run_iterations(pd, [Player("Fink", pure("D")), Player("Mum", pure("C"))], 10)
    print(ctx.num_games)
"""

from treeplay.engine.context import (
    ExecutionContext,
    ExecutionPhase,
    Player,
    StatefulStrategy,
    Strategy,
    phase_of,
)
from treeplay.engine.history import (
    ByGame,
    ChanceEvent,
    DecisionEvent,
    Event,
    PayoffEvent,
    Summary,
    Transcript,
    summarize,
)
from treeplay.engine.randomness import RandomSource, SeededRandom
from treeplay.engine.runner import GameRunner, run_game, run_iterations
from treeplay.engine.tournament import (
    PairingResult,
    TournamentResults,
    format_results,
    play_pairing,
    round_robin,
)

__all__ = [
    # Context
    "ExecutionContext",
    "ExecutionPhase",
    "Player",
    "StatefulStrategy",
    "Strategy",
    "phase_of",
    # History
    "ByGame",
    "ChanceEvent",
    "DecisionEvent",
    "Event",
    "PayoffEvent",
    "Summary",
    "Transcript",
    "summarize",
    # Randomness
    "RandomSource",
    "SeededRandom",
    # Runner
    "GameRunner",
    "run_game",
    "run_iterations",
    # Tournament
    "PairingResult",
    "TournamentResults",
    "format_results",
    "play_pairing",
    "round_robin",
]
