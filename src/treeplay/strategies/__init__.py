"""Strategies for treeplay.

This module provides:

1. Queries - read-only views of the execution context (scores, history,
   my/his/their player selectors, prev/first/gamen game selectors)
2. Common strategies - pure, random and mixed play plus phase combinators
3. Minimax - alpha-beta search for perfect-information games

A strategy is any callable taking the execution context and returning a
move, so queries can be used as strategies directly.
"""

from treeplay.engine.context import StatefulStrategy
from treeplay.strategies.common import (
    finally_,
    initially,
    initially_then,
    mixed,
    next_,
    periodic,
    pure,
    random_from,
    random_move,
)
from treeplay.strategies.minimax import best_move, minimax
from treeplay.strategies.query import (
    Query,
    as_query,
    constant,
    each,
    every,
    first,
    firstn,
    game,
    gamen,
    her,
    his,
    info_group,
    is_first_game,
    location,
    move,
    moves,
    my,
    my_index,
    num_games,
    our,
    payoff,
    playern,
    players,
    prev,
    prevn,
    score,
    summaries,
    their,
    transcript,
    transcripts,
)

__all__ = [
    # Queries
    "Query",
    "as_query",
    "constant",
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
    "my",
    "his",
    "her",
    "our",
    "their",
    "playern",
    "every",
    "first",
    "firstn",
    "prev",
    "prevn",
    "gamen",
    "each",
    # Common strategies
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
    # Minimax
    "best_move",
    "minimax",
]
