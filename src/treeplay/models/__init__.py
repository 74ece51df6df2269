"""Game models for treeplay.

This module exports payoffs, game trees, information groups and game
definitions.
"""

from .game import (
    GameDefinition,
    from_extensive_form,
    from_matrix,
    from_normal_form,
    from_state_machine,
    take_turns,
    zero_sum,
)
from .info import (
    Imperfect,
    InfoGroup,
    NoInfo,
    Perfect,
    classify,
    perfect,
    render_info,
    simultaneous,
)
from .payoffs import (
    ByPlayer,
    Distribution,
    Payoff,
    at_or_last,
    chunk,
    expand_dist,
    loser,
    make_payoff,
    tie,
    uniform,
    winner,
)
from .tree import (
    ChanceNode,
    DecisionNode,
    GameTree,
    LazyEdges,
    PayoffNode,
    add_edge,
    available_moves,
    bfs,
    child_for_move,
    chance,
    children,
    combine,
    decision,
    dfs,
    edges,
    format_move,
    format_payoff,
    max_player,
    payoff,
    player,
    render_tree,
)

__all__ = [
    # Payoffs
    "ByPlayer",
    "Distribution",
    "Payoff",
    "at_or_last",
    "chunk",
    "expand_dist",
    "loser",
    "make_payoff",
    "tie",
    "uniform",
    "winner",
    # Trees
    "GameTree",
    "DecisionNode",
    "ChanceNode",
    "PayoffNode",
    "LazyEdges",
    "decision",
    "chance",
    "payoff",
    "player",
    "available_moves",
    "children",
    "edges",
    "child_for_move",
    "bfs",
    "dfs",
    "max_player",
    "combine",
    "add_edge",
    "render_tree",
    "format_move",
    "format_payoff",
    # Information
    "InfoGroup",
    "Perfect",
    "Imperfect",
    "NoInfo",
    "perfect",
    "simultaneous",
    "classify",
    "render_info",
    # Definitions
    "GameDefinition",
    "from_extensive_form",
    "from_normal_form",
    "from_matrix",
    "zero_sum",
    "from_state_machine",
    "take_turns",
]
