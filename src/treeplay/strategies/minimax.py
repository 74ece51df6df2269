"""Minimax search with alpha-beta pruning.

Only defined for perfect-information games without chance: every decision
node the search visits must classify as Perfect, and reaching a chance node
is an error. The search is two-role: nodes where ``me`` decides maximize
``me``'s payoff, every other player minimizes that same payoff. For more
than two players that is a simplification, not n-player minimax.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from treeplay.engine.context import ExecutionContext
from treeplay.errors import NotADecisionNodeError, UnsupportedGameTypeError
from treeplay.models.game import GameDefinition
from treeplay.models.info import Perfect
from treeplay.models.tree import (
    ChanceNode,
    DecisionNode,
    GameTree,
    PayoffNode,
    available_moves,
    children,
)

logger = logging.getLogger(__name__)


def _require_perfect(game: GameDefinition, node: GameTree) -> None:
    group = game.classify(node)
    if not isinstance(group, Perfect):
        raise UnsupportedGameTypeError(
            f"Minimax requires perfect information, but a decision of player "
            f"{getattr(node, 'player', '?')} classifies as {type(group).__name__}"
        )


def _value(game: GameDefinition, node: GameTree, me: int, alpha: float, beta: float) -> float:
    if isinstance(node, PayoffNode):
        return node.payoff.for_player(me)
    if isinstance(node, ChanceNode):
        raise UnsupportedGameTypeError("Minimax is not defined for games with chance nodes")
    if isinstance(node, DecisionNode):
        _require_perfect(game, node)
        maximizing = node.player == me
        for child in children(node):
            if alpha >= beta:
                break
            v = _value(game, child, me, alpha, beta)
            if maximizing:
                alpha = max(alpha, v)
            else:
                beta = min(beta, v)
        return alpha if maximizing else beta
    raise TypeError(f"Not a game tree node: {node!r}")


def best_move(game: GameDefinition, node: GameTree, me: int) -> Any:
    """Best move for player ``me`` (1-based) at decision ``node``.

    Every child of ``node`` is searched with the full window; ties go to the
    earliest move in edge order. Only nodes the search actually visits are
    checked, so a chance node or hidden decision inside a pruned subtree is
    never reported. Pre-scanning would force lazily unrolled trees.

    Raises:
        NotADecisionNodeError: If ``node`` is not a decision node
        UnsupportedGameTypeError: On imperfect information or chance nodes
            reached by the search
    """
    if not isinstance(node, DecisionNode):
        raise NotADecisionNodeError(f"Minimax needs a decision node, got {type(node).__name__}")
    _require_perfect(game, node)
    values = [_value(game, child, me, -math.inf, math.inf) for child in children(node)]
    best = max(range(len(values)), key=values.__getitem__)
    move = available_moves(node)[best]
    logger.debug(f"Minimax for player {me}: values {values}, choosing {move!r}")
    return move


def minimax(ctx: ExecutionContext) -> Any:
    """Strategy playing the minimax move for the deciding player."""
    node = ctx.location
    if not isinstance(node, DecisionNode):
        raise NotADecisionNodeError(f"Minimax needs a decision node, got {type(node).__name__}")
    return best_move(ctx.game, node, node.player)
