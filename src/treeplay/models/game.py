"""Game definitions.

A GameDefinition packages a player count, an information partition and the
root of a game tree. Games are built in one of three ways:

- Extensive form: hand-built tree, perfect information
  (``from_extensive_form``)
- Normal form: per-player move lists and a flattened payoff table
  (``from_normal_form``, ``from_matrix``, ``zero_sum``)
- State-driven: a finite, acyclic state machine unrolled into a tree
  (``from_state_machine``, ``take_turns``)

Usage:
    pd = from_matrix(["C", "D"], [[2, 2], [0, 3], [3, 0], [1, 1]])
    crisis = from_extensive_form(start)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence, TypeVar

from treeplay.errors import MalformedTreeError
from treeplay.models.info import Imperfect, InfoGroup, Partition, Perfect, perfect
from treeplay.models.payoffs import chunk
from treeplay.models.tree import DecisionNode, GameTree, PayoffNode, dfs, max_player

logger = logging.getLogger(__name__)

S = TypeVar("S")
M = TypeVar("M")


@dataclass(frozen=True)
class GameDefinition:
    """An immutable game: who plays, what they can see, and the tree.

    Attributes:
        num_players: Number of players
        tree: Root of the game tree
        info: Partition function from a node to its information group
    """

    num_players: int
    tree: GameTree
    info: Partition = perfect

    def __post_init__(self) -> None:
        if self.num_players < 1:
            raise MalformedTreeError(f"A game needs at least one player, got {self.num_players}")

    def classify(self, node: GameTree) -> InfoGroup:
        return self.info(node)

    def with_info(self, info: Partition) -> "GameDefinition":
        """Same game under a different information partition."""
        return replace(self, info=info)


# =============================================================================
# Extensive form
# =============================================================================


def _check_width(node: PayoffNode, num_players: int) -> None:
    if len(node.payoff) != num_players:
        raise MalformedTreeError(
            f"Payoff {list(node.payoff)!r} does not have {num_players} entries"
        )


def from_extensive_form(tree: GameTree, num_players: int | None = None) -> GameDefinition:
    """Build a perfect-information game from a finite tree.

    The player count is the highest player index in the tree unless given.
    Every payoff in the tree must have one entry per player.

    Raises:
        MalformedTreeError: If the count cannot be inferred (no decision node)
            or a payoff has the wrong number of entries
    """
    if num_players is None:
        num_players = max_player(tree)
        if num_players == 0:
            raise MalformedTreeError(
                "Cannot infer the player count of a tree without decision nodes; "
                "pass num_players explicitly"
            )
    for node in dfs(tree):
        if isinstance(node, PayoffNode):
            _check_width(node, num_players)
    game = GameDefinition(num_players, tree, perfect)
    logger.debug(f"Built extensive-form game for {num_players} players")
    return game


# =============================================================================
# Normal form
# =============================================================================


def from_normal_form(
    num_players: int,
    moves_per_player: Sequence[Sequence[Any]],
    payoffs: Sequence[Sequence[float]],
) -> GameDefinition:
    """Build a game from a normal-form definition.

    Player ``n`` decides at depth ``n``; every decision node of a level is
    indistinguishable from the others at that level, so each player decides
    without knowing the moves made above it. Payoffs are listed in row-major
    order: the last player's move varies fastest.

    Raises:
        MalformedTreeError: If the move lists and payoff table don't line up
    """
    if num_players < 1 or len(moves_per_player) != num_players:
        raise MalformedTreeError(
            f"Expected move lists for {num_players} players, got {len(moves_per_player)}"
        )
    for p, moves in enumerate(moves_per_player, start=1):
        if not moves:
            raise MalformedTreeError(f"Player {p} has no moves")
    expected = math.prod(len(moves) for moves in moves_per_player)
    if len(payoffs) != expected:
        raise MalformedTreeError(
            f"Payoff table has {len(payoffs)} entries, expected {expected} "
            f"({' x '.join(str(len(m)) for m in moves_per_player)})"
        )
    for cell in payoffs:
        if len(cell) != num_players:
            raise MalformedTreeError(f"Payoff {list(cell)!r} does not have {num_players} entries")

    levels: dict[int, list[GameTree]] = {}
    nodes: list[GameTree] = [PayoffNode(v) for v in payoffs]
    for p in range(num_players, 0, -1):
        moves = list(moves_per_player[p - 1])
        nodes = [DecisionNode(p, list(zip(moves, group))) for group in chunk(len(moves), nodes)]
        levels[p] = nodes

    def group(node: GameTree) -> InfoGroup:
        if isinstance(node, DecisionNode):
            return Imperfect(levels[node.player])
        return Perfect(node)

    (root,) = levels[1]
    logger.debug(f"Built normal-form game for {num_players} players with {expected} outcomes")
    return GameDefinition(num_players, root, group)


def from_matrix(moves: Sequence[Any], payoffs: Sequence[Sequence[float]]) -> GameDefinition:
    """Two-player normal-form game where both players have the same moves."""
    return from_normal_form(2, [moves, moves], payoffs)


def zero_sum(moves: Sequence[Any], values: Sequence[float]) -> GameDefinition:
    """Two-player zero-sum matrix game; ``values`` are player 1's payoffs."""
    return from_matrix(moves, [[v, -v] for v in values])


# =============================================================================
# State-driven
# =============================================================================


def _unroll(
    num_players: int,
    whose_turn: Callable[[Any], int],
    is_terminal: Callable[[Any, int], bool],
    legal_moves: Callable[[Any, int], Sequence[Any]],
    transition: Callable[[Any, int, Any], Any],
    payoff_fn: Callable[[Any, int], Sequence[float]],
    node_state: Callable[[Any], Any],
    state: Any,
) -> GameTree:
    p = whose_turn(state)
    if is_terminal(state, p):
        leaf = PayoffNode(payoff_fn(state, p), node_state(state))
        _check_width(leaf, num_players)
        return leaf
    moves = list(legal_moves(state, p))
    if not moves:
        raise MalformedTreeError(
            f"Non-terminal state {node_state(state)!r} has no legal moves for player {p}"
        )

    def expand() -> list[tuple[Any, GameTree]]:
        return [
            (m, _unroll(num_players, whose_turn, is_terminal, legal_moves, transition, payoff_fn,
                        node_state, transition(state, p, m)))
            for m in moves
        ]

    return DecisionNode(p, expand, node_state(state))


def from_state_machine(
    num_players: int,
    whose_turn: Callable[[S], int],
    is_terminal: Callable[[S, int], bool],
    legal_moves: Callable[[S, int], Sequence[M]],
    transition: Callable[[S, int, M], S],
    payoff_fn: Callable[[S, int], Sequence[float]],
    initial_state: S,
) -> GameDefinition:
    """Build a perfect-information game by unrolling a state machine.

    Each node carries the state it was built from. Subtrees are expanded the
    first time they are visited. The state graph must be finite and acyclic;
    a cycle makes traversal run forever and avoiding one is up to the caller.

    Args:
        num_players: Number of players
        whose_turn: Player to move in a state
        is_terminal: Whether the game is over in a state
        legal_moves: Moves available to the player to move
        transition: State reached when the player plays a move
        payoff_fn: Payoff of a terminal state
        initial_state: Starting state

    Raises:
        MalformedTreeError: When a node is built from a non-terminal state
            without moves, or a terminal state whose payoff does not have
            ``num_players`` entries. Lazily built nodes raise on first visit.
    """
    root = _unroll(num_players, whose_turn, is_terminal, legal_moves, transition, payoff_fn,
                   lambda s: s, initial_state)
    logger.debug(f"Built state-driven game for {num_players} players")
    return GameDefinition(num_players, root, perfect)


def take_turns(
    num_players: int,
    is_terminal: Callable[[S, int], bool],
    legal_moves: Callable[[S, int], Sequence[M]],
    transition: Callable[[S, int, M], S],
    payoff_fn: Callable[[S, int], Sequence[float]],
    initial_state: S,
) -> GameDefinition:
    """State-driven game where players move in turn, player 1 first."""

    def next_state(st: tuple[S, int], p: int, m: M) -> tuple[S, int]:
        return (transition(st[0], p, m), p % num_players + 1)

    root = _unroll(
        num_players,
        lambda st: st[1],
        lambda st, p: is_terminal(st[0], p),
        lambda st, p: legal_moves(st[0], p),
        next_state,
        lambda st, p: payoff_fn(st[0], p),
        lambda st: st[0],
        (initial_state, 1),
    )
    logger.debug(f"Built turn-taking game for {num_players} players")
    return GameDefinition(num_players, root, perfect)
