"""Game trees.

A game tree is built from three node kinds:

- DecisionNode: a player picks one of the outgoing edges
- ChanceNode: the environment picks an edge from a weighted distribution
- PayoffNode: the game is over, each player receives a payoff

Edges are ``(move, child)`` pairs. Trees are immutable and structurally
compared, so subtrees can be shared freely and larger trees can be built by
composing smaller ones:

    ussr = lambda *edges: decision(1, edges)
    start = decision(1, [("Send Missiles", response)]) | ("Do Nothing", payoff([-1, 1]))

``a + b`` combines two nodes of the same kind (summed payoffs, concatenated
chance outcomes, concatenated edges of the same player's decisions) and
``node | edge`` appends an edge to a decision node.

Decision edges may also be given as a zero-argument callable. The edges are
then produced the first time they are needed and cached, which is how
state-driven games unroll large trees without building them up front.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Union

from treeplay.errors import MalformedTreeError, TypeMismatchError
from treeplay.models.payoffs import ByPlayer, Distribution, Payoff, make_payoff

Move = Any
Edge = tuple[Move, "GameTree"]
EdgeSource = Union[Iterable[Edge], Callable[[], Iterable[Edge]]]


class LazyEdges(Sequence):
    """Edge list produced on first access by a zero-argument callable."""

    __slots__ = ("_source", "_edges")

    def __init__(self, source: Callable[[], Iterable[Edge]]) -> None:
        self._source = source
        self._edges: tuple[Edge, ...] | None = None

    def _materialize(self) -> tuple[Edge, ...]:
        if self._edges is None:
            edges = tuple(_as_edge(e) for e in self._source())
            if not edges:
                raise MalformedTreeError("Decision node produced no edges")
            self._edges = edges
            self._source = None
        return self._edges

    @property
    def is_materialized(self) -> bool:
        return self._edges is not None

    def __getitem__(self, index):
        return self._materialize()[index]

    def __len__(self) -> int:
        return len(self._materialize())

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._materialize())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (LazyEdges, tuple, list)):
            return self._materialize() == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._materialize())

    def __repr__(self) -> str:
        if self._edges is None:
            return "LazyEdges(<pending>)"
        return f"LazyEdges({self._edges!r})"


class GameTree:
    """Base class of the three node kinds."""

    __slots__ = ()

    def __add__(self, other: "GameTree") -> "GameTree":
        return combine(self, other)

    def __or__(self, edge: Edge) -> "GameTree":
        return add_edge(self, edge)

    def __str__(self) -> str:
        return render_tree(self)


@dataclass(frozen=True)
class DecisionNode(GameTree):
    """A node where ``player`` (1-based) chooses among ``edges``."""

    player: int
    edges: Sequence[Edge]
    state: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.player, bool) or not isinstance(self.player, int) or self.player < 1:
            raise MalformedTreeError(f"Decision player index must be a positive integer, got {self.player!r}")
        if callable(self.edges):
            object.__setattr__(self, "edges", LazyEdges(self.edges))
            return
        edges = tuple(_as_edge(e) for e in self.edges)
        if not edges:
            raise MalformedTreeError(f"Decision node for player {self.player} has no edges")
        object.__setattr__(self, "edges", edges)


@dataclass(frozen=True)
class ChanceNode(GameTree):
    """A node where the environment draws an edge from ``dist``."""

    dist: Distribution[Edge]
    state: Any = None

    def __post_init__(self) -> None:
        dist = self.dist if isinstance(self.dist, Distribution) else Distribution(self.dist)
        dist = Distribution((w, _as_edge(e)) for w, e in dist)
        if not len(dist):
            raise MalformedTreeError("Chance node has no outcomes")
        object.__setattr__(self, "dist", dist)


@dataclass(frozen=True)
class PayoffNode(GameTree):
    """Terminal node."""

    payoff: Payoff
    state: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "payoff", make_payoff(self.payoff))


def _as_edge(edge: Any) -> Edge:
    try:
        move, child = edge
    except (TypeError, ValueError):
        raise MalformedTreeError(f"Edges must be (move, subtree) pairs, got {edge!r}") from None
    if not isinstance(child, GameTree):
        raise MalformedTreeError(f"Edge {move!r} does not lead to a game tree: {child!r}")
    return (move, child)


# =============================================================================
# Smart constructors
# =============================================================================


def decision(player: int, edges: EdgeSource) -> DecisionNode:
    return DecisionNode(player, edges)


def chance(dist: Distribution[Edge] | Iterable[tuple[int, Edge]]) -> ChanceNode:
    return ChanceNode(dist)


def payoff(values: Iterable[float]) -> PayoffNode:
    return PayoffNode(values)


def player(p: int, edge: Edge) -> DecisionNode:
    """A decision node for player ``p`` with a single edge."""
    return DecisionNode(p, [edge])


# =============================================================================
# Traversal
# =============================================================================


def available_moves(node: GameTree) -> list[Move]:
    """Moves leaving ``node``, in edge order."""
    if isinstance(node, DecisionNode):
        return [m for m, _ in node.edges]
    if isinstance(node, ChanceNode):
        return [m for _, (m, _) in node.dist]
    if isinstance(node, PayoffNode):
        return []
    raise TypeError(f"Not a game tree node: {node!r}")


def children(node: GameTree) -> list[GameTree]:
    """Immediate children of ``node``, aligned with ``available_moves``."""
    if isinstance(node, DecisionNode):
        return [t for _, t in node.edges]
    if isinstance(node, ChanceNode):
        return [t for _, (_, t) in node.dist]
    if isinstance(node, PayoffNode):
        return []
    raise TypeError(f"Not a game tree node: {node!r}")


def edges(node: GameTree) -> list[Edge]:
    """``(move, child)`` pairs leaving ``node``."""
    return list(zip(available_moves(node), children(node)))


def child_for_move(node: DecisionNode, move: Move) -> GameTree:
    """The child reached by playing ``move``; the first match wins."""
    for m, t in node.edges:
        if m == move:
            return t
    raise KeyError(move)


def bfs(root: GameTree) -> Iterator[GameTree]:
    """Nodes in breadth-first order. Each call starts over from ``root``."""
    level = [root]
    while level:
        yield from level
        level = [c for node in level for c in children(node)]


def dfs(root: GameTree) -> Iterator[GameTree]:
    """Nodes in depth-first pre-order, children left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))


def max_player(root: GameTree) -> int:
    """Highest player index that decides anywhere in a finite tree, 0 if none."""
    highest = 0
    for node in dfs(root):
        if isinstance(node, DecisionNode):
            highest = max(highest, node.player)
        elif not isinstance(node, (ChanceNode, PayoffNode)):
            raise TypeError(f"Not a game tree node: {node!r}")
    return highest


# =============================================================================
# Combinators
# =============================================================================


def combine(a: GameTree, b: GameTree) -> GameTree:
    """Merge two nodes of the same kind (the ``+`` operator).

    Raises:
        TypeMismatchError: If the node kinds differ, two decisions belong to
            different players, or two payoffs have different lengths
    """
    if isinstance(a, PayoffNode) and isinstance(b, PayoffNode):
        return PayoffNode(a.payoff + b.payoff, a.state)
    if isinstance(a, ChanceNode) and isinstance(b, ChanceNode):
        return ChanceNode(a.dist + b.dist, a.state)
    if isinstance(a, DecisionNode) and isinstance(b, DecisionNode):
        if a.player != b.player:
            raise TypeMismatchError(
                f"Cannot combine decisions of player {a.player} and player {b.player}"
            )
        return DecisionNode(a.player, tuple(a.edges) + tuple(b.edges), a.state)
    raise TypeMismatchError(
        f"Cannot combine {type(a).__name__} with {type(b).__name__}"
    )


def add_edge(node: GameTree, edge: Edge) -> DecisionNode:
    """Append ``edge`` to a decision node (the ``|`` operator).

    The new edge goes last, so moves stay in the order they were written.
    """
    if not isinstance(node, DecisionNode):
        raise TypeMismatchError(f"Can only add an edge to a decision node, not {type(node).__name__}")
    return DecisionNode(node.player, tuple(node.edges) + (_as_edge(edge),), node.state)


# =============================================================================
# Rendering
# =============================================================================


def format_move(move: Move) -> str:
    if isinstance(move, (str, Enum)):
        return str(move)
    return repr(move)


def format_payoff(values: ByPlayer) -> str:
    return "[" + ", ".join(f"{v:g}" if isinstance(v, float) else str(v) for v in values) + "]"


def _label(node: GameTree) -> str:
    if isinstance(node, DecisionNode):
        return f"Player {node.player}"
    if isinstance(node, ChanceNode):
        return "Chance"
    if isinstance(node, PayoffNode):
        return format_payoff(node.payoff)
    raise TypeError(f"Not a game tree node: {node!r}")


def _labelled_children(node: GameTree) -> list[tuple[str, GameTree]]:
    if isinstance(node, DecisionNode):
        return [(f"{format_move(m)} -> ", t) for m, t in node.edges]
    if isinstance(node, ChanceNode):
        return [(f"{w} * {format_move(m)} -> ", t) for w, (m, t) in node.dist]
    if isinstance(node, PayoffNode):
        return []
    raise TypeError(f"Not a game tree node: {node!r}")


def _draw(prefix: str, node: GameTree, depth: int | None) -> list[str]:
    lines = [prefix + _label(node)]
    kids = _labelled_children(node)
    if kids and depth == 0:
        lines.append("`- ...")
        return lines
    for i, (edge_label, child) in enumerate(kids):
        last = i == len(kids) - 1
        sub = _draw(edge_label, child, None if depth is None else depth - 1)
        lines.append(("`- " if last else "+- ") + sub[0])
        lines.extend(("   " if last else "|  ") + line for line in sub[1:])
    return lines


def render_tree(node: GameTree, max_depth: int | None = None) -> str:
    """Draw a tree one node per line.

    Subtrees below ``max_depth`` are elided as ``...``.

    Example:
        Player 1
        +- Send Missiles to Cuba -> Player 2
        |  `- Do Nothing -> [1, 0]
        `- Do Nothing -> [-1, 1]
    """
    return "\n".join(_draw("", node, max_depth)) + "\n"
