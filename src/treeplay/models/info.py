"""Information groups.

An information group says what the player acting at a location can see:
the exact node (Perfect), a set of nodes it cannot tell apart (Imperfect),
or nothing at all (NoInfo). Groups are computed on demand by a game's
partition function and are never stored on the tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

from treeplay.models.tree import GameTree, render_tree

if TYPE_CHECKING:
    from treeplay.models.game import GameDefinition


@dataclass(frozen=True)
class Perfect:
    """The acting player knows exactly where it is."""

    node: GameTree


@dataclass(frozen=True)
class Imperfect:
    """The acting player could be at any of ``nodes``."""

    nodes: tuple[GameTree, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))


@dataclass(frozen=True)
class NoInfo:
    """The location cannot be inspected."""


InfoGroup = Union[Perfect, Imperfect, NoInfo]
Partition = Callable[[GameTree], InfoGroup]


def perfect(node: GameTree) -> InfoGroup:
    return Perfect(node)


def simultaneous(node: GameTree) -> InfoGroup:
    """Partition for simultaneous-move games: no location is inspectable."""
    return NoInfo()


def classify(game: "GameDefinition", node: GameTree) -> InfoGroup:
    """Information group of ``node`` under ``game``'s partition."""
    return game.info(node)


def render_info(group: InfoGroup) -> str:
    if isinstance(group, Perfect):
        return render_tree(group.node)
    if isinstance(group, Imperfect):
        return "*** OR ***\n".join(render_tree(n) for n in group.nodes)
    if isinstance(group, NoInfo):
        return "Cannot show this location in the game tree.\n"
    raise TypeError(f"Not an information group: {group!r}")
