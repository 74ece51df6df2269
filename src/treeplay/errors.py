"""Error kinds raised by treeplay.

Construction errors (MalformedTreeError, TypeMismatchError) surface while a
tree or game definition is being built. Execution errors (IllegalMoveError,
IndexOutOfRangeError, NotADecisionNodeError, UnsupportedGameTypeError) abort
the current iteration and propagate to whoever drives the run.

The kinds also subclass the closest built-in exception so callers that only
know about ValueError/TypeError/IndexError keep working.
"""

from __future__ import annotations

from typing import Any, Sequence


class TreeplayError(Exception):
    """Base class for all treeplay errors."""


class MalformedTreeError(TreeplayError, ValueError):
    """A tree or game definition cannot be built as given."""


class TypeMismatchError(TreeplayError, TypeError):
    """A tree combinator was applied to incompatible node kinds."""


class IllegalMoveError(TreeplayError, ValueError):
    """A strategy returned a move that is not available at its decision node.

    Attributes:
        player: 1-based index of the deciding player
        move: The move the strategy returned
        legal: The moves that were available
    """

    def __init__(self, player: int, move: Any, legal: Sequence[Any]) -> None:
        self.player = player
        self.move = move
        self.legal = list(legal)
        super().__init__(
            f"Player {player} played illegal move {move!r}; available moves: {self.legal!r}"
        )


class NotADecisionNodeError(TreeplayError):
    """A player-relative query was made away from a decision node."""


class UnsupportedGameTypeError(TreeplayError):
    """An algorithm was applied to a game shape it does not handle."""


class IndexOutOfRangeError(TreeplayError, IndexError):
    """A history or player query asked for an entry that does not exist."""
