"""Shared pieces of the example games."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from treeplay.engine.context import Player
from treeplay.models.game import GameDefinition


class MoveName(Enum):
    """Enum of moves that prints as its value."""

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ExampleGame:
    """A named example game and the players written for it.

    Attributes:
        name: Registry key, e.g. "prisoners-dilemma"
        description: One-line description
        build: Zero-argument function returning the game definition
        players: Players that know how to play the game
    """

    name: str
    description: str
    build: Callable[[], GameDefinition]
    players: tuple[Player, ...] = field(default_factory=tuple)

    def get_player(self, name: str) -> Player:
        """Look up a player by name (case-insensitive).

        Raises:
            ValueError: If no player has that name
        """
        for p in self.players:
            if p.name.lower() == name.lower():
                return p
        available = ", ".join(p.name for p in self.players)
        raise ValueError(f"Unknown player {name!r} for {self.name}. Available: {available}")
