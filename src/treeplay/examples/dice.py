"""Rolling a fair die: a one-player game with a single chance node.

The player never decides; the score after ``n`` games is the total rolled.
"""

from __future__ import annotations

from treeplay.engine.context import Player
from treeplay.models.game import GameDefinition
from treeplay.models.info import perfect
from treeplay.models.payoffs import uniform
from treeplay.models.tree import ChanceNode, payoff
from treeplay.strategies.common import pure

FACES = range(1, 7)


def die() -> GameDefinition:
    tree = ChanceNode(uniform((face, payoff([face])) for face in FACES))
    return GameDefinition(1, tree, perfect)


total = Player("Total", pure(None))

DICE_PLAYERS: tuple[Player, ...] = (total,)
