"""Rock-Paper-Scissors as a zero-sum matrix game."""

from __future__ import annotations

from treeplay.engine.context import ExecutionContext, Player
from treeplay.examples.base import MoveName
from treeplay.models.game import GameDefinition, zero_sum
from treeplay.strategies.common import periodic, pure, random_move
from treeplay.strategies.query import each, every, his, move


class RPS(MoveName):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"


# Player 1's payoff, row-major: row is player 1's move.
RPS_PAYOFFS = [
    0, -1, 1,
    1, 0, -1,
    -1, 1, 0,
]


def rock_paper_scissors() -> GameDefinition:
    return zero_sum(list(RPS), RPS_PAYOFFS)


def _beat_most_frequent(ctx: ExecutionContext) -> RPS:
    """Play what beats the opponent's most frequent move so far."""
    history = each(his, every(move))(ctx)
    rock = history.count(RPS.ROCK)
    paper = history.count(RPS.PAPER)
    scissors = history.count(RPS.SCISSORS)
    most = max(rock, paper, scissors)
    if most == rock:
        return RPS.PAPER
    if most == paper:
        return RPS.SCISSORS
    return RPS.ROCK


stalone = Player("Stalone", pure(RPS.ROCK))
rotate = Player("RPS", periodic([RPS.ROCK, RPS.PAPER, RPS.SCISSORS]))
randy = Player("Randy", random_move)
huckleberry = Player("Huckleberry", _beat_most_frequent)

RPS_PLAYERS: tuple[Player, ...] = (stalone, rotate, randy, huckleberry)
