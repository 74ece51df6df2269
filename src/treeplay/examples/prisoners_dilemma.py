"""The iterated Prisoner's Dilemma and its classic players.

Payoffs (row player first):

                Cooperate   Defect
    Cooperate     2, 2       0, 3
    Defect        3, 0       1, 1
"""

from __future__ import annotations

from treeplay.engine.context import ExecutionContext, Player
from treeplay.examples.base import MoveName
from treeplay.models.game import GameDefinition, from_matrix
from treeplay.strategies.common import (
    initially_then,
    mixed,
    periodic,
    pure,
    random_move,
)
from treeplay.strategies.query import each, every, his, move, my, payoff, prev, prevn, score


class PD(MoveName):
    COOPERATE = "Cooperate"
    DEFECT = "Defect"


def prisoners_dilemma() -> GameDefinition:
    return from_matrix(
        [PD.COOPERATE, PD.DEFECT],
        [[2, 2], [0, 3], [3, 0], [1, 1]],
    )


# =============================================================================
# Strategies
# =============================================================================


def _tit_for_two_tats(ctx: ExecutionContext) -> PD:
    # Only retaliate after two defections in a row.
    recent = each(his, prevn(2, move))(ctx)
    return PD.DEFECT if recent == [PD.DEFECT, PD.DEFECT] else PD.COOPERATE


def _grim_trigger(ctx: ExecutionContext) -> PD:
    if PD.DEFECT in each(his, every(move))(ctx):
        return PD.DEFECT
    return PD.COOPERATE


def _pavlov(ctx: ExecutionContext) -> PD:
    # Win-stay, lose-shift: repeat the last move if it paid well.
    last = my(prev(move))(ctx)
    if my(prev(payoff))(ctx) > 1:
        return last
    return PD.DEFECT if last == PD.COOPERATE else PD.COOPERATE


def _preserver(ctx: ExecutionContext) -> PD:
    # Random until ahead, then defect to keep the lead.
    if my(score)(ctx) > his(score)(ctx):
        return PD.DEFECT
    return random_move(ctx)


fink = Player("Fink", pure(PD.DEFECT))
mum = Player("Mum", pure(PD.COOPERATE))
alternator = Player("Alternator", periodic([PD.COOPERATE, PD.DEFECT]))
ccd = Player("(CCD)*", periodic([PD.COOPERATE, PD.COOPERATE, PD.DEFECT]))
randy = Player("Randy", random_move)
russian_roulette = Player("Russian Roulette", mixed([(5, PD.COOPERATE), (1, PD.DEFECT)]))
tit_for_tat = Player("Tit-for-Tat", initially_then(pure(PD.COOPERATE), his(prev(move))))
suspicious_tit_for_tat = Player(
    "Suspicious Tit-for-Tat", initially_then(pure(PD.DEFECT), his(prev(move)))
)
tit_for_two_tats = Player("Tit-for-Two-Tats", _tit_for_two_tats)
grim_trigger = Player("Grim Trigger", _grim_trigger)
pavlov = Player("Pavlov", initially_then(random_move, _pavlov))
preserver = Player("Preserver", initially_then(random_move, _preserver))

PD_PLAYERS: tuple[Player, ...] = (
    fink,
    mum,
    alternator,
    ccd,
    randy,
    russian_roulette,
    tit_for_tat,
    suspicious_tit_for_tat,
    tit_for_two_tats,
    grim_trigger,
    pavlov,
    preserver,
)
