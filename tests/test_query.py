"""Tests for the strategy query API.

Tests cover:
1. Base queries - num_games, moves, move, payoff, score, info_group
2. Player selectors - my, his/her, our, their, playern
3. Game selectors - every, first, firstn, prev, prevn, gamen
4. each and Query composition
5. Out-of-range and not-a-decision errors
"""

import pytest

from treeplay.engine.context import Player
from treeplay.engine.runner import GameRunner
from treeplay.errors import IndexOutOfRangeError, NotADecisionNodeError
from treeplay.models.info import Imperfect
from treeplay.models.payoffs import ByPlayer, make_payoff
from treeplay.models.tree import decision, payoff as payoff_node
from treeplay.models.game import from_extensive_form
from treeplay.strategies.query import (
    Query,
    constant,
    each,
    every,
    first,
    firstn,
    gamen,
    her,
    his,
    info_group,
    is_first_game,
    location,
    move,
    moves,
    my,
    my_index,
    num_games,
    our,
    payoff,
    playern,
    players,
    prev,
    prevn,
    score,
    their,
)

P1 = make_payoff([2, 2])
P2 = make_payoff([0, 3])
P3 = make_payoff([1, 1])


def scripted(name, script):
    """Player whose k-th decision is script[k]."""
    it = iter(script)
    return Player(name, lambda ctx: next(it))


@pytest.fixture
def played(pd_game):
    """Runner after three PD games with payoffs P1, P2, P3 (P3 most recent)."""
    runner = GameRunner(pd_game, [scripted("row", "CCD"), scripted("col", "CDD")])
    runner.run_iterations(3)
    return runner


@pytest.fixture
def ctx(played):
    """Context positioned at player 1's decision of game 4."""
    return played.context


@pytest.fixture
def ctx_p2(pd_game):
    """Context positioned at player 2's decision of game 4."""
    runner = GameRunner(pd_game, [scripted("row", "CCDC"), scripted("col", "CDD")])
    runner.run_iterations(3)
    runner.step()
    return runner.context


# =============================================================================
# Base queries
# =============================================================================


class TestBaseQueries:
    """Tests for the base queries."""

    def test_counts(self, ctx) -> None:
        assert num_games(ctx) == 3
        assert is_first_game(ctx) is False
        assert [p.name for p in players(ctx)] == ["row", "col"]

    def test_is_first_game_before_any_game(self, pd_game) -> None:
        runner = GameRunner(pd_game, [scripted("a", "C"), scripted("b", "C")])
        assert is_first_game(runner.context) is True

    def test_payoff_by_game(self, ctx) -> None:
        assert every(payoff)(ctx) == [P3, P2, P1]

    def test_moves_by_game(self, ctx) -> None:
        assert prev(moves)(ctx) == ByPlayer([("D",), ("D",)])
        assert first(move)(ctx) == ByPlayer(["C", "C"])

    def test_score_sums_payoffs(self, ctx) -> None:
        assert score(ctx) == make_payoff([3, 6])

    def test_score_before_any_game(self, pd_game) -> None:
        runner = GameRunner(pd_game, [scripted("a", "C"), scripted("b", "C")])
        assert score(runner.context) == make_payoff([0, 0])

    def test_location_and_info_group(self, ctx, pd_game) -> None:
        assert location(ctx) is pd_game.tree
        assert isinstance(info_group(ctx), Imperfect)

    def test_my_index(self, ctx, ctx_p2) -> None:
        assert my_index(ctx) == 0
        assert my_index(ctx_p2) == 1


# =============================================================================
# Game selectors
# =============================================================================


class TestGameSelectors:
    """Offsets after payoffs P1, P2, P3 (P3 most recent)."""

    def test_prev(self, ctx) -> None:
        assert prev(payoff)(ctx) == P3

    def test_first(self, ctx) -> None:
        assert first(payoff)(ctx) == P1

    def test_gamen(self, ctx) -> None:
        assert gamen(2, payoff)(ctx) == P2
        assert gamen(1, payoff)(ctx) == P1
        assert gamen(3, payoff)(ctx) == P3

    def test_prevn(self, ctx) -> None:
        assert prevn(2, payoff)(ctx) == [P3, P2]

    def test_firstn(self, ctx) -> None:
        assert firstn(2, payoff)(ctx) == [P2, P1]

    def test_out_of_range(self, ctx) -> None:
        with pytest.raises(IndexOutOfRangeError):
            gamen(4, payoff)(ctx)
        with pytest.raises(IndexOutOfRangeError):
            gamen(0, payoff)(ctx)

    def test_prev_before_any_game(self, pd_game) -> None:
        runner = GameRunner(pd_game, [scripted("a", "C"), scripted("b", "C")])
        with pytest.raises(IndexOutOfRangeError):
            prev(payoff)(runner.context)
        with pytest.raises(IndexOutOfRangeError):
            first(move)(runner.context)


# =============================================================================
# Player selectors
# =============================================================================


class TestPlayerSelectors:
    """Tests for my/his/our/their/playern."""

    def test_my_and_his_for_player_one(self, ctx) -> None:
        assert my(prev(payoff))(ctx) == 1
        assert my(score)(ctx) == 3
        assert his(score)(ctx) == 6
        assert his(prev(move))(ctx) == "D"

    def test_my_and_his_for_player_two(self, ctx_p2) -> None:
        assert my(score)(ctx_p2) == 6
        assert his(score)(ctx_p2) == 3
        assert her(gamen(2, move))(ctx_p2) == "C"

    def test_our_and_their(self, ctx) -> None:
        assert our(score)(ctx) == [3, 6]
        assert their(score)(ctx) == [6]

    def test_playern(self, ctx) -> None:
        assert playern(2, gamen(2, payoff))(ctx) == 3
        with pytest.raises(IndexOutOfRangeError):
            playern(3, score)(ctx)
        with pytest.raises(IndexOutOfRangeError):
            playern(0, score)(ctx)

    def test_his_wraps_around_for_three_players(self) -> None:
        tree = decision(1, [("a", decision(2, [("b", decision(3, [("c", payoff_node([1, 2, 3]))]))]))])
        game = from_extensive_form(tree)
        runner = GameRunner(game, [scripted(n, m * 2) for n, m in zip("xyz", "abc")])
        runner.run_game()
        for _ in range(2):
            runner.step()
        ctx = runner.context
        assert my_index(ctx) == 2
        assert his(score)(ctx) == 1
        assert their(score)(ctx) == [1, 2]

    def test_player_selectors_need_a_decision(self) -> None:
        game = from_extensive_form(payoff_node([1, 2]), num_players=2)
        runner = GameRunner(game, [scripted("a", ""), scripted("b", "")])
        with pytest.raises(NotADecisionNodeError):
            my(score)(runner.context)
        with pytest.raises(NotADecisionNodeError):
            my_index(runner.context)


# =============================================================================
# Composition
# =============================================================================


class TestComposition:
    """Tests for each, constant and Query.map."""

    def test_each_his_every_move(self, ctx) -> None:
        assert each(his, every(move))(ctx) == ["D", "D", "C"]

    def test_each_my_prevn(self, ctx) -> None:
        assert each(my, prevn(2, payoff))(ctx) == [1, 0]

    def test_constant(self, ctx) -> None:
        assert constant(5)(ctx) == 5

    def test_map(self, ctx) -> None:
        assert num_games.map(lambda n: n * 10)(ctx) == 30

    def test_plain_callables_accepted(self, ctx) -> None:
        assert my(lambda c: ["mine", "yours"])(ctx) == "mine"

    def test_repr_names_the_query(self) -> None:
        assert repr(his(prev(move))) == "Query(his(prev(move)))"
        assert isinstance(prev(move), Query)
