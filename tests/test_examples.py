"""Tests for the example games and their players.

Tests cover:
1. Registry lookup
2. Prisoner's Dilemma - payoffs and classic players
3. Rock-Paper-Scissors - zero-sum payoffs, Huckleberry
4. Cuban Missile Crisis - tree shape and minimax play
5. Dice - chance-only play
6. Tic-Tac-Toe - rules and minimax
"""

import pytest

from treeplay.engine.context import Player
from treeplay.engine.runner import GameRunner, run_iterations
from treeplay.examples import EXAMPLE_GAMES, get_example, list_examples
from treeplay.examples.cuban_missile_crisis import crisis_tree, cuban_missile_crisis, kennedy, khrushchev
from treeplay.examples.dice import die, total
from treeplay.examples.prisoners_dilemma import (
    PD,
    fink,
    grim_trigger,
    mum,
    pavlov,
    prisoners_dilemma,
    tit_for_tat,
    tit_for_two_tats,
)
from treeplay.examples.rock_paper_scissors import RPS, huckleberry, rock_paper_scissors, rotate, stalone
from treeplay.examples.tic_tac_toe import (
    EMPTY_BOARD,
    Square,
    board_payoff,
    legal_moves,
    render_board,
    tic_tac_toe,
    whose_turn,
)
from treeplay.models.payoffs import make_payoff
from treeplay.models.tree import PayoffNode, available_moves, dfs
from treeplay.strategies.common import periodic, pure
from treeplay.strategies.minimax import best_move
from treeplay.strategies.query import score

X, O, E = Square.X, Square.O, Square.EMPTY


def moves_of(ctx, seat):
    return [s.moves[seat][0] for s in reversed(ctx.summaries.every())]


class TestRegistry:
    """Tests for the example registry."""

    def test_lists_all_games(self) -> None:
        assert set(list_examples()) == {
            "prisoners-dilemma",
            "rock-paper-scissors",
            "cuban-missile-crisis",
            "dice",
            "tic-tac-toe",
        }

    def test_unknown_game(self) -> None:
        with pytest.raises(ValueError, match="Unknown game"):
            get_example("chess")

    def test_get_player_is_case_insensitive(self) -> None:
        assert EXAMPLE_GAMES["prisoners-dilemma"].get_player("tit-for-tat") is tit_for_tat

    def test_unknown_player(self) -> None:
        with pytest.raises(ValueError, match="Unknown player"):
            EXAMPLE_GAMES["dice"].get_player("Nobody")

    def test_player_names_unique(self) -> None:
        for example in EXAMPLE_GAMES.values():
            names = [p.name for p in example.players]
            assert len(names) == len(set(names))


class TestPrisonersDilemma:
    """Tests for the Prisoner's Dilemma players."""

    def test_moves_print_as_names(self) -> None:
        assert str(PD.COOPERATE) == "Cooperate"

    def test_fink_vs_mum(self) -> None:
        ctx = run_iterations(prisoners_dilemma(), [fink, mum], 3)
        assert score(ctx) == make_payoff([9, 0])

    def test_grim_trigger_never_forgives(self) -> None:
        once = Player("once", periodic([PD.DEFECT] + [PD.COOPERATE] * 9))
        ctx = run_iterations(prisoners_dilemma(), [grim_trigger, once], 5)
        assert moves_of(ctx, 0) == [PD.COOPERATE] + [PD.DEFECT] * 4

    def test_tit_for_two_tats(self) -> None:
        opp = Player("opp", periodic([PD.DEFECT, PD.DEFECT, PD.COOPERATE]))
        ctx = run_iterations(prisoners_dilemma(), [tit_for_two_tats, opp], 4)
        assert moves_of(ctx, 0) == [PD.COOPERATE, PD.COOPERATE, PD.DEFECT, PD.COOPERATE]

    def test_pavlov_win_stay_lose_shift(self, scripted_random) -> None:
        # First game random (scripted to Cooperate), then win-stay/lose-shift.
        opp = Player("opp", periodic([PD.COOPERATE, PD.DEFECT, PD.DEFECT]))
        runner = GameRunner(prisoners_dilemma(), [pavlov, opp], scripted_random(uniform=[0]))
        ctx = runner.run_iterations(4)
        # C vs C pays 2: stay. C vs D pays 0: shift. D vs D pays 1: shift.
        assert moves_of(ctx, 0) == [PD.COOPERATE, PD.COOPERATE, PD.DEFECT, PD.COOPERATE]

    def test_all_players_complete_a_round(self, seeded_random) -> None:
        players = EXAMPLE_GAMES["prisoners-dilemma"].players
        for p in players:
            runner = GameRunner(prisoners_dilemma(), [p, tit_for_tat], seeded_random)
            assert runner.run_iterations(5).num_games == 5


class TestRockPaperScissors:
    """Tests for Rock-Paper-Scissors."""

    def test_zero_sum(self) -> None:
        leaves = [n.payoff for n in dfs(rock_paper_scissors().tree) if isinstance(n, PayoffNode)]
        assert len(leaves) == 9
        assert all(sum(p) == 0 for p in leaves)

    def test_paper_beats_rock(self) -> None:
        paper = Player("paper", pure(RPS.PAPER))
        ctx = run_iterations(rock_paper_scissors(), [paper, stalone], 2)
        assert score(ctx) == make_payoff([2, -2])

    def test_huckleberry_counters_rock(self) -> None:
        ctx = run_iterations(rock_paper_scissors(), [huckleberry, stalone], 3)
        assert moves_of(ctx, 0)[1:] == [RPS.PAPER, RPS.PAPER]

    def test_rotate(self) -> None:
        ctx = run_iterations(rock_paper_scissors(), [rotate, stalone], 3)
        assert moves_of(ctx, 0) == [RPS.ROCK, RPS.PAPER, RPS.SCISSORS]


class TestCubanMissileCrisis:
    """Tests for the Cuban Missile Crisis tree."""

    def test_shape(self) -> None:
        tree = crisis_tree()
        assert available_moves(tree) == ["Send Missiles to Cuba", "Do Nothing"]
        response = tree.edges[0][1]
        assert available_moves(response) == ["Do Nothing", "Blockade", "Invade"]

    def test_combined_payoffs(self) -> None:
        response = crisis_tree().edges[0][1]
        backing_down = response.edges[0][1]
        assert backing_down.payoff == make_payoff([1, 0])
        pull_out = response.edges[2][1].edges[0][1]
        assert pull_out.payoff == make_payoff([-1, 2])

    def test_player_count_inferred(self) -> None:
        assert cuban_missile_crisis().num_players == 2

    def test_minimax_play(self) -> None:
        ctx = run_iterations(cuban_missile_crisis(), [khrushchev, kennedy], 1)
        summary = ctx.summaries.prev()
        assert summary.moves[0] == ("Send Missiles to Cuba",)
        assert summary.moves[1] == ("Do Nothing",)
        assert summary.payoff == make_payoff([1, 0])


class TestDice:
    """Tests for dice rolling."""

    def test_one_player_chance_only(self) -> None:
        game = die()
        assert game.num_players == 1
        assert available_moves(game.tree) == [1, 2, 3, 4, 5, 6]

    def test_scripted_rolls(self, scripted_random) -> None:
        runner = GameRunner(die(), [total], scripted_random(weighted=[0, 5, 2]))
        ctx = runner.run_iterations(3)
        assert score(ctx) == make_payoff([1 + 6 + 3])

    def test_seeded_rolls_in_range(self, seeded_random) -> None:
        runner = GameRunner(die(), [total], seeded_random)
        ctx = runner.run_iterations(30)
        assert 30 <= score(ctx)[0] <= 180


class TestTicTacToe:
    """Tests for Tic-Tac-Toe rules and search."""

    def test_x_moves_first(self) -> None:
        assert whose_turn(EMPTY_BOARD) == 1
        assert whose_turn((X,) + (E,) * 8) == 2

    def test_win_detection(self) -> None:
        assert board_payoff((X, X, X, O, O, E, E, E, E)) == [1, -1]
        assert board_payoff((O, X, X, O, X, E, O, E, E)) == [-1, 1]
        assert board_payoff((X, O, E, E, X, O, E, E, X)) == [1, -1]
        assert board_payoff(EMPTY_BOARD) == [0, 0]

    def test_no_moves_after_a_win(self) -> None:
        assert legal_moves((X, X, X, O, O, E, E, E, E), 2) == []

    def test_root_offers_nine_moves(self) -> None:
        game = tic_tac_toe()
        assert len(available_moves(game.tree)) == 9
        assert game.tree.state == EMPTY_BOARD

    def test_minimax_takes_the_win(self) -> None:
        board = (X, X, E, O, O, E, E, E, E)
        game = tic_tac_toe(board)
        assert best_move(game, game.tree, 1) == (2, X)

    def test_minimax_blocks(self) -> None:
        board = (X, E, E, O, O, E, X, E, E)
        game = tic_tac_toe(board)
        assert best_move(game, game.tree, 1) == (5, X)

    def test_render_board(self) -> None:
        text = render_board((X, O, E, E, X, E, E, E, O))
        assert text.splitlines()[0] == " X | O |  "
        assert text.splitlines()[1] == "---+---+---"
