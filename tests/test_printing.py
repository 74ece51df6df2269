"""Tests for text formatting of runs."""

from treeplay.cli.printing import (
    format_location,
    format_score,
    format_summaries,
    format_summary_of_game,
    format_transcript,
    format_transcript_of_game,
)
from treeplay.engine.context import Player
from treeplay.engine.runner import GameRunner, run_iterations
from treeplay.examples.dice import die, total
from treeplay.examples.prisoners_dilemma import PD, prisoners_dilemma
from treeplay.models.game import from_extensive_form
from treeplay.models.tree import available_moves, decision, payoff
from treeplay.strategies.common import periodic, pure


def pd_run(iterations=2):
    players = [
        Player("Mum", pure(PD.COOPERATE)),
        Player("Alternator", periodic([PD.COOPERATE, PD.DEFECT])),
    ]
    return run_iterations(prisoners_dilemma(), players, iterations)


class TestTranscripts:
    """Tests for transcript formatting."""

    def test_transcript_of_game(self) -> None:
        ctx = pd_run()
        assert format_transcript_of_game(ctx, 2) == (
            "Game 2:\n"
            "  Mum's move: Cooperate\n"
            "  Alternator's move: Defect\n"
            "  Payoff: [0, 3]\n"
        )

    def test_transcript_lists_games_in_order(self) -> None:
        text = format_transcript(pd_run())
        assert text.index("Game 1:") < text.index("Game 2:")
        assert text.count("Payoff:") == 2

    def test_chance_events(self, scripted_random) -> None:
        runner = GameRunner(die(), [total], scripted_random(weighted=[3]))
        ctx = runner.run_iterations(1)
        assert format_transcript(ctx) == "Game 1:\n  Chance: 4\n  Payoff: [4]\n"


class TestSummaries:
    """Tests for summary formatting."""

    def test_summary_of_game(self) -> None:
        ctx = pd_run()
        assert format_summary_of_game(ctx, 1) == (
            "Summary of Game 1:\n"
            "  Mum moves: [Cooperate]\n"
            "  Alternator moves: [Cooperate]\n"
            "  Score: [2, 2]\n"
        )

    def test_moves_listed_in_play_order(self) -> None:
        tree = decision(1, [("a", decision(1, [("b", payoff([1]))]))])
        first = Player("p", lambda ctx: available_moves(ctx.location)[0])
        ctx = run_iterations(from_extensive_form(tree), [first], 1)
        assert "  p moves: [a, b]\n" in format_summaries(ctx)

    def test_empty_history(self) -> None:
        ctx = pd_run(0)
        assert format_summaries(ctx) == ""
        assert format_transcript(ctx) == ""


class TestScoreAndLocation:
    """Tests for format_score and format_location."""

    def test_score(self) -> None:
        assert format_score(pd_run()) == "Score:\n  Mum: 2\n  Alternator: 5\n"

    def test_location_imperfect(self) -> None:
        ctx = pd_run()
        text = format_location(ctx)
        # Player 1's level of a matrix game holds a single node.
        assert text.startswith("Player 1\n")

    def test_location_perfect(self) -> None:
        tree = decision(1, [("go", payoff([1]))])
        runner = GameRunner(from_extensive_form(tree), [Player("p", pure("go"))])
        assert format_location(runner.context) == "Player 1\n`- go -> [1]\n"
