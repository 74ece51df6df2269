"""Tests for history offsets and summaries.

Each ByGame accessor is checked on its own because the offset conventions
are easy to invert by accident. Entries are listed most recent first.
"""

import pytest

from treeplay.engine.history import (
    ByGame,
    ChanceEvent,
    DecisionEvent,
    PayoffEvent,
    player_entry,
    summarize,
)
from treeplay.errors import IndexOutOfRangeError
from treeplay.models.payoffs import ByPlayer, make_payoff

P1, P2, P3 = "P1", "P2", "P3"


@pytest.fixture
def games():
    """Three games; P3 is the most recent."""
    return ByGame([P3, P2, P1])


class TestByGameOffsets:
    """Tests for each offset convention."""

    def test_every_is_most_recent_first(self, games) -> None:
        assert games.every() == [P3, P2, P1]

    def test_prev(self, games) -> None:
        assert games.prev() == P3

    def test_first(self, games) -> None:
        assert games.first() == P1

    def test_gamen_counts_from_game_one(self, games) -> None:
        assert games.gamen(1) == P1
        assert games.gamen(2) == P2
        assert games.gamen(3) == P3

    def test_prevn(self, games) -> None:
        assert games.prevn(2) == [P3, P2]
        assert games.prevn(0) == []
        assert games.prevn(10) == [P3, P2, P1]

    def test_firstn_keeps_stored_order(self, games) -> None:
        assert games.firstn(2) == [P2, P1]
        assert games.firstn(0) == []
        assert games.firstn(10) == [P3, P2, P1]

    @pytest.mark.parametrize("i", [0, 4, -1])
    def test_gamen_out_of_range(self, games, i) -> None:
        with pytest.raises(IndexOutOfRangeError):
            games.gamen(i)

    def test_empty_history(self) -> None:
        empty = ByGame([])
        with pytest.raises(IndexOutOfRangeError):
            empty.prev()
        with pytest.raises(IndexOutOfRangeError):
            empty.first()
        assert empty.every() == []
        assert empty.prevn(3) == []

    def test_negative_counts(self, games) -> None:
        with pytest.raises(IndexOutOfRangeError):
            games.prevn(-1)
        with pytest.raises(IndexOutOfRangeError):
            games.firstn(-1)

    def test_index_out_of_range_is_an_index_error(self) -> None:
        with pytest.raises(IndexError):
            ByGame([]).prev()

    def test_map(self, games) -> None:
        assert games.map(str.lower).every() == ["p3", "p2", "p1"]


class TestSummaries:
    """Tests for summarize and player_entry."""

    def test_summarize_groups_moves_by_player(self) -> None:
        # Most recent first, as stored.
        transcript = (
            DecisionEvent(2, "y2"),
            ChanceEvent(1),
            DecisionEvent(1, "x2"),
            DecisionEvent(2, "y1"),
            DecisionEvent(1, "x1"),
        )
        summary = summarize(2, transcript, make_payoff([1, 2]))
        assert summary.moves == ByPlayer([("x2", "x1"), ("y2", "y1")])
        assert summary.payoff == make_payoff([1, 2])

    def test_summarize_player_without_moves(self) -> None:
        summary = summarize(2, (DecisionEvent(1, "a"),), make_payoff([0, 0]))
        assert summary.moves[1] == ()

    def test_summarize_ignores_payoff_event(self) -> None:
        summary = summarize(1, (PayoffEvent(make_payoff([1])), DecisionEvent(1, "a")), make_payoff([1]))
        assert summary.moves == ByPlayer([("a",)])

    def test_player_entry(self) -> None:
        assert player_entry(["a", "b"], 1) == "b"
        with pytest.raises(IndexOutOfRangeError):
            player_entry(["a", "b"], 2)
        with pytest.raises(IndexOutOfRangeError):
            player_entry(["a", "b"], -1)
