"""Text formatting of locations, transcripts, summaries and scores.

All functions are pure: they read an ExecutionContext and return a string.

Transcript layout:

    Game 1:
      Tit-for-Tat's move: Cooperate
      Pavlov's move: Defect
      Payoff: [0, 3]

Summary layout:

    Summary of Game 1:
      Tit-for-Tat moves: [Cooperate]
      Pavlov moves: [Defect]
      Score: [0, 3]
"""

from __future__ import annotations

from typing import Any, Sequence

from treeplay.engine.context import ExecutionContext, Player
from treeplay.engine.history import ChanceEvent, DecisionEvent, Event, PayoffEvent
from treeplay.models.info import render_info
from treeplay.models.tree import format_move, format_payoff
from treeplay.strategies.query import score


def format_moves(ms: Sequence[Any]) -> str:
    return "[" + ", ".join(format_move(m) for m in ms) + "]"


def format_event(players: Sequence[Player], event: Event) -> str:
    if isinstance(event, DecisionEvent):
        return f"  {players[event.player - 1]}'s move: {format_move(event.move)}"
    if isinstance(event, ChanceEvent):
        return f"  Chance: {event.index}"
    if isinstance(event, PayoffEvent):
        return f"  Payoff: {format_payoff(event.payoff)}"
    raise TypeError(f"Not a transcript event: {event!r}")


def format_location(ctx: ExecutionContext) -> str:
    """What the current player can see of the current location."""
    return render_info(ctx.info_group)


def format_transcript_of_game(ctx: ExecutionContext, n: int) -> str:
    """Events of game ``n`` (counting from 1) in the order they happened."""
    transcript = ctx.transcripts.gamen(n)
    lines = [f"Game {n}:"]
    lines.extend(format_event(ctx.players, e) for e in reversed(transcript))
    return "\n".join(lines) + "\n"


def format_transcript(ctx: ExecutionContext) -> str:
    return "".join(format_transcript_of_game(ctx, n) for n in range(1, ctx.num_games + 1))


def format_summary_of_game(ctx: ExecutionContext, n: int) -> str:
    """Moves of every player and the payoff of game ``n``."""
    summary = ctx.summaries.gamen(n)
    lines = [f"Summary of Game {n}:"]
    for p, ms in zip(ctx.players, summary.moves):
        lines.append(f"  {p} moves: {format_moves(list(reversed(ms)))}")
    lines.append(f"  Score: {format_payoff(summary.payoff)}")
    return "\n".join(lines) + "\n"


def format_summaries(ctx: ExecutionContext) -> str:
    return "".join(format_summary_of_game(ctx, n) for n in range(1, ctx.num_games + 1))


def score_string(players: Sequence[Player], values: Sequence[float]) -> str:
    return "".join(f"  {p}: {v:g}\n" for p, v in zip(players, values))


def format_score(ctx: ExecutionContext) -> str:
    """Total score of every player over the finished games."""
    return "Score:\n" + score_string(ctx.players, score(ctx))
