"""Command line for playing the example games.

Usage:
    treeplay list
    treeplay tree cuban-missile-crisis
    treeplay play prisoners-dilemma "Tit-for-Tat" Pavlov -n 10 --transcript
    treeplay tournament prisoners-dilemma -n 100 --seed 7

The log level comes from --log-level, or TREEPLAY_LOG_LEVEL when not given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from treeplay.cli.printing import format_score, format_summaries, format_transcript
from treeplay.config import (
    ExecutionConfig,
    LoggingConfig,
    TournamentConfig,
    get_default_iterations,
    get_default_seed,
    get_log_level,
)
from treeplay.engine.runner import GameRunner
from treeplay.engine.tournament import format_results, round_robin
from treeplay.errors import TreeplayError
from treeplay.examples import EXAMPLE_GAMES, get_example
from treeplay.models.tree import render_tree

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treeplay",
        description="Play abstract games between pluggable strategies",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: TREEPLAY_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List example games and their players")

    tree = subparsers.add_parser("tree", help="Print the game tree of an example game")
    tree.add_argument("game", help="Example game name")
    tree.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Only draw this many levels (default: whole tree)",
    )

    play = subparsers.add_parser("play", help="Play repeated games between players")
    play.add_argument("game", help="Example game name")
    play.add_argument("players", nargs="+", help="Player names, player 1 first")
    play.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=None,
        help="Number of games (default: TREEPLAY_ITERATIONS or 1)",
    )
    play.add_argument("--transcript", action="store_true", help="Print every game's transcript")
    play.add_argument("--summaries", action="store_true", help="Print every game's summary")
    play.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")

    tournament = subparsers.add_parser("tournament", help="Round-robin between all players of a game")
    tournament.add_argument("game", help="Example game name (two-player)")
    tournament.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=100,
        help="Games per pairing (default: 100)",
    )
    tournament.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    tournament.add_argument("--self-play", action="store_true", help="Also pair each player with itself")
    tournament.add_argument(
        "--players",
        type=str,
        default=None,
        help="Comma-separated list of players (default: all)",
    )
    return parser


def configure_logging(level: Optional[str]) -> None:
    config = LoggingConfig(level=level or get_log_level())
    logging.basicConfig(
        level=getattr(logging, config.level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_list(args: argparse.Namespace) -> str:
    lines = []
    for example in EXAMPLE_GAMES.values():
        lines.append(f"{example.name}: {example.description}")
        lines.extend(f"  - {p.name}" for p in example.players)
    return "\n".join(lines) + "\n"


def cmd_tree(args: argparse.Namespace) -> str:
    game = get_example(args.game).build()
    return render_tree(game.tree, args.depth)


def cmd_play(args: argparse.Namespace) -> str:
    example = get_example(args.game)
    game = example.build()
    players = [example.get_player(name) for name in args.players]
    iterations = args.iterations if args.iterations is not None else get_default_iterations()
    seed = args.seed if args.seed is not None else get_default_seed()
    config = ExecutionConfig(iterations=iterations, random_seed=seed)

    runner = GameRunner(game, players, config=config)
    ctx = runner.run_iterations()

    out = []
    if args.transcript:
        out.append(format_transcript(ctx))
    if args.summaries:
        out.append(format_summaries(ctx))
    out.append(format_score(ctx))
    return "".join(out)


def cmd_tournament(args: argparse.Namespace) -> str:
    example = get_example(args.game)
    game = example.build()
    if args.players:
        players = [example.get_player(name.strip()) for name in args.players.split(",")]
    else:
        players = list(example.players)
    config = TournamentConfig(
        iterations=args.iterations,
        random_seed=args.seed,
        include_self_play=args.self_play,
    )
    return format_results(round_robin(game, players, config))


COMMANDS = {
    "list": cmd_list,
    "tree": cmd_tree,
    "play": cmd_play,
    "tournament": cmd_tournament,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the `treeplay` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValidationError as e:
        parser.error(f"invalid --log-level: {e.errors()[0]['msg']}")

    try:
        output = COMMANDS[args.command](args)
    except (TreeplayError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
