"""Example games for treeplay.

Each example module exports a builder for its game definition and a tuple
of players written for it. The registry below is what the command line
plays from.
"""

from treeplay.examples.base import ExampleGame, MoveName
from treeplay.examples.cuban_missile_crisis import CRISIS_PLAYERS, crisis_tree, cuban_missile_crisis
from treeplay.examples.dice import DICE_PLAYERS, die
from treeplay.examples.prisoners_dilemma import PD, PD_PLAYERS, prisoners_dilemma
from treeplay.examples.rock_paper_scissors import RPS, RPS_PLAYERS, rock_paper_scissors
from treeplay.examples.tic_tac_toe import Square, TIC_TAC_TOE_PLAYERS, tic_tac_toe

EXAMPLE_GAMES: dict[str, ExampleGame] = {
    "prisoners-dilemma": ExampleGame(
        "prisoners-dilemma", "Iterated Prisoner's Dilemma", prisoners_dilemma, PD_PLAYERS
    ),
    "rock-paper-scissors": ExampleGame(
        "rock-paper-scissors", "Zero-sum Rock-Paper-Scissors", rock_paper_scissors, RPS_PLAYERS
    ),
    "cuban-missile-crisis": ExampleGame(
        "cuban-missile-crisis", "Extensive-form Cuban Missile Crisis", cuban_missile_crisis, CRISIS_PLAYERS
    ),
    "dice": ExampleGame("dice", "Roll a fair die", die, DICE_PLAYERS),
    "tic-tac-toe": ExampleGame("tic-tac-toe", "Tic-Tac-Toe", tic_tac_toe, TIC_TAC_TOE_PLAYERS),
}


def get_example(name: str) -> ExampleGame:
    """Look up an example game by name.

    Raises:
        ValueError: If the name is not registered
    """
    if name not in EXAMPLE_GAMES:
        raise ValueError(f"Unknown game {name!r}. Available: {', '.join(EXAMPLE_GAMES)}")
    return EXAMPLE_GAMES[name]


def list_examples() -> list[str]:
    return list(EXAMPLE_GAMES)


__all__ = [
    "ExampleGame",
    "MoveName",
    "EXAMPLE_GAMES",
    "get_example",
    "list_examples",
    # Games
    "prisoners_dilemma",
    "rock_paper_scissors",
    "cuban_missile_crisis",
    "crisis_tree",
    "die",
    "tic_tac_toe",
    # Moves
    "PD",
    "RPS",
    "Square",
    # Players
    "PD_PLAYERS",
    "RPS_PLAYERS",
    "CRISIS_PLAYERS",
    "DICE_PLAYERS",
    "TIC_TAC_TOE_PLAYERS",
]
