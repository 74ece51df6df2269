"""A toy extensive-form model of the Cuban Missile Crisis.

Player 1 is the USSR, player 2 the USA. Outcomes are built by adding up
smaller payoffs, e.g. backing down after missiles reach Cuba costs the USA
both the Turkey and the Cuba exchange and hands the USSR a propaganda win.
"""

from __future__ import annotations

from treeplay.engine.context import Player
from treeplay.models.game import GameDefinition, from_extensive_form
from treeplay.models.tree import GameTree, payoff, player
from treeplay.strategies.common import random_move
from treeplay.strategies.minimax import minimax

USSR = 1
USA = 2

NUCLEAR_WAR = payoff([-100, -100])
NUKES_IN_CUBA = payoff([1, -1])
NUKES_IN_TURKEY = payoff([-1, 1])
USA_LOOKS_GOOD = payoff([0, 1])
USSR_LOOKS_GOOD = payoff([1, 0])


def crisis_tree() -> GameTree:
    blockade_counter = (
        player(USSR, ("Agree to Terms", USA_LOOKS_GOOD))
        | ("Escalate", NUCLEAR_WAR)
    )
    invasion_counter = (
        player(USSR, ("Pull Out", NUKES_IN_TURKEY + USA_LOOKS_GOOD))
        | ("Escalate", NUCLEAR_WAR)
    )
    usa_response = (
        player(USA, ("Do Nothing", NUKES_IN_TURKEY + NUKES_IN_CUBA + USSR_LOOKS_GOOD))
        | ("Blockade", blockade_counter)
        | ("Invade", invasion_counter)
    )
    return (
        player(USSR, ("Send Missiles to Cuba", usa_response))
        | ("Do Nothing", NUKES_IN_TURKEY)
    )


def cuban_missile_crisis() -> GameDefinition:
    return from_extensive_form(crisis_tree())


khrushchev = Player("Khrushchev", minimax)
kennedy = Player("Kennedy", minimax)
randy = Player("Randy", random_move)

CRISIS_PLAYERS: tuple[Player, ...] = (khrushchev, kennedy, randy)
