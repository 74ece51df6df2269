"""Tic-Tac-Toe built from a state machine.

The board is a tuple of nine squares, row by row. X (player 1) moves when an
odd number of squares is empty. A move is ``(square index, mark)``. The
game tree is unrolled lazily, so only positions that are actually reached
(by play or by search) are ever built.
"""

from __future__ import annotations

from treeplay.engine.context import Player
from treeplay.examples.base import MoveName
from treeplay.models.game import GameDefinition, from_state_machine
from treeplay.models.payoffs import chunk
from treeplay.strategies.common import random_move
from treeplay.strategies.minimax import minimax


class Square(MoveName):
    X = "X"
    O = "O"
    EMPTY = " "


Board = tuple[Square, ...]
Move = tuple[int, Square]

EMPTY_BOARD: Board = (Square.EMPTY,) * 9
DIAGONALS = ((0, 4, 8), (2, 4, 6))


def empty_squares(board: Board) -> list[int]:
    return [i for i, s in enumerate(board) if s is Square.EMPTY]


def whose_turn(board: Board) -> int:
    return 1 if len(empty_squares(board)) % 2 == 1 else 2


def _wins(mark: Square, board: Board) -> bool:
    rows = chunk(3, board)
    cols = [list(col) for col in zip(*rows)]
    diags = [[board[i] for i in d] for d in DIAGONALS]
    return any(all(s is mark for s in line) for line in rows + cols + diags)


def board_payoff(board: Board, player: int = 0) -> list[float]:
    if _wins(Square.X, board):
        return [1, -1]
    if _wins(Square.O, board):
        return [-1, 1]
    return [0, 0]


def legal_moves(board: Board, player: int) -> list[Move]:
    if board_payoff(board) != [0, 0]:
        return []
    mark = Square.X if player == 1 else Square.O
    return [(i, mark) for i in empty_squares(board)]


def is_over(board: Board, player: int) -> bool:
    return not legal_moves(board, player)


def play(board: Board, player: int, m: Move) -> Board:
    i, mark = m
    return board[:i] + (mark,) + board[i + 1:]


def tic_tac_toe(board: Board = EMPTY_BOARD) -> GameDefinition:
    """Tic-Tac-Toe starting from ``board`` (empty by default)."""
    return from_state_machine(2, whose_turn, is_over, legal_moves, play, board_payoff, tuple(board))


def render_board(board: Board) -> str:
    rows = [" " + " | ".join(str(s) for s in row) for row in chunk(3, board)]
    return "\n---+---+---\n".join(rows) + "\n"


perfectionist = Player("Perfectionist", minimax)
randy = Player("Randy", random_move)

TIC_TAC_TOE_PLAYERS: tuple[Player, ...] = (perfectionist, randy)
