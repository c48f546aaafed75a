"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.core.shared_types import Player
from src.dama.board import Board
from src.dama.pieces import Piece
from src.dama.position import Position

# (row, col, tag) with tag as in the board dump: W, WK, B, BK
PieceSpec = tuple[int, int, str]


@pytest.fixture
def make_board() -> Callable[[list[PieceSpec]], Board]:
    """Call the inner function with the occupied squares, everything else is left empty"""

    def _create_board(pieces: list[PieceSpec]) -> Board:
        return Board.from_pieces(
            {Position(row, col): Piece.from_text(tag) for row, col, tag in pieces}
        )

    return _create_board


@pytest.fixture
def white_man() -> Piece:
    return Piece(Player.WHITE)


@pytest.fixture
def red_man() -> Piece:
    return Piece(Player.RED)
