"""
The rules engine: the in-process call surface used by the turn controller (see game.py) and the advisory prompt.

Every function here is pure. Boards go in, new boards come out; nothing is remembered between calls.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import EmptySquareError, OffBoardError
from src.core.shared_types import Player
from src.dama.board import Board
from src.dama.moves import Move, enforce_forced_capture, get_piece_moves
from src.dama.pieces import BACK_RANK, STARTING_ROWS, Piece
from src.dama.position import BOARD_SIZE, Position, is_valid_pos


@dataclass(frozen=True)
class MoveResult:
    board: Board
    promoted: bool


def create_initial_board() -> Board:
    """Turkish Dama: rows 1 and 2 full of white men, rows 5 and 6 full of red men."""
    pieces: dict[Position, Piece] = {}
    for player, rows in STARTING_ROWS.items():
        for row in rows:
            for col in range(BOARD_SIZE):
                pieces[Position(row, col)] = Piece(player)
    return Board.from_pieces(pieces)


def get_valid_moves(
    board: Board, player: Player, from_pos: Optional[Position] = None
) -> list[Move]:
    """
    List of legal moves for the player
    ----

    ----
    1. `from_pos` given (a piece in the middle of a capture sequence)? Only that piece may move, and only if it is yours.
    2. Otherwise: moves of all your pieces, scanning the board row by row.
    3. Forced capture: if any capture is available, only the captures are legal.
    """
    moves: list[Move] = []
    if from_pos is not None:
        piece = board.piece(from_pos) if is_valid_pos(from_pos) else None
        if piece is not None and piece.player == player:
            moves = get_piece_moves(board, from_pos, piece)
    else:
        for pos, own_piece in board.player_pieces(player):
            moves.extend(get_piece_moves(board, pos, own_piece))

    return enforce_forced_capture(moves)


def apply_move(board: Board, move: Move) -> MoveResult:
    """
    Make the move on a copy of the board
    ---

    1. relocate the piece (source square is emptied)
    2. remove the captured piece (if any)
    3. promote a man landing on its back rank

    NOTE the input board is never modified.
    """
    off_board = [
        pos
        for pos in (move.from_pos, move.to_pos, move.captured_pos)
        if pos is not None and not is_valid_pos(pos)
    ]
    if off_board:
        raise OffBoardError(f"Move refers to square(s) off the board: {off_board}")

    piece = board.piece(move.from_pos)
    if piece is None:
        raise EmptySquareError(f"No piece at source square {move.from_pos}.")

    promoted = (not piece.is_king) and move.to_pos.row == BACK_RANK[piece.player]
    landed_piece = piece.crowned() if promoted else piece

    changes: dict[Position, Optional[Piece]] = {move.from_pos: None}
    if move.is_capture and move.captured_pos is not None:
        changes[move.captured_pos] = None
    changes[move.to_pos] = landed_piece

    return MoveResult(board=board.with_changes(changes), promoted=promoted)


def check_winner(board: Board) -> Optional[Player]:
    """
    A player without any pieces left has lost.

    NOTE: Does not check whether the player to move still has a legal move. A blocked player is not declared lost here.
    """
    counts = board.count_pieces()
    if counts[Player.RED] == 0:
        return Player.WHITE
    if counts[Player.WHITE] == 0:
        return Player.RED
    return None


def board_to_string(board: Board) -> str:
    return board.to_string()
