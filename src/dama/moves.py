"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the move sets for each piece kind (man / flying king).

Movement is strictly orthogonal. Filtering by the forced-capture rule happens on the full move list (see `enforce_forced_capture()`).
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.exceptions import InvalidMoveError
from src.core.shared_types import Player
from src.dama.pieces import Piece, PieceKind
from src.dama.position import Position, Vector, is_valid_pos


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, pos: Position) -> Optional[Piece]: ...


@dataclass(frozen=True)
class Move:
    """
    basic definition of a move to be made

    A description only: produced by the enumeration functions below and consumed by `apply_move()`.
    """

    from_pos: Position
    to_pos: Position
    is_capture: bool = False
    captured_pos: Optional[Position] = None

    def __post_init__(self) -> None:
        if self.is_capture != (self.captured_pos is not None):
            raise InvalidMoveError(
                f"captured_pos must be given exactly when the move is a capture. is_capture={self.is_capture}, captured_pos={self.captured_pos}"
            )


# --- DIRECTIONS ---
UP: Vector = (-1, 0)
DOWN: Vector = (1, 0)
LEFT: Vector = (0, -1)
RIGHT: Vector = (0, 1)

ALL_DIRECTIONS: list[Vector] = [UP, DOWN, LEFT, RIGHT]

# Men move forward and sideways, never backward. WHITE moves DOWN the board, RED moves UP.
MAN_DIRECTIONS: dict[Player, list[Vector]] = {
    Player.WHITE: [DOWN, LEFT, RIGHT],
    Player.RED: [UP, LEFT, RIGHT],
}


def _is_opponent(piece: Optional[Piece], player: Player) -> bool:
    return piece is not None and piece.player != player


# --- MOVEMENT RULES ---
def single_step_move(pos: Position, board: Board, direction: Vector) -> list[Move]:
    """Step onto the adjacent square, if it is empty"""
    target = pos.offset(direction)
    if is_valid_pos(target) and board.piece(target) is None:
        return [Move(from_pos=pos, to_pos=target)]
    return []


def single_jump_capture(
    pos: Position, piece: Piece, board: Board, direction: Vector
) -> list[Move]:
    """
    Jump over an adjacent opponent piece onto the (empty) square right behind it.

    Nothing if the neighbour is empty or your own piece, or if the landing square is occupied / off the board.
    """
    enemy_pos = pos.offset(direction)
    landing_pos = pos.offset(direction, 2)
    if not (is_valid_pos(enemy_pos) and is_valid_pos(landing_pos)):
        return []

    if _is_opponent(board.piece(enemy_pos), piece.player) and (
        board.piece(landing_pos) is None
    ):
        return [
            Move(
                from_pos=pos,
                to_pos=landing_pos,
                is_capture=True,
                captured_pos=enemy_pos,
            )
        ]
    return []


def raycasting_move(pos: Position, board: Board, direction: Vector) -> list[Move]:
    """
    Raycasting algorithm for king slides
    ---

    Walk along the direction until we hit another piece or the edge of the board.
    Every empty square along the way is a place the king can land on.
    """
    moves: list[Move] = []
    distance = 1
    while True:
        target = pos.offset(direction, distance)
        if not is_valid_pos(target) or board.piece(target) is not None:
            break
        moves.append(Move(from_pos=pos, to_pos=target))
        distance += 1
    return moves


def raycasting_capture(
    pos: Position, piece: Piece, board: Board, direction: Vector
) -> list[Move]:
    """
    Raycasting algorithm for (flying) captures
    ---

    Find the first occupied square along the direction.
    * your own piece: nothing to capture (cannot jump your own pieces)
    * an opponent's piece: every empty square behind it, until the next piece or the edge, is a landing square

    NOTE: Only the nearest piece is ever considered, so a single jump never takes two pieces.
    """
    distance = 1
    while True:
        check_pos = pos.offset(direction, distance)
        if not is_valid_pos(check_pos):
            return []
        found = board.piece(check_pos)
        if found is not None:
            break
        distance += 1

    if not _is_opponent(found, piece.player):
        return []

    moves: list[Move] = []
    jump_distance = 1
    while True:
        landing_pos = check_pos.offset(direction, jump_distance)
        if not is_valid_pos(landing_pos) or board.piece(landing_pos) is not None:
            break
        moves.append(
            Move(
                from_pos=pos,
                to_pos=landing_pos,
                is_capture=True,
                captured_pos=check_pos,
            )
        )
        jump_distance += 1
    return moves


def candidate_man_moves(pos: Position, piece: Piece, board: Board) -> list[Move]:
    """
    A man:
    - steps a single square forward or sideways
    - captures by jumping an adjacent opponent piece forward or sideways
    """
    moves: list[Move] = []
    for direction in MAN_DIRECTIONS[piece.player]:
        moves.extend(single_step_move(pos, board, direction))
        moves.extend(single_jump_capture(pos, piece, board, direction))
    return moves


def candidate_king_moves(pos: Position, piece: Piece, board: Board) -> list[Move]:
    """
    The flying king moves any distance along the four orthogonal directions, and can capture a piece from a distance,
    landing on any free square behind it.
    """
    moves: list[Move] = []
    for direction in ALL_DIRECTIONS:
        moves.extend(raycasting_move(pos, board, direction))
        moves.extend(raycasting_capture(pos, piece, board, direction))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Piece, Board], list[Move]]
MOVEMENT_RULES: dict[PieceKind, CandidateMovesFn] = {
    PieceKind.MAN: candidate_man_moves,
    PieceKind.KING: candidate_king_moves,
}


def get_piece_moves(board: Board, pos: Position, piece: Piece) -> list[Move]:
    """All moves of a single piece (not yet filtered by the forced-capture rule)"""
    movement_rule = MOVEMENT_RULES[piece.kind]
    return movement_rule(pos, piece, board)


# --- FORCED CAPTURE ---
def enforce_forced_capture(moves: list[Move]) -> list[Move]:
    """If any capture is available, you MUST capture: all non-capturing moves are dropped."""
    captures = [move for move in moves if move.is_capture]
    return captures if captures else moves
