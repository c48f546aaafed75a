"""The Board holds the configuration of pieces. It is an immutable value: every change produces a new Board."""

import re
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Player
from src.dama.pieces import Piece
from src.dama.position import BOARD_SIZE, Position

Cell = Optional[Piece]
Grid = tuple[tuple[Cell, ...], ...]

EMPTY_CELL = "[ ]"
ROW_PATTERN = re.compile(r"Row (\d+): ((?:\[[^\]]*\])+)")
CELL_PATTERN = re.compile(r"\[([^\]]*)\]")


@dataclass(frozen=True)
class Board:
    grid: Grid

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE or any(
            len(row) != BOARD_SIZE for row in self.grid
        ):
            raise InvalidBoardError(
                f"Board must be {BOARD_SIZE}x{BOARD_SIZE}. Got rows of length {[len(row) for row in self.grid]}"
            )

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_pieces(cls, pieces: dict[Position, Piece]) -> Self:
        """Convenience constructor: only list the occupied squares"""
        return cls.empty().with_changes(dict(pieces))

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Construct a board from the text produced by `to_string()`.

        ex. a board with a single white man on (1, 3):
        Row 0: [ ][ ][ ][ ][ ][ ][ ][ ]
        Row 1: [ ][ ][ ][W][ ][ ][ ][ ]
        Row 2: [ ][ ][ ][ ][ ][ ][ ][ ]
        ... (rows 3 - 7 all empty)
        """
        lines = [line.strip() for line in text.strip().splitlines()]
        if len(lines) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Expected {BOARD_SIZE} rows in board text, got {len(lines)}."
            )

        rows: list[tuple[Cell, ...]] = []
        for row_idx, line in enumerate(lines):
            match = ROW_PATTERN.fullmatch(line)
            if match is None or int(match.group(1)) != row_idx:
                raise InvalidBoardError(f"Cannot interpret line {line!r} as row {row_idx}.")
            cells = CELL_PATTERN.findall(match.group(2))
            rows.append(
                tuple(
                    Piece.from_text(cell) if cell.strip() else None for cell in cells
                )
            )
        return cls(tuple(rows))

    def to_string(self) -> str:
        """One line per row, every cell in brackets: [ ] empty, [W]/[B] men, [WK]/[BK] kings."""
        return "".join(self._row_to_string(row_idx) for row_idx in range(BOARD_SIZE))

    def _row_to_string(self, row_idx: int) -> str:
        cells = "".join(
            f"[{piece.to_text()}]" if piece else EMPTY_CELL for piece in self.grid[row_idx]
        )
        return f"Row {row_idx}: {cells}\n"

    def piece(self, pos: Position) -> Optional[Piece]:
        return self.grid[pos.row][pos.col]

    def player_pieces(self, player: Player) -> list[tuple[Position, Piece]]:
        """find all pieces of a given player, scanning the board row by row"""
        found: list[tuple[Position, Piece]] = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is not None and piece.player == player:
                    found.append((Position(row, col), piece))
        return found

    def locate_player(self, player: Player) -> list[Position]:
        """Squares occupied by the player, in row-major order"""
        return [pos for pos, _ in self.player_pieces(player)]

    def count_pieces(self) -> dict[Player, int]:
        """Tally the pieces each player has left on the board"""
        return {player: len(self.locate_player(player)) for player in Player}

    def with_changes(self, changes: dict[Position, Cell]) -> Self:
        """A new board with the given squares overwritten (None empties a square). This board is left untouched."""
        rows = [list(row) for row in self.grid]
        for pos, cell in changes.items():
            rows[pos.row][pos.col] = cell
        return type(self)(tuple(tuple(row) for row in rows))
