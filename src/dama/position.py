"""
A position (cell) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Dama board is always 8x8, rows and columns are both indexed 0-7 (row 0 is the top of the board)
BOARD_SIZE = 8

Vector = tuple[int, int]


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def offset(self, direction: Vector, distance: int = 1) -> Position:
        """The position `distance` steps away along `direction` (may end up off the board)"""
        dr, dc = direction
        return Position(self.row + dr * distance, self.col + dc * distance)

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)


def is_valid_pos(pos: Position) -> bool:
    """Guard used before every cell lookup. Never raises."""
    return pos.is_within_bounds()
