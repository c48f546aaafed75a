"""Defines the pieces: men and kings of both players"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Player
from src.dama.position import BOARD_SIZE


class PieceKind(Enum):
    MAN = auto()
    KING = auto()


# Rows filled with men at the start of the game
STARTING_ROWS: dict[Player, tuple[int, ...]] = {
    Player.WHITE: (1, 2),
    Player.RED: (5, 6),
}

# A man reaching this row gets promoted. WHITE advances down the board (increasing row), RED advances up.
BACK_RANK: dict[Player, int] = {
    Player.WHITE: BOARD_SIZE - 1,
    Player.RED: 0,
}

PLAYER_TO_TAG: dict[Player, str] = {
    Player.WHITE: "W",
    Player.RED: "B",
}

TAG_TO_PLAYER: dict[str, Player] = {value: key for key, value in PLAYER_TO_TAG.items()}

KING_SUFFIX = "K"


@dataclass(frozen=True)
class Piece:
    player: Player
    is_king: bool = False

    @property
    def kind(self) -> PieceKind:
        return PieceKind.KING if self.is_king else PieceKind.MAN

    @classmethod
    def from_text(cls, tag: str) -> Self:
        """'W', 'WK', 'B', 'BK' (the contents of a cell in the board dump)"""
        player_tag, suffix = tag[:1], tag[1:]
        if player_tag not in TAG_TO_PLAYER or suffix not in ("", KING_SUFFIX):
            raise InvalidBoardError(f"Cannot interpret {tag!r} as a piece.")
        return cls(TAG_TO_PLAYER[player_tag], is_king=suffix == KING_SUFFIX)

    def to_text(self) -> str:
        return PLAYER_TO_TAG[self.player] + (KING_SUFFIX if self.is_king else "")

    def crowned(self) -> Self:
        """The promoted version of this piece. There is no way back: a king stays a king."""
        return replace(self, is_king=True)
