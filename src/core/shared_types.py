"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class Player(StrEnum):
    """The two sides. RED is shown as 'Blue' to the players (and tagged 'B' in the board dump)."""

    WHITE = "white"
    RED = "red"

    @property
    def opponent(self) -> "Player":
        return Player.RED if self == Player.WHITE else Player.WHITE
