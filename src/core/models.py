"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PlayerColor = str
PlayerName = str
Coordinates = list[int]


@dataclass
class GameModel:
    """Transport-safe representation of a dama game used between API, Service, and Game layers."""

    board: str  # the board dump, see Board.to_string()
    current_player: PlayerColor
    forced_piece: Optional[Coordinates]  # [row, col] of the piece that must keep capturing
    registered_players: dict[PlayerColor, PlayerName]
    status: str
