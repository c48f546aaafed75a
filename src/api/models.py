"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidBoardError, InvalidRequestError
from src.core.shared_types import Player, Status
from src.dama.board import Board
from src.dama.position import BOARD_SIZE

PieceColor = str
PlayerName = str


# --- SHARED PIECES ---
class PositionSchema(BaseModel):
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Coordinate {value} is off the board. Must lie in 0-{BOARD_SIZE - 1}."
            )
        return value


class MoveSchema(BaseModel):
    from_pos: PositionSchema
    to_pos: PositionSchema
    is_capture: bool
    captured_pos: Optional[PositionSchema]


class GameState(BaseModel):
    """The full state of a game. The caller holds on to it between requests."""

    board: str
    current_player: Player
    forced_piece: Optional[PositionSchema]
    players: dict[PieceColor, PlayerName]
    status: Status

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: str) -> str:
        try:
            Board.from_string(value)
        except InvalidBoardError as error:
            raise InvalidRequestError(f"Cannot interpret board: {error}") from error
        return value

    @field_validator("players")
    @classmethod
    def validate_players(cls, value: dict[str, str]) -> dict[str, str]:
        color_names = [player.value for player in Player]
        unknown = [color for color in value if color not in color_names]
        if unknown:
            raise InvalidRequestError(
                f"Unknown color(s): {','.join(unknown)}. Pick from {','.join(color_names)}"
            )
        return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Player


class JoinGameRequest(BaseModel):
    game: GameState
    player_name: str


class LegalMovesRequest(BaseModel):
    game: GameState
    player_name: str


class MoveRequest(BaseModel):
    game: GameState
    player_name: str
    from_pos: PositionSchema
    to_pos: PositionSchema


class AdviceRequest(BaseModel):
    game: GameState


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game: GameState
    winner: Optional[PlayerName]


class LegalMovesResponse(BaseModel):
    player_name: str
    color: Player
    must_continue_capture: bool
    legal_moves: list[MoveSchema]


class AdvicePromptResponse(BaseModel):
    player: Player
    prompt: str
    fallback_tip: str  # shown when the coaching service does not answer
