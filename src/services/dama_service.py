"""Orchestration of communication from API layer to business logic (and the reverse direction).

The service keeps no state of its own: the game state travels with every request and the updated state comes back in the response.
"""

import logging

from src.api.models import (
    AdvicePromptResponse,
    AdviceRequest,
    CreateGameRequest,
    GameResponse,
    GameState,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveSchema,
    PositionSchema,
)
from src.core.models import GameModel
from src.dama.game import Game, TurnPhase
from src.dama.moves import Move
from src.dama.position import Position
from src.services.advice import FALLBACK_TIP, build_advice_prompt

logger = logging.getLogger(__name__)


class DamaService:
    """Orchestration of layers for a dama game."""

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""
        new_game = Game.new_game(player=request.player_name, color=request.color.value)
        return self._create_game_response(new_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        game = Game.from_model(self._to_model(request.game))
        game.register_player(request.player_name)
        return self._create_game_response(game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = Game.from_model(self._to_model(request.game))
        legal_moves = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            player_name=request.player_name,
            color=game.current_player,
            must_continue_capture=game.phase == TurnPhase.CONTINUE_CAPTURE,
            legal_moves=[self._move_schema(move) for move in legal_moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = Game.from_model(self._to_model(request.game))
        move = game.make_move(
            from_pos=self._position(request.from_pos),
            to_pos=self._position(request.to_pos),
            player=request.player_name,
        )
        logger.debug(
            "%s played %s -> %s", request.player_name, move.from_pos, move.to_pos
        )
        return self._create_game_response(game)

    def advice_prompt(self, request: AdviceRequest) -> AdvicePromptResponse:
        """Build the prompt to send to the coaching service for the player to move."""
        game = Game.from_model(self._to_model(request.game))
        return AdvicePromptResponse(
            player=game.current_player,
            prompt=build_advice_prompt(game.board, game.current_player),
            fallback_tip=FALLBACK_TIP,
        )

    # -- Internal helpers --
    def _create_game_response(self, game: Game) -> GameResponse:
        """Convert the Game (via its GameModel) into a GameResponse."""
        model = game.to_model()
        return GameResponse(
            game=GameState(
                board=model.board,
                current_player=model.current_player,
                forced_piece=(
                    PositionSchema(row=model.forced_piece[0], col=model.forced_piece[1])
                    if model.forced_piece is not None
                    else None
                ),
                players=model.registered_players,
                status=model.status,
            ),
            winner=game.winner,
        )

    def _to_model(self, state: GameState) -> GameModel:
        return GameModel(
            board=state.board,
            current_player=state.current_player.value,
            forced_piece=(
                [state.forced_piece.row, state.forced_piece.col]
                if state.forced_piece is not None
                else None
            ),
            registered_players=dict(state.players),
            status=state.status.value,
        )

    def _position(self, schema: PositionSchema) -> Position:
        return Position(schema.row, schema.col)

    def _position_schema(self, pos: Position) -> PositionSchema:
        return PositionSchema(row=pos.row, col=pos.col)

    def _move_schema(self, move: Move) -> MoveSchema:
        return MoveSchema(
            from_pos=self._position_schema(move.from_pos),
            to_pos=self._position_schema(move.to_pos),
            is_capture=move.is_capture,
            captured_pos=(
                self._position_schema(move.captured_pos)
                if move.captured_pos is not None
                else None
            ),
        )
