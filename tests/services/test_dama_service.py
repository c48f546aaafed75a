"""Unit tests for src/services/dama_service.py"""

import pytest

from src.core.exceptions import (
    DamaError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.shared_types import Player, Status
from src.dama.board import Board
from src.dama.pieces import Piece
from src.dama.position import Position
from src.dama.rules import create_initial_board
from src.services.advice import FALLBACK_TIP
from src.services.dama_service import (
    AdviceRequest,
    CreateGameRequest,
    DamaService,
    GameState,
    JoinGameRequest,
    LegalMovesRequest,
    MoveRequest,
    PositionSchema,
)

WHITE_PLAYER = "Mocker M. Mockerson"
RED_PLAYER = "Mocka Mockerdottir"


@pytest.fixture
def service() -> DamaService:
    return DamaService()


@pytest.fixture
def started_game(service: DamaService) -> GameState:
    """Both players registered, white to move from the starting position"""
    created = service.create_new_game(
        CreateGameRequest(player_name=WHITE_PLAYER, color=Player.WHITE)
    )
    joined = service.join_game(
        JoinGameRequest(game=created.game, player_name=RED_PLAYER)
    )
    return joined.game


def _state_with_board(board: Board, to_move: Player = Player.WHITE) -> GameState:
    return GameState(
        board=board.to_string(),
        current_player=to_move,
        forced_piece=None,
        players={"white": WHITE_PLAYER, "red": RED_PLAYER},
        status=Status.IN_PROGRESS,
    )


# --- SERVICE - CREATE / JOIN ----
def test_create_a_new_game(service: DamaService) -> None:
    response = service.create_new_game(
        CreateGameRequest(player_name=WHITE_PLAYER, color=Player.RED)
    )
    assert response.game.board == create_initial_board().to_string()
    assert response.game.players == {"red": WHITE_PLAYER}
    assert response.game.status == Status.WAITING_FOR_PLAYERS
    assert response.game.current_player == Player.WHITE
    assert response.winner is None


def test_join_game(started_game: GameState) -> None:
    assert started_game.players == {"white": WHITE_PLAYER, "red": RED_PLAYER}
    assert started_game.status == Status.IN_PROGRESS


def test_join_game_without_creator(service: DamaService) -> None:
    """A waiting game nobody created cannot be joined"""
    empty_lobby = GameState(
        board=create_initial_board().to_string(),
        current_player=Player.WHITE,
        forced_piece=None,
        players={},
        status=Status.WAITING_FOR_PLAYERS,
    )
    with pytest.raises(GameStateError):
        service.join_game(JoinGameRequest(game=empty_lobby, player_name=RED_PLAYER))


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves_at_start(service: DamaService, started_game: GameState) -> None:
    response = service.legal_moves(
        LegalMovesRequest(game=started_game, player_name=WHITE_PLAYER)
    )
    assert response.color == Player.WHITE
    assert not response.must_continue_capture
    assert len(response.legal_moves) == 8
    assert all(not move.is_capture for move in response.legal_moves)


def test_legal_moves_only_captures(service: DamaService) -> None:
    board = Board.from_pieces(
        {
            Position(3, 4): Piece(Player.WHITE),
            Position(4, 4): Piece(Player.RED),
            Position(1, 0): Piece(Player.WHITE),
        }
    )
    response = service.legal_moves(
        LegalMovesRequest(game=_state_with_board(board), player_name=WHITE_PLAYER)
    )
    assert len(response.legal_moves) == 1
    move = response.legal_moves[0]
    assert move.is_capture
    assert move.captured_pos == PositionSchema(row=4, col=4)
    assert move.to_pos == PositionSchema(row=5, col=4)


def test_legal_moves_wrong_player(service: DamaService, started_game: GameState) -> None:
    with pytest.raises(NotYourTurnError):
        service.legal_moves(LegalMovesRequest(game=started_game, player_name=RED_PLAYER))


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: DamaService, started_game: GameState) -> None:
    response = service.make_move(
        MoveRequest(
            game=started_game,
            player_name=WHITE_PLAYER,
            from_pos=PositionSchema(row=2, col=3),
            to_pos=PositionSchema(row=3, col=3),
        )
    )
    board = Board.from_string(response.game.board)
    assert board.piece(Position(3, 3)) == Piece(Player.WHITE)
    assert board.piece(Position(2, 3)) is None
    assert response.game.current_player == Player.RED


def test_make_illegal_move(service: DamaService, started_game: GameState) -> None:
    with pytest.raises(IllegalMoveError):
        service.make_move(
            MoveRequest(
                game=started_game,
                player_name=WHITE_PLAYER,
                from_pos=PositionSchema(row=1, col=3),
                to_pos=PositionSchema(row=2, col=3),
            )
        )


def test_capture_sequence_through_service(service: DamaService) -> None:
    """The forced piece travels with the returned state, and the next request has to continue with it"""
    board = Board.from_pieces(
        {
            Position(3, 4): Piece(Player.WHITE),
            Position(4, 4): Piece(Player.RED),
            Position(6, 4): Piece(Player.RED),
            Position(0, 7): Piece(Player.RED),
        }
    )
    first = service.make_move(
        MoveRequest(
            game=_state_with_board(board),
            player_name=WHITE_PLAYER,
            from_pos=PositionSchema(row=3, col=4),
            to_pos=PositionSchema(row=5, col=4),
        )
    )
    assert first.game.forced_piece == PositionSchema(row=5, col=4)
    assert first.game.current_player == Player.WHITE

    moves = service.legal_moves(
        LegalMovesRequest(game=first.game, player_name=WHITE_PLAYER)
    )
    assert moves.must_continue_capture

    second = service.make_move(
        MoveRequest(
            game=first.game,
            player_name=WHITE_PLAYER,
            from_pos=PositionSchema(row=5, col=4),
            to_pos=PositionSchema(row=7, col=4),
        )
    )
    assert second.game.forced_piece is None
    assert second.game.current_player == Player.RED
    assert "[WK]" in second.game.board


def test_winning_move(service: DamaService) -> None:
    board = Board.from_pieces(
        {Position(3, 4): Piece(Player.WHITE), Position(4, 4): Piece(Player.RED)}
    )
    response = service.make_move(
        MoveRequest(
            game=_state_with_board(board),
            player_name=WHITE_PLAYER,
            from_pos=PositionSchema(row=3, col=4),
            to_pos=PositionSchema(row=5, col=4),
        )
    )
    assert response.game.status == Status.FINISHED
    assert response.winner == WHITE_PLAYER


def test_errors_share_a_base_class(service: DamaService, started_game: GameState) -> None:
    """The API layer can catch DamaError to turn any domain error into a response"""
    with pytest.raises(DamaError):
        service.legal_moves(LegalMovesRequest(game=started_game, player_name="nobody"))


# --- SERVICE - ADVICE ----
def test_advice_prompt(service: DamaService, started_game: GameState) -> None:
    response = service.advice_prompt(AdviceRequest(game=started_game))
    assert response.player == Player.WHITE
    assert started_game.board in response.prompt
    assert "Current Player: White" in response.prompt
    assert response.fallback_tip == FALLBACK_TIP
