"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is the turn controller: it holds the board, whose turn it is, and which piece (if any) is in the middle of a capture sequence.
The rules themselves live in rules.py, which stays stateless.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Player, Status
from src.dama.board import Board
from src.dama.moves import Move
from src.dama.position import Position, is_valid_pos
from src.dama.rules import (
    apply_move,
    check_winner,
    create_initial_board,
    get_valid_moves,
)

logger = logging.getLogger(__name__)

AVAILABLE_COLOR_NAMES = [player.value for player in Player]


class TurnPhase(Enum):
    NORMAL = auto()
    CONTINUE_CAPTURE = auto()  # the forced piece must keep on capturing before the turn passes


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Player
    forced_piece: Optional[Position]
    players: dict[Player, str]
    status: Status

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in [status.value for status in Status]:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.value for status in Status])}"
            )
        if model.current_player not in AVAILABLE_COLOR_NAMES:
            raise GameStateError(
                f"Invalid player to move: {model.current_player!r}. \nPick one from {','.join(AVAILABLE_COLOR_NAMES)}"
            )

        board = Board.from_string(model.board)
        forced_piece = (
            Position(*model.forced_piece) if model.forced_piece is not None else None
        )
        if forced_piece is not None and not is_valid_pos(forced_piece):
            raise GameStateError(f"Forced piece {model.forced_piece} is off the board.")
        players = {
            player: model.registered_players[player.value]
            for player in Player
            if player.value in model.registered_players.keys()
        }
        return cls(
            board=board,
            current_player=Player(model.current_player),
            forced_piece=forced_piece,
            players=players,
            status=Status(model.status),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board=self.board.to_string(),
            current_player=self.current_player.value,
            forced_piece=(
                [self.forced_piece.row, self.forced_piece.col]
                if self.forced_piece is not None
                else None
            ),
            registered_players={
                player.value: name for player, name in self.players.items()
            },
            status=self.status.value,
        )

    @classmethod
    def new_game(cls, player: str, color: str) -> Self:
        """To start a new game with the player using the pieces with the indicated color. White moves first."""

        if color.lower() not in AVAILABLE_COLOR_NAMES:
            raise GameStateError(
                f"Cannot create new game. Color {color} not in {','.join(AVAILABLE_COLOR_NAMES)}."
            )
        logger.info("New game created by %s playing %s", player, color.lower())
        return cls(
            board=create_initial_board(),
            current_player=Player.WHITE,
            forced_piece=None,
            players={Player(color.lower()): player},
            status=Status.WAITING_FOR_PLAYERS,
        )

    @property
    def phase(self) -> TurnPhase:
        return (
            TurnPhase.CONTINUE_CAPTURE
            if self.forced_piece is not None
            else TurnPhase.NORMAL
        )

    @property
    def winner(self) -> Optional[str]:
        """
        Only a player that lost all pieces loses the game.
        NOTE a player without legal moves is not (yet) declared lost.
        """
        if self.status != Status.FINISHED:
            return None
        winning_player = check_winner(self.board)
        if winning_player is None:
            return None
        return self.players.get(winning_player)

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )

        # exactly one seat taken: the new player gets the other color
        if len(self.players) != 1:
            raise GameStateError(
                f"Cannot join this game. Expected one registered player, found {len(self.players)}."
            )

        opponent_color = list(self.players.keys())[0]
        self.players[opponent_color.opponent] = player
        self._change_status(Status.IN_PROGRESS)
        logger.info("%s joined the game as %s", player, opponent_color.opponent.value)

    def legal_moves(self, player: str) -> list[Move]:
        """
        Service will request the set of legal moves.
        ----

        1. Check the game is running and it is your turn
        2. Generate legal moves. Mid capture sequence, only the forced piece may move.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return self._generate_legal_moves()

    def make_move(self, from_pos: Position, to_pos: Position, player: str) -> Move:
        """
        Attempt to make a move
        -----

        1. find the legal move going from `from_pos` to `to_pos` (the engine fills in what gets captured)
        2. update the board
        3. decide whether the same piece must keep capturing, or the turn passes
        4. update game status (if needed)

        Returns the move that was played.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)

        move = self._find_legal_move(from_pos, to_pos)
        if move is None:
            logger.warning(
                "Rejected illegal move %s -> %s by %s", from_pos, to_pos, player
            )
            raise IllegalMoveError(f"Move not allowed: {from_pos} -> {to_pos}")

        result = apply_move(self.board, move)
        self.board = result.board
        if result.promoted:
            logger.info("Piece promoted to king on %s", move.to_pos)

        self._update_turn(move, promoted=result.promoted)
        self._update_game_status()
        return move

    # -- PRIVATE HELPERS ---
    def _get_turn_player(self) -> str:
        if self.current_player not in self.players:
            raise GameStateError(
                f"No player registered for the {self.current_player.value} pieces."
            )
        return self.players[self.current_player]

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = self._get_turn_player()
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _generate_legal_moves(self) -> list[Move]:
        return get_valid_moves(self.board, self.current_player, self.forced_piece)

    def _find_legal_move(self, from_pos: Position, to_pos: Position) -> Optional[Move]:
        """A (from, to) pair identifies at most one legal move: the captured piece follows from the line between them."""
        return next(
            (
                move
                for move in self._generate_legal_moves()
                if move.from_pos == from_pos and move.to_pos == to_pos
            ),
            None,
        )

    def _update_turn(self, move: Move, promoted: bool) -> None:
        """
        Multi-capture state machine
        ----

        * NORMAL --(capture, same piece can capture again)--> CONTINUE_CAPTURE with that piece
        * CONTINUE_CAPTURE --(capture, still more to take)--> CONTINUE_CAPTURE
        * anything else: the turn passes to the opponent and we are back in NORMAL

        NOTE a promotion ends the move, even in the middle of a capture sequence.
        """
        if move.is_capture and not promoted and self._can_continue_capture(move.to_pos):
            self.forced_piece = move.to_pos
            logger.debug("Piece on %s must continue capturing", move.to_pos)
            return

        self.forced_piece = None
        self.current_player = self.current_player.opponent

    def _can_continue_capture(self, pos: Position) -> bool:
        continuation = get_valid_moves(self.board, self.current_player, pos)
        return any(move.is_capture for move in continuation)

    def _update_game_status(self) -> None:
        """Checks to see if game has ended and changes status accordingly."""
        winning_player = check_winner(self.board)
        if winning_player is not None:
            self._change_status(Status.FINISHED)
            self.forced_piece = None
            logger.info("Game finished. %s wins", winning_player.value)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
