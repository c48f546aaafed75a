"""
Exceptions shared by the domain, service and API layers.

Two families:
* errors a player/frontend can trigger (illegal move, not your turn, bad request)
* contract violations: the engine was called in a way that should never happen if the caller only applies moves it got from the engine.
"""


class DamaError(Exception):
    """Base class for everything raised on purpose by this package"""


# --- CONTRACT VIOLATIONS ---
class ContractViolationError(DamaError):
    """Programming error on the caller's side. Not a recoverable game condition."""


class EmptySquareError(ContractViolationError):
    """Tried to move a piece from a square that holds no piece."""


class InvalidMoveError(ContractViolationError):
    """A Move was built with inconsistent capture information."""


class OffBoardError(ContractViolationError):
    """A move refers to a square outside the board."""


# --- INPUT / GAME FLOW ---
class InvalidBoardError(DamaError):
    """Board text (or grid) is not a well-formed 8x8 board."""


class GameStateError(DamaError):
    """Action not allowed given the current status of the game."""


class NotYourTurnError(DamaError):
    """A player tried to act while it is the opponent's turn."""


class IllegalMoveError(DamaError):
    """The requested move is not among the legal moves."""


class InvalidRequestError(DamaError, ValueError):
    """Raised by the request validators. Subclasses ValueError so pydantic reports it as a validation error."""
