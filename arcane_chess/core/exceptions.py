"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the layers above the domain can catch a single top-level type.
NOTE: None of these derive from ValueError. Pydantic would otherwise wrap them into its own ValidationError.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing a game."""


# --- MOVE VALIDATION (raised by the rule engine) ---
class MoveValidationError(GameError):
    """A candidate move got rejected by the rule engine."""


class InvalidSquareError(MoveValidationError):
    """Square name is not two characters or points outside of the board."""


class EmptySquareError(MoveValidationError):
    """There is no piece on the square the move starts from."""


class WrongColorError(MoveValidationError):
    """The piece that should move does not belong to the side to move."""


class IllegalMoveError(MoveValidationError):
    """The movement rule of the piece does not allow reaching the target square."""


# --- OTHER LAYERS ---
class GameStateError(GameError):
    """Requested action does not fit the current status of the game."""


class NotYourTurnError(GameError):
    """Player attempts to move while it is the opponent's turn."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record."""


class InvalidRequestError(GameError):
    """Incoming request data failed validation."""
