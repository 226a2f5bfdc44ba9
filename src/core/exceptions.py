"""
Custom exceptions.

Everything raised by the domain layer derives from GameError, so a caller can catch the whole family at once.
"""


class GameError(Exception):
    """Base class for all errors raised by the Othello engine."""


# --- MOVE ERRORS ---
class IllegalMoveError(GameError):
    """The rules do not allow this move. Recoverable: the engine turns these into an invalidMove event."""


class OccupiedSquareError(IllegalMoveError):
    pass


class NoCapturesError(IllegalMoveError):
    pass


class OutOfBoundsError(IllegalMoveError):
    pass


class InvalidCoordinateError(IllegalMoveError):
    """Not a coordinate at all: anything other than exactly two integers."""


class GameOverError(IllegalMoveError):
    pass


# --- STATE ERRORS ---
class GameStateError(GameError):
    """The engine was handed a state it cannot work with."""


class InvalidBoardError(GameStateError):
    pass


class InvalidSavedGameError(GameStateError):
    pass
