"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    """The two players. Values are the codes used in the exported game state."""

    BLACK = "B"
    WHITE = "W"

    @property
    def opponent(self) -> "Color":
        return Color.WHITE if self == Color.BLACK else Color.BLACK


class TileValue(StrEnum):
    BLACK = "B"
    WHITE = "W"
    EMPTY = "E"
    # NOTE only ever shows up in an annotated copy of the board, never in the board the game owns
    VALID_MOVE = "P"

    @classmethod
    def from_color(cls, color: Color) -> "TileValue":
        return cls.BLACK if color == Color.BLACK else cls.WHITE

    def to_color(self) -> Color | None:
        """Color of the piece on this tile (None for an empty tile)"""
        if self == TileValue.BLACK:
            return Color.BLACK
        if self == TileValue.WHITE:
            return Color.WHITE
        return None


class EventType(StrEnum):
    MOVE = "move"
    INVALID_MOVE = "invalidMove"
    GAME_OVER = "gameOver"
    STATE_CHANGE = "stateChange"


class StateChangeAction(StrEnum):
    """Extra tag on a stateChange event, telling listeners what caused it."""

    UNDO = "undo"
    REDO = "redo"
    PASS = "pass"
