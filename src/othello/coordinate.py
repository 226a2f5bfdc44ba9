"""
A cell on the board, and the eight directions you can walk from it

(placed in its own module as the board, the rules, and the engine all need to import it)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.core.exceptions import InvalidCoordinateError, OutOfBoundsError

# Othello is played on an 8x8 board
BOARD_SIZE = 8

COLUMN_LETTERS = "abcdefgh"


@dataclass(frozen=True)
class Coordinate:
    """
    x = column (0 - 7, left to right), y = row (0 - 7, top to bottom)
    ---

    NOTE: this is the engine's coordinate system. A UI that lists rows first needs to convert.
    """

    x: int
    y: int

    @classmethod
    def from_pair(cls, pair: Any) -> Coordinate:
        """
        Accepts (x, y) as tuple or list, e.g. the [x, y] arrays of the exported move history.

        NOTE no conversion: floats, bools, strings, or a pair of the wrong length raise InvalidCoordinateError.
        """
        if not _is_integer_pair(pair):
            raise InvalidCoordinateError(
                f"A coordinate must be two integers (x, y), got {pair!r}."
            )
        x, y = pair
        return cls(x, y)

    def to_pair(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def from_notation(cls, label: str) -> Coordinate:
        """Column letter + row number: 'a1' (top left) - 'h8' (bottom right) get converted to (0,0) - (7,7)"""
        x = ord(label[0].lower()) - ord("a")
        y = int(label[1:]) - 1
        return cls(x, y)

    def to_notation(self) -> str:
        if not self.is_within_bounds():
            raise OutOfBoundsError(
                f"Coordinate ({self.x}, {self.y}) lies outside the board."
            )
        return f"{COLUMN_LETTERS[self.x]}{self.y + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_SIZE) and (0 <= self.y < BOARD_SIZE)

    def step(self, direction: Direction) -> Coordinate:
        """The neighbouring cell in the given direction (may lie outside the board)"""
        dx, dy = direction.value
        return Coordinate(self.x + dx, self.y + dy)


class Direction(Enum):
    """Compass directions. Values are (dx, dy) offsets; y grows downwards."""

    TOP = (0, -1)
    TOP_RIGHT = (1, -1)
    RIGHT = (1, 0)
    BOTTOM_RIGHT = (1, 1)
    BOTTOM = (0, 1)
    BOTTOM_LEFT = (-1, 1)
    LEFT = (-1, 0)
    TOP_LEFT = (-1, -1)


# Fixed scanning order, clockwise starting from the top. Results are reported in this order.
DIRECTION_ORDER: tuple[Direction, ...] = (
    Direction.TOP,
    Direction.TOP_RIGHT,
    Direction.RIGHT,
    Direction.BOTTOM_RIGHT,
    Direction.BOTTOM,
    Direction.BOTTOM_LEFT,
    Direction.LEFT,
    Direction.TOP_LEFT,
)


def _is_integer_pair(pair: Any) -> bool:
    if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
        return False
    # bool is a subclass of int, but True/False are not board positions
    return all(isinstance(value, int) and not isinstance(value, bool) for value in pair)
