"""The Board holds the position (the tile on every cell) and whose turn it is. The rules that act on it live in rules.py"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Iterator, Self, Sequence

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color, TileValue
from src.othello.coordinate import BOARD_SIZE, Coordinate

# Two black pieces on one diagonal of the centre, two white pieces on the other
STARTING_POSITION = "/".join(
    [
        "........",
        "........",
        "........",
        "...WB...",
        "...BW...",
        "........",
        "........",
        "........",
    ]
)

TEXT_TO_TILE: dict[str, TileValue] = {
    "B": TileValue.BLACK,
    "W": TileValue.WHITE,
    ".": TileValue.EMPTY,
    "*": TileValue.VALID_MOVE,
}

TILE_TO_TEXT: dict[TileValue, str] = {value: key for key, value in TEXT_TO_TILE.items()}


@dataclass(frozen=True)
class Score:
    """Piece count per color. Always derived from a board, never stored on it."""

    black: int
    white: int

    @property
    def total(self) -> int:
        return self.black + self.white

    def of(self, color: Color) -> int:
        return self.black if color == Color.BLACK else self.white


@dataclass
class Board:
    tiles: list[list[TileValue]]  # rows outer (y), columns inner (x)
    player_turn: Color = Color.BLACK

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_text(STARTING_POSITION)

    @classmethod
    def from_text(cls, text: str, player_turn: Color = Color.BLACK) -> Self:
        """Construct a board from its text notation.

        Rows are read top to bottom and separated by slashes, every row is 8 characters:
        * 'B' a black piece
        * 'W' a white piece
        * '.' an empty cell
        * '*' an empty cell that is a legal move (only used for annotated boards)

        ex. standard starting position:
        ......../......../......../...WB.../...BW.../......../......../........
        """
        rows = text.strip().split("/")
        tiles: list[list[TileValue]] = []
        for row in rows:
            try:
                tiles.append([TEXT_TO_TILE[character] for character in row])
            except KeyError as exc:
                raise InvalidBoardError(
                    f"Unknown tile character {exc.args[0]!r} in row {row!r}."
                ) from exc
        return cls.from_tiles(tiles, player_turn, allow_markers=True)

    def to_text(self) -> str:
        return "/".join("".join(TILE_TO_TEXT[tile] for tile in row) for row in self.tiles)

    @classmethod
    def from_tiles(
        cls,
        tiles: Sequence[Sequence[TileValue | str]],
        player_turn: Color = Color.BLACK,
        allow_markers: bool = False,
    ) -> Self:
        """
        Construct a board from a grid of tiles (or their single character codes, 'B', 'W', 'E', 'P').
        ---

        The grid gets copied, so the caller keeps no handle on the tiles of the new board.
        Markers for legal moves are only accepted when explicitly allowed: a board the game plays on must never contain them.
        """
        if len(tiles) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in tiles):
            raise InvalidBoardError(
                f"A board must have {BOARD_SIZE} rows of {BOARD_SIZE} tiles."
            )
        try:
            grid = [[TileValue(tile) for tile in row] for row in tiles]
        except ValueError as exc:
            raise InvalidBoardError(str(exc)) from exc

        if not allow_markers and any(
            tile == TileValue.VALID_MOVE for row in grid for tile in row
        ):
            raise InvalidBoardError(
                "Valid move markers are only allowed on an annotated board."
            )
        return cls(grid, Color(player_turn))

    def copy(self) -> Self:
        """Deep copy: mutating the tiles of the copy never touches this board."""
        return type(self)(deepcopy(self.tiles), self.player_turn)

    def tile(self, coordinate: Coordinate) -> TileValue:
        """Unchecked lookup. Use rules.tile_at for a bounds-checked one."""
        return self.tiles[coordinate.y][coordinate.x]

    def set_tile(self, coordinate: Coordinate, value: TileValue) -> None:
        self.tiles[coordinate.y][coordinate.x] = value

    def coordinates(self) -> Iterator[Coordinate]:
        """Row-major scan: y outer loop, x inner loop (the same order the tiles are stored in)"""
        for y, row in enumerate(self.tiles):
            for x in range(len(row)):
                yield Coordinate(x, y)

    def empty_count(self) -> int:
        return sum(tile == TileValue.EMPTY for row in self.tiles for tile in row)

    def is_full(self) -> bool:
        return self.empty_count() == 0

    def __str__(self) -> str:
        """Grid printout, handy in debug logs and failing test output"""
        return "\n".join(self.to_text().split("/")) + f"\nto move: {self.player_turn.name.lower()}"
