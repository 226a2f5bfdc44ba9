"""
Boundary layer data model(s).

The exported game state: the portable text form a game gets saved to and loaded from.
Keys are camelCase on the wire (board, moveHistory, blackPlayerId, whitePlayerId, playerTurn, scoreAfter).
Validation happens here, so the game engine only ever gets to see a well-formed payload.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.shared_types import Color, TileValue

# Kept here rather than imported from the domain layer: the wire format should not shift if the domain does.
SAVED_BOARD_SIZE = 8


class SavedModel(BaseModel):
    """Shared config: camelCase aliases, snake_case names accepted as well"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SavedScore(SavedModel):
    black: int
    white: int


class SavedMove(SavedModel):
    player: Color
    coordinate: tuple[int, int]
    timestamp: int
    score_after: SavedScore

    @field_validator("coordinate")
    @classmethod
    def validate_coordinate(cls, value: tuple[int, int]) -> tuple[int, int]:
        x, y = value
        if not (0 <= x < SAVED_BOARD_SIZE and 0 <= y < SAVED_BOARD_SIZE):
            raise ValueError(f"Coordinate {list(value)} lies outside the board.")
        return value


class SavedBoard(SavedModel):
    tiles: list[list[TileValue]]
    player_turn: Color

    @field_validator("tiles")
    @classmethod
    def validate_tiles(cls, value: list[list[TileValue]]) -> list[list[TileValue]]:
        if len(value) != SAVED_BOARD_SIZE or any(
            len(row) != SAVED_BOARD_SIZE for row in value
        ):
            raise ValueError(
                f"Board must have {SAVED_BOARD_SIZE} rows of {SAVED_BOARD_SIZE} tiles."
            )
        if any(tile == TileValue.VALID_MOVE for row in value for tile in row):
            raise ValueError("A saved board cannot contain valid move markers.")
        return value


class SavedGame(SavedModel):
    board: SavedBoard
    move_history: list[SavedMove]
    black_player_id: Optional[str] = None
    white_player_id: Optional[str] = None
