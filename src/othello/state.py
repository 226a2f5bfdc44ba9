"""
Records the game engine hands out (Move, GameState) and keeps for itself (GameSnapshot).
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.shared_types import Color
from src.othello.board import Board, Score
from src.othello.coordinate import Coordinate


@dataclass(frozen=True)
class Move:
    """One executed turn. Appended to the history once, never changed afterwards."""

    player: Color
    coordinate: Coordinate
    timestamp: int  # epoch milliseconds
    score_after: Score


@dataclass(frozen=True)
class GameState:
    """
    Read-only view of the game, assembled on request.
    ---

    The board and move history are copies: changing them does not affect the game.
    NOTE winner is None both for a tie and for a game still in progress. Check is_game_over to tell them apart.
    """

    board: Board
    score: Score
    valid_moves: list[Coordinate]
    is_game_over: bool
    winner: Optional[Color]
    move_history: list[Move]
    current_player: Color
    must_pass: bool = False
    black_player_id: Optional[str] = None
    white_player_id: Optional[str] = None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything needed to put the game back to an earlier point (for undo/redo)."""

    board: Board
    move_history: tuple[Move, ...]

    @classmethod
    def capture(cls, board: Board, move_history: list[Move]) -> Self:
        return cls(board.copy(), tuple(move_history))

    def restore_board(self) -> Board:
        """Hand out a fresh copy, so the snapshot itself stays intact if it gets restored again later"""
        return self.board.copy()
