"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple modules.
"""

from typing import Callable

import pytest

from src.core.shared_types import Color
from src.othello.board import Board
from src.othello.game import OthelloGame

EMPTY_ROW = "........"
FIXED_TIMESTAMP = 1_700_000_000_000


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    """Every move gets the same timestamp, so recorded moves can be compared directly."""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def game(fixed_clock: Callable[[], int]) -> OthelloGame:
    """Fresh game in the starting position"""
    return OthelloGame("black player", "white player", clock=fixed_clock)


@pytest.fixture
def board_from_rows() -> Callable[..., Board]:
    """
    Call the inner function with the top rows of the board (text notation, one string per row).
    Missing rows at the bottom are filled up with empty rows.
    """

    def _create_board(*rows: str, player_turn: Color = Color.BLACK) -> Board:
        all_rows = list(rows) + [EMPTY_ROW] * (8 - len(rows))
        return Board.from_text("/".join(all_rows), player_turn)

    return _create_board
