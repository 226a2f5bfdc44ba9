"""Unit tests for /src/othello/rules.py"""

from typing import Callable

import pytest

from src.core.exceptions import (
    IllegalMoveError,
    NoCapturesError,
    OccupiedSquareError,
    OutOfBoundsError,
)
from src.core.shared_types import Color, TileValue
from src.othello.board import Board, Score
from src.othello.coordinate import Coordinate, Direction
from src.othello.rules import (
    find_flippable_directions,
    flip_tiles,
    get_annotated_board,
    get_valid_moves,
    get_winner,
    has_adjacent_piece,
    is_game_over,
    is_valid_move,
    must_pass,
    pass_turn,
    score,
    take_turn,
    tile_at,
)

BoardFactory = Callable[..., Board]

# Placing black on (2, 2) captures along three directions (top, left, top-left)
THREE_WAY_CAPTURE = ("B.B.....", ".WW.....", "BW......")


@pytest.fixture
def start() -> Board:
    return Board.starting_position()


# -- LOOKUP / SCORING --
def test_tile_at(start: Board) -> None:
    assert tile_at(start, Coordinate(3, 3)) == TileValue.WHITE
    assert tile_at(start, Coordinate(0, 0)) == TileValue.EMPTY


@pytest.mark.parametrize(
    "coordinate", [Coordinate(8, 0), Coordinate(0, 8), Coordinate(-1, 3)]
)
def test_tile_at_out_of_bounds(start: Board, coordinate: Coordinate) -> None:
    """Explicit error instead of an IndexError (or, for negative numbers, silently wrapping around)"""
    with pytest.raises(OutOfBoundsError):
        _ = tile_at(start, coordinate)


def test_score_starting_position(start: Board) -> None:
    assert score(start) == Score(black=2, white=2)


def test_score_ignores_markers(start: Board) -> None:
    assert score(get_annotated_board(start)) == Score(black=2, white=2)


@pytest.mark.parametrize(
    "coordinate, expected",
    [
        (Coordinate(2, 2), True),  # diagonal neighbour of (3, 3)
        (Coordinate(5, 5), True),  # diagonal neighbour of (4, 4)
        (Coordinate(2, 3), True),
        (Coordinate(0, 0), False),
        (Coordinate(1, 3), False),
        (Coordinate(7, 7), False),
    ],
)
def test_has_adjacent_piece(start: Board, coordinate: Coordinate, expected: bool) -> None:
    assert has_adjacent_piece(start, coordinate) == expected


@pytest.mark.parametrize(
    "coordinate", [Coordinate(8, 0), Coordinate(0, 8), Coordinate(-1, 4), Coordinate(4, -1)]
)
def test_has_adjacent_piece_out_of_bounds(start: Board, coordinate: Coordinate) -> None:
    """(-1, 4) sits right next to the edge: a negative x must not wrap around to the last column"""
    with pytest.raises(OutOfBoundsError):
        _ = has_adjacent_piece(start, coordinate)


# -- CAPTURE DETECTION --
def test_find_flippable_directions_in_fixed_order(board_from_rows: BoardFactory) -> None:
    """The mover's piece already stands on (2, 2)"""
    board = board_from_rows("B.B.....", ".WW.....", "BWB.....")
    assert find_flippable_directions(board, Coordinate(2, 2)) == [
        Direction.TOP,
        Direction.LEFT,
        Direction.TOP_LEFT,
    ]


def test_find_flippable_directions_for_white(board_from_rows: BoardFactory) -> None:
    """Direction detection uses the color of the placed piece, not whose turn it is"""
    board = board_from_rows("WBBW....")
    assert find_flippable_directions(board, Coordinate(0, 0)) == [Direction.RIGHT]
    assert find_flippable_directions(board, Coordinate(3, 0)) == [Direction.LEFT]


def test_find_flippable_directions_on_empty_cell(start: Board) -> None:
    assert find_flippable_directions(start, Coordinate(2, 3)) == []


@pytest.mark.parametrize(
    "rows",
    [
        ("BWW.....",),  # run of opponent pieces ends on an empty cell
        ("BWWWWWWW",),  # run of opponent pieces runs off the board
        ("BB......",),  # adjacent piece is your own
        ("B.W.B...",),  # adjacent cell is empty
    ],
)
def test_no_flippable_direction(board_from_rows: BoardFactory, rows: tuple[str]) -> None:
    board = board_from_rows(*rows)
    assert find_flippable_directions(board, Coordinate(0, 0)) == []


def test_flip_tiles_stops_at_anchor(board_from_rows: BoardFactory) -> None:
    """Only the opponent pieces between the placed piece and the first own piece get flipped"""
    board = board_from_rows("BWWBWW..")
    flipped = flip_tiles(board, [Direction.RIGHT], Coordinate(0, 0))
    assert flipped == 2
    assert board.to_text().split("/")[0] == "BBBBWW.."


def test_flip_tiles_multiple_directions(board_from_rows: BoardFactory) -> None:
    board = board_from_rows("B.B.....", ".WW.....", "BWB.....")
    directions = find_flippable_directions(board, Coordinate(2, 2))
    assert flip_tiles(board, directions, Coordinate(2, 2)) == 3
    assert board.to_text().split("/")[:3] == ["B.B.....", ".BB.....", "BBB....."]


# -- MAKING A MOVE --
def test_take_turn_first_move(start: Board) -> None:
    flipped = take_turn(start, Coordinate(2, 3))

    assert flipped == 1
    assert start.tile(Coordinate(2, 3)) == TileValue.BLACK
    assert start.tile(Coordinate(3, 3)) == TileValue.BLACK
    assert start.player_turn == Color.WHITE
    assert score(start) == Score(black=4, white=1)


def test_take_turn_captures_in_every_direction(board_from_rows: BoardFactory) -> None:
    board = board_from_rows(*THREE_WAY_CAPTURE)
    before = score(board)

    flipped = take_turn(board, Coordinate(2, 2))

    after = score(board)
    assert flipped == 3
    assert after.black == before.black + 1 + flipped
    assert after.white == before.white - flipped
    assert board.player_turn == Color.WHITE


def test_take_turn_occupied_square(start: Board) -> None:
    before = start.copy()
    with pytest.raises(OccupiedSquareError):
        take_turn(start, Coordinate(3, 3))
    assert start == before


def test_take_turn_without_captures(start: Board) -> None:
    """Nothing gets left behind on the board after a rejected move, and it is still black's turn"""
    before = start.copy()
    with pytest.raises(NoCapturesError):
        take_turn(start, Coordinate(0, 0))
    assert start == before


def test_take_turn_out_of_bounds(start: Board) -> None:
    with pytest.raises(OutOfBoundsError):
        take_turn(start, Coordinate(8, 8))


def test_rule_errors_are_illegal_moves() -> None:
    """The engine catches the whole family in one go"""
    for error in (OccupiedSquareError, NoCapturesError, OutOfBoundsError):
        assert issubclass(error, IllegalMoveError)


# -- LEGAL MOVES --
def test_valid_moves_starting_position(start: Board) -> None:
    """Black's four opening moves, reported in row-major order"""
    assert get_valid_moves(start) == [
        Coordinate(3, 2),
        Coordinate(2, 3),
        Coordinate(5, 4),
        Coordinate(4, 5),
    ]


def test_valid_moves_for_other_color(start: Board) -> None:
    assert get_valid_moves(start, Color.WHITE) == [
        Coordinate(4, 2),
        Coordinate(5, 3),
        Coordinate(2, 4),
        Coordinate(3, 5),
    ]
    assert start.player_turn == Color.BLACK


def test_valid_moves_after_first_move(start: Board) -> None:
    take_turn(start, Coordinate(2, 3))
    assert get_valid_moves(start) == [
        Coordinate(2, 2),
        Coordinate(4, 2),
        Coordinate(2, 4),
    ]


@pytest.mark.parametrize(
    "coordinate, expected",
    [
        (Coordinate(2, 3), True),
        (Coordinate(0, 0), False),  # no capture
        (Coordinate(3, 3), False),  # occupied
        (Coordinate(2, 2), False),  # diagonal to a white piece, but nothing behind it
    ],
)
def test_is_valid_move(start: Board, coordinate: Coordinate, expected: bool) -> None:
    before = start.copy()
    assert is_valid_move(start, coordinate) == expected
    assert start == before


# -- END OF GAME --
def test_starting_position_not_over(start: Board) -> None:
    assert not is_game_over(start)


def test_game_over_on_full_board() -> None:
    board = Board.from_text("/".join(["BBBBWWWW"] * 8))
    assert is_game_over(board)
    assert get_winner(board) is None


def test_game_over_when_nobody_can_move(board_from_rows: BoardFactory) -> None:
    """Only black pieces left: neither color can capture anything"""
    board = board_from_rows("BBB.....", player_turn=Color.WHITE)
    assert is_game_over(board)
    assert board.player_turn == Color.WHITE
    assert get_winner(board) == Color.BLACK


def test_not_over_when_only_opponent_can_move(board_from_rows: BoardFactory) -> None:
    """White cannot move, black can: the game goes on (white has to pass)"""
    board = board_from_rows("BW......", player_turn=Color.WHITE)
    assert not is_game_over(board)
    assert board.player_turn == Color.WHITE
    assert must_pass(board)


def test_must_pass_false_when_player_can_move(start: Board) -> None:
    assert not must_pass(start)


def test_pass_turn(board_from_rows: BoardFactory) -> None:
    board = board_from_rows("BW......", player_turn=Color.WHITE)
    pass_turn(board)
    assert board.player_turn == Color.BLACK
    assert get_valid_moves(board) == [Coordinate(2, 0)]


def test_cannot_pass_with_legal_moves(start: Board) -> None:
    with pytest.raises(IllegalMoveError):
        pass_turn(start)
    assert start.player_turn == Color.BLACK


def test_cannot_pass_when_game_over(board_from_rows: BoardFactory) -> None:
    board = board_from_rows("BBB.....", player_turn=Color.WHITE)
    with pytest.raises(IllegalMoveError):
        pass_turn(board)


@pytest.mark.parametrize(
    "rows, expected",
    [
        (("BBW.....",), Color.BLACK),
        (("BWW.....",), Color.WHITE),
        (("BW......",), None),
    ],
)
def test_get_winner(
    board_from_rows: BoardFactory, rows: tuple[str], expected: Color | None
) -> None:
    """NOTE get_winner does not check the game is over, it only compares counts"""
    assert get_winner(board_from_rows(*rows)) == expected


# -- ANNOTATED BOARD --
def test_annotated_board_marks_valid_moves(start: Board) -> None:
    annotated = get_annotated_board(start)
    assert annotated.to_text().split("/")[2:6] == [
        "...*....",
        "..*WB...",
        "...BW*..",
        "....*...",
    ]
    assert annotated.player_turn == start.player_turn


def test_annotated_board_is_idempotent_and_leaves_board_alone(start: Board) -> None:
    before = start.copy()
    first = get_annotated_board(start)
    second = get_annotated_board(start)

    assert first == second
    assert start == before
    assert all(tile != TileValue.VALID_MOVE for row in start.tiles for tile in row)
