"""
Othello rules
-----

Stateless functions: the board is always passed in explicitly.
Only take_turn, flip_tiles and pass_turn write to the board. All other functions leave it untouched.

Key idea: a move is legal when walking from the placed piece along at least one of the eight directions
passes over one or more opponent pieces and then hits a piece of the mover's own color.
Those opponent pieces get captured (flipped).
"""

from typing import Iterable, Optional

from src.core.exceptions import (
    IllegalMoveError,
    NoCapturesError,
    OccupiedSquareError,
    OutOfBoundsError,
)
from src.core.shared_types import Color, TileValue
from src.othello.board import Board, Score
from src.othello.coordinate import DIRECTION_ORDER, Coordinate, Direction


def tile_at(board: Board, coordinate: Coordinate) -> TileValue:
    """Bounds-checked lookup"""
    _assert_within_bounds(coordinate)
    return board.tile(coordinate)


def _assert_within_bounds(coordinate: Coordinate) -> None:
    if not coordinate.is_within_bounds():
        raise OutOfBoundsError(
            f"Coordinate ({coordinate.x}, {coordinate.y}) lies outside the board."
        )


def score(board: Board) -> Score:
    black = 0
    white = 0
    for row in board.tiles:
        for tile in row:
            if tile == TileValue.BLACK:
                black += 1
            elif tile == TileValue.WHITE:
                white += 1
    return Score(black=black, white=white)


def has_adjacent_piece(board: Board, coordinate: Coordinate) -> bool:
    """Is any of the (up to 8) neighbouring cells occupied?"""
    _assert_within_bounds(coordinate)
    for direction in DIRECTION_ORDER:
        neighbour = coordinate.step(direction)
        if not neighbour.is_within_bounds():
            continue
        if board.tile(neighbour) in (TileValue.BLACK, TileValue.WHITE):
            return True
    return False


# --- CAPTURE DETECTION ---
def find_flippable_directions(board: Board, coordinate: Coordinate) -> list[Direction]:
    """
    Directions in which the piece standing on `coordinate` captures opponent pieces.
    ----

    NOTE: assumes the mover's piece already stands on the coordinate. An empty cell has no color and captures nothing.
    Directions are reported in DIRECTION_ORDER.
    """
    color = tile_at(board, coordinate).to_color()
    if color is None:
        return []
    return _flippable_directions(board, coordinate, color)


def _flippable_directions(
    board: Board, coordinate: Coordinate, color: Color
) -> list[Direction]:
    """Same scan, but for a piece of `color` hypothetically placed on the coordinate. Never writes to the board."""
    return [
        direction
        for direction in DIRECTION_ORDER
        if _can_flip_in_direction(board, coordinate, direction, color)
    ]


def _can_flip_in_direction(
    board: Board, start: Coordinate, direction: Direction, color: Color
) -> bool:
    """
    Raycasting along a single direction
    ---

    1. The adjacent cell must hold an opponent piece.
    2. Keep walking over opponent pieces until we hit our own piece (capture) or an empty cell / the edge (no capture).
    """
    own_tile = TileValue.from_color(color)
    opponent_tile = TileValue.from_color(color.opponent)

    current = start.step(direction)
    if not current.is_within_bounds() or board.tile(current) != opponent_tile:
        return False

    while current.is_within_bounds():
        tile = board.tile(current)
        if tile == own_tile:
            return True
        if tile != opponent_tile:
            return False
        current = current.step(direction)
    return False


def flip_tiles(
    board: Board, directions: Iterable[Direction], coordinate: Coordinate
) -> int:
    """
    Turn the captured pieces over to the color of the piece on `coordinate`. Returns the number of flipped pieces.
    ---

    Walks outward along every given direction and stops at the first piece that already has the right color
    (that anchoring piece is left as is).
    """
    flip_to = tile_at(board, coordinate)
    flipped = 0
    for direction in directions:
        current = coordinate.step(direction)
        while current.is_within_bounds() and board.tile(current) != flip_to:
            board.set_tile(current, flip_to)
            flipped += 1
            current = current.step(direction)
    return flipped


# --- MAKING A MOVE ---
def take_turn(board: Board, coordinate: Coordinate) -> int:
    """
    Place a piece for the player to move, capture, and pass the turn to the opponent.
    -----

    1. The cell must be empty.
    2. The placement must capture at least one opponent piece.
    3. Place the piece and flip all captured pieces.
    4. Toggle the player to move.

    Raises OccupiedSquareError / NoCapturesError (and OutOfBoundsError) without touching the board.
    Returns the number of flipped pieces.
    """
    if tile_at(board, coordinate) != TileValue.EMPTY:
        raise OccupiedSquareError("You cannot place a piece on an occupied square.")

    directions = _flippable_directions(board, coordinate, board.player_turn)
    if not directions:
        raise NoCapturesError("This move does not flip any opponent pieces.")

    board.set_tile(coordinate, TileValue.from_color(board.player_turn))
    flipped = flip_tiles(board, directions, coordinate)
    board.player_turn = board.player_turn.opponent
    return flipped


def pass_turn(board: Board) -> None:
    """
    Skip the turn of a player who cannot move, handing it to the opponent.

    Only allowed when the player to move has no legal move and the game is not over.
    """
    if not must_pass(board):
        raise IllegalMoveError(
            f"{board.player_turn.name.capitalize()} cannot pass: either a legal move is available or the game is over."
        )
    board.player_turn = board.player_turn.opponent


def is_valid_move(
    board: Board, coordinate: Coordinate, color: Optional[Color] = None
) -> bool:
    """Could `color` (default: the player to move) legally place a piece here? Side-effect free."""
    if tile_at(board, coordinate) != TileValue.EMPTY:
        return False
    mover = color if color is not None else board.player_turn
    return bool(_flippable_directions(board, coordinate, mover))


def get_valid_moves(board: Board, color: Optional[Color] = None) -> list[Coordinate]:
    """All legal moves in row-major order. Freshly computed on every call."""
    return [
        coordinate
        for coordinate in board.coordinates()
        if is_valid_move(board, coordinate, color)
    ]


def _has_valid_move(board: Board, color: Color) -> bool:
    return any(is_valid_move(board, coordinate, color) for coordinate in board.coordinates())


# --- END OF GAME ---
def is_game_over(board: Board) -> bool:
    """The board is full, or neither player can move. Leaves player_turn alone."""
    if board.is_full():
        return True
    if _has_valid_move(board, board.player_turn):
        return False
    return not _has_valid_move(board, board.player_turn.opponent)


def must_pass(board: Board) -> bool:
    """The player to move has no legal move, but the opponent does: the turn has to be skipped."""
    return not _has_valid_move(board, board.player_turn) and not is_game_over(board)


def get_winner(board: Board) -> Optional[Color]:
    """
    Most pieces wins, equal counts is a tie (None).

    NOTE does not check whether the game is actually over. That is up to the caller.
    """
    current_score = score(board)
    if current_score.black > current_score.white:
        return Color.BLACK
    if current_score.white > current_score.black:
        return Color.WHITE
    return None


# --- PRESENTATION HELPER ---
def get_annotated_board(board: Board) -> Board:
    """Copy of the board where every legal move for the player to move is marked with TileValue.VALID_MOVE"""
    annotated = board.copy()
    for coordinate in board.coordinates():
        if is_valid_move(board, coordinate):
            annotated.set_tile(coordinate, TileValue.VALID_MOVE)
    return annotated
