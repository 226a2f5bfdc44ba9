"""
The OthelloGame class is the entrypoint into the domain layer.
It owns the board and the move history, orchestrates the rules for every player action,
keeps the undo/redo stacks, and publishes events a presentation layer can render from.

Callers never touch the board or the rules directly: everything goes through this class.
"""

import logging
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from src.core.exceptions import GameOverError, IllegalMoveError, InvalidSavedGameError
from src.core.models import SavedBoard, SavedGame, SavedMove, SavedScore
from src.core.shared_types import Color, EventType, StateChangeAction, TileValue
from src.othello.board import Board, Score
from src.othello.coordinate import Coordinate
from src.othello.events import (
    EventChannel,
    GameOverEvent,
    InvalidMoveEvent,
    Listener,
    MoveEvent,
    StateChangeEvent,
)
from src.othello.rules import (
    get_annotated_board,
    get_valid_moves,
    get_winner,
    is_game_over,
    pass_turn,
    score,
    take_turn,
)
from src.othello.state import GameSnapshot, GameState, Move

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
CoordinateLike = Coordinate | Sequence[int]


def epoch_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class Status(Enum):
    IN_PROGRESS = auto()
    CONCLUDED = auto()


class OthelloGame:
    """
    Othello game session: one board, one history, one set of listeners.
    ----

    Single threaded and synchronous. Listeners are called inline, before the triggering method returns.
    If several sessions are served concurrently, every session needs its own instance (and its own lock).
    """

    def __init__(
        self,
        black_player_id: Optional[str] = None,
        white_player_id: Optional[str] = None,
        initial_tiles: Optional[Sequence[Sequence[TileValue | str]]] = None,
        player_turn: Color = Color.BLACK,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Start a game in the canonical starting position, or on `initial_tiles` when loading a position.
        No events are emitted.
        """
        self._board = (
            Board.from_tiles(initial_tiles, player_turn)
            if initial_tiles is not None
            else Board.starting_position()
        )
        self._move_history: list[Move] = []
        self._undo_stack: list[GameSnapshot] = []
        self._redo_stack: list[GameSnapshot] = []
        self._events = EventChannel()
        self._black_player_id = black_player_id
        self._white_player_id = white_player_id
        self._clock: Clock = clock or epoch_millis

    # --- EVENTS ---
    def on(self, event_type: EventType, listener: Listener) -> None:
        self._events.on(event_type, listener)

    def off(self, event_type: EventType, listener: Listener) -> None:
        self._events.off(event_type, listener)

    # --- PLAYER ACTIONS ---
    def make_move(self, coordinate: CoordinateLike) -> bool:
        """
        Attempt to place a piece for the player to move.
        -----

        1. Take a snapshot of the game before the move.
        2. Read the coordinate and let the rules execute the move.
        3. Illegal (a malformed coordinate included)? Emit invalidMove and return False. Nothing changed (the redo stack is kept as well).
        4. Legal? Commit the snapshot to the undo stack, clear the redo stack (a new move starts a new branch),
           record the move, emit move + stateChange, and gameOver if this move ended the game.
        """
        mover = self._board.player_turn
        snapshot = self._create_snapshot()
        target: Optional[Coordinate] = None

        try:
            target = self._to_coordinate(coordinate)
            self._assert_in_progress()
            flipped = take_turn(self._board, target)
        except IllegalMoveError as exc:
            rejected = target if target is not None else coordinate
            logger.debug(
                "Rejected move %s by %s: %s",
                target.to_pair() if target is not None else repr(coordinate),
                mover.name,
                exc,
            )
            self._events.emit(InvalidMoveEvent(coordinate=rejected, error=str(exc)))
            return False

        self._undo_stack.append(snapshot)
        self._redo_stack.clear()

        move = Move(
            player=mover,
            coordinate=target,
            timestamp=self._clock(),
            score_after=score(self._board),
        )
        self._move_history.append(move)
        logger.debug(
            "%s played %s, flipping %d piece(s)", mover.name, target.to_pair(), flipped
        )

        self._events.emit(MoveEvent(move=move, state=self.get_state()))
        self._events.emit(StateChangeEvent(state=self.get_state()))

        if is_game_over(self._board):
            winner = get_winner(self._board)
            logger.info(
                "Game over after %d moves. Winner: %s",
                len(self._move_history),
                winner.name if winner else "none (tie)",
            )
            self._events.emit(GameOverEvent(winner=winner, state=self.get_state()))
        return True

    def pass_turn(self) -> bool:
        """
        Skip the turn of a player without legal moves (the opponent still has some).
        ---

        Returns False, without changing anything, when the player to move can still move or the game is over.
        A pass is undoable but does not show up in the move history.
        """
        snapshot = self._create_snapshot()
        try:
            pass_turn(self._board)
        except IllegalMoveError as exc:
            logger.debug("Rejected pass: %s", exc)
            return False

        self._undo_stack.append(snapshot)
        self._redo_stack.clear()
        logger.debug("%s passed", snapshot.board.player_turn.name)
        self._events.emit(
            StateChangeEvent(state=self.get_state(), action=StateChangeAction.PASS)
        )
        return True

    def undo(self) -> bool:
        """Step back to the state before the last move (or pass). False if there is nothing to undo."""
        if not self._undo_stack:
            return False

        self._redo_stack.append(self._create_snapshot())
        self._restore_snapshot(self._undo_stack.pop())
        logger.debug("Undo: %d move(s) in history", len(self._move_history))
        self._events.emit(
            StateChangeEvent(state=self.get_state(), action=StateChangeAction.UNDO)
        )
        return True

    def redo(self) -> bool:
        """Re-apply the last undone step. False if there is nothing to redo."""
        if not self._redo_stack:
            return False

        self._undo_stack.append(self._create_snapshot())
        self._restore_snapshot(self._redo_stack.pop())
        logger.debug("Redo: %d move(s) in history", len(self._move_history))
        self._events.emit(
            StateChangeEvent(state=self.get_state(), action=StateChangeAction.REDO)
        )
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def reset(self) -> None:
        """Back to the canonical starting position: empty history, nothing to undo or redo."""
        self._board = Board.starting_position()
        self._move_history = []
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.info("Game reset")
        self._events.emit(StateChangeEvent(state=self.get_state()))

    # --- QUERIES ---
    def get_state(self) -> GameState:
        """Assembled fresh on every call. Board and history are copies."""
        game_over = is_game_over(self._board)
        valid_moves = get_valid_moves(self._board)
        return GameState(
            board=self._board.copy(),
            score=score(self._board),
            valid_moves=valid_moves,
            is_game_over=game_over,
            winner=get_winner(self._board) if game_over else None,
            move_history=list(self._move_history),
            current_player=self._board.player_turn,
            must_pass=not game_over and not valid_moves,
            black_player_id=self._black_player_id,
            white_player_id=self._white_player_id,
        )

    @property
    def status(self) -> Status:
        return Status.CONCLUDED if is_game_over(self._board) else Status.IN_PROGRESS

    def get_annotated_board(self) -> Board:
        return get_annotated_board(self._board)

    def get_move_history(self) -> list[Move]:
        return list(self._move_history)

    def get_score(self) -> Score:
        return score(self._board)

    def get_valid_moves(self) -> list[Coordinate]:
        return get_valid_moves(self._board)

    def is_game_over(self) -> bool:
        return is_game_over(self._board)

    def get_winner(self) -> Optional[Color]:
        """None while the game is in progress, and for a tie."""
        return get_winner(self._board) if is_game_over(self._board) else None

    def get_player_id(self, color: Color) -> Optional[str]:
        return self._black_player_id if color == Color.BLACK else self._white_player_id

    # --- SAVING / LOADING ---
    def export_state(self) -> str:
        """JSON with keys board, moveHistory, blackPlayerId, whitePlayerId"""
        return self._to_saved_game().model_dump_json(by_alias=True)

    def import_state(self, state_json: str) -> None:
        """
        Replace board, history and player ids with those of an exported game.
        ---

        NOTE both undo and redo stacks get cleared: the old snapshots belong to a different game.
        Raises InvalidSavedGameError (before changing anything) if the payload is malformed.
        """
        try:
            saved = SavedGame.model_validate_json(state_json)
        except ValidationError as exc:
            raise InvalidSavedGameError(f"Cannot import game state: {exc}") from exc

        self._board = Board.from_tiles(saved.board.tiles, saved.board.player_turn)
        self._move_history = [self._move_from_saved(move) for move in saved.move_history]
        self._black_player_id = saved.black_player_id
        self._white_player_id = saved.white_player_id
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.info("Imported game with %d move(s)", len(self._move_history))
        self._events.emit(StateChangeEvent(state=self.get_state()))

    # -- PRIVATE HELPERS ---
    def _to_coordinate(self, coordinate: CoordinateLike) -> Coordinate:
        """Raises InvalidCoordinateError unless the input holds exactly two integers"""
        if isinstance(coordinate, Coordinate):
            return Coordinate.from_pair(coordinate.to_pair())
        return Coordinate.from_pair(coordinate)

    def _assert_in_progress(self) -> None:
        """No more moves once the game has concluded."""
        if is_game_over(self._board):
            raise GameOverError("The game is over. No more moves can be made.")

    def _create_snapshot(self) -> GameSnapshot:
        return GameSnapshot.capture(self._board, self._move_history)

    def _restore_snapshot(self, snapshot: GameSnapshot) -> None:
        self._board = snapshot.restore_board()
        self._move_history = list(snapshot.move_history)

    def _to_saved_game(self) -> SavedGame:
        """Encode into the boundary data model used for export"""
        return SavedGame(
            board=SavedBoard(
                tiles=self._board.tiles, player_turn=self._board.player_turn
            ),
            move_history=[
                SavedMove(
                    player=move.player,
                    coordinate=move.coordinate.to_pair(),
                    timestamp=move.timestamp,
                    score_after=SavedScore(
                        black=move.score_after.black, white=move.score_after.white
                    ),
                )
                for move in self._move_history
            ],
            black_player_id=self._black_player_id,
            white_player_id=self._white_player_id,
        )

    @staticmethod
    def _move_from_saved(saved: SavedMove) -> Move:
        return Move(
            player=saved.player,
            coordinate=Coordinate.from_pair(saved.coordinate),
            timestamp=saved.timestamp,
            score_after=Score(black=saved.score_after.black, white=saved.score_after.white),
        )
