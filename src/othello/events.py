"""
Events the game engine publishes, and the channel that delivers them.

Listeners subscribe per event type and are called synchronously, in registration order,
before the engine call that triggered the event returns. No queueing.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from src.core.shared_types import Color, EventType, StateChangeAction
from src.othello.coordinate import Coordinate
from src.othello.state import GameState, Move


@dataclass(frozen=True)
class MoveEvent:
    move: Move
    state: GameState
    type: EventType = field(default=EventType.MOVE, init=False)


@dataclass(frozen=True)
class InvalidMoveEvent:
    # whatever the caller passed in when it could not be read as a Coordinate
    coordinate: Coordinate | Any
    error: str
    type: EventType = field(default=EventType.INVALID_MOVE, init=False)


@dataclass(frozen=True)
class GameOverEvent:
    winner: Optional[Color]
    state: GameState
    type: EventType = field(default=EventType.GAME_OVER, init=False)


@dataclass(frozen=True)
class StateChangeEvent:
    state: GameState
    action: Optional[StateChangeAction] = None
    type: EventType = field(default=EventType.STATE_CHANGE, init=False)


GameEvent = MoveEvent | InvalidMoveEvent | GameOverEvent | StateChangeEvent
Listener = Callable[[GameEvent], None]


class EventChannel:
    """Publish/subscribe keyed by EventType"""

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = {
            event_type: [] for event_type in EventType
        }

    def on(self, event_type: EventType, listener: Listener) -> None:
        self._listeners[EventType(event_type)].append(listener)

    def off(self, event_type: EventType, listener: Listener) -> None:
        """Remove a previously registered listener. Unknown listeners are ignored."""
        listeners = self._listeners[EventType(event_type)]
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners[EventType(event_type)])

    def emit(self, event: GameEvent) -> None:
        """
        Call every listener of the event's type.

        NOTE iterates over a copy: a listener that (un)subscribes while being called does not change who receives this event.
        NOTE exceptions raised by a listener propagate to the caller of emit (remaining listeners are skipped).
        """
        for listener in list(self._listeners[event.type]):
            listener(event)
