"""
Event bus for Minesweeper game.

The board and session publish named events; a presentation layer
subscribes handlers to update panels and counters.
"""
import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)


# ============================================================================
# Event Names
# ============================================================================

class GameEvent(str, Enum):
    """Event names published by the engine. The values are the wire names."""

    GAME_WON = "game-won"
    GAME_OVER = "game-over"
    MINE_MARKED = "mine-marked"
    GAME_RESTARTED = "game-restarted"


Handler = Callable[..., Any]
EventName = Union[GameEvent, str]


# ============================================================================
# Event Bus
# ============================================================================

class EventBus:
    """
    Synchronous observer list keyed by event name.

    Handlers run in subscription order on the emitting thread. Exceptions
    raised by a handler propagate to the caller of emit.
    """

    def __init__(self) -> None:
        self._handlers: Dict[GameEvent, List[Handler]] = defaultdict(list)

    @staticmethod
    def _resolve(event: EventName) -> GameEvent:
        try:
            return GameEvent(event)
        except ValueError:
            raise ValueError(f"Unknown event: {event!r}") from None

    def subscribe(self, event: EventName, handler: Handler) -> None:
        """Register a handler for an event."""
        self._handlers[self._resolve(event)].append(handler)

    def unsubscribe(self, event: EventName, handler: Handler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers[self._resolve(event)]
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: EventName, *payload: Any) -> None:
        """Deliver an event with its payload to every subscribed handler."""
        name = self._resolve(event)
        logger.debug("emit %s%r", name.value, payload)
        for handler in list(self._handlers[name]):
            handler(*payload)

    def handler_count(self, event: EventName) -> int:
        return len(self._handlers[self._resolve(event)])
