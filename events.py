from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

COLLECTIBLE_ACQUIRED = "collectible_acquired"
MAZE_FINISHED = "maze_finished"
MOVE_REJECTED_EXIT_LOCKED = "move_rejected_exit_locked"
STATE_CHANGED = "state_changed"
GAME_STARTED = "game_started"

Handler = Callable[..., None]


class EventBus:
    """Named-event observer registry. Emitting with no subscribers is fine."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._handlers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, **payload: Any) -> None:
        if name != STATE_CHANGED:
            logger.debug("event %s %s", name, payload)
        for handler in list(self._handlers.get(name, [])):
            handler(**payload)
