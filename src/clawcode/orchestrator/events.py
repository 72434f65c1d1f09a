"""Progress events emitted while a task runs."""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    PLANNING = "planning"
    PLAN = "plan"
    READ_FILE = "read_file"
    PATCH_FAILED = "patch_failed"
    DIFFS = "diffs"
    WRITE_FILE = "write_file"
    RUN_COMMAND = "run_command"
    SUCCESS = "success"
    ERROR = "error"


Listener = Callable[[dict[str, Any]], None]


class AgentEmitter:
    """Synchronous per-event listener registry.

    Listeners run in registration order on the emitting thread. A listener
    that raises is logged and the remaining listeners still run.
    """

    def __init__(self):
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)

    def on(self, event: EventType, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``event``.

        Returns:
            A no-argument callable that unregisters the listener.
        """
        self._listeners[event].append(listener)
        return lambda: self.off(event, listener)

    def off(self, event: EventType, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: EventType, payload: dict[str, Any] | None = None) -> None:
        data = payload if payload is not None else {}
        # Copy so listeners may unsubscribe while handling the event
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(data)
            except Exception:
                logger.exception("Listener for %s event failed", event.value)

    def listener_count(self, event: EventType) -> int:
        return len(self._listeners.get(event, []))
