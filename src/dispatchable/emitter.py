"""Synchronous event emitter — the publish/subscribe primitive under the store.

Listeners are registered per event name and fired in registration order,
in-process, on the caller's thread. No wildcards, no persistence.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Protocol

logger = logging.getLogger("dispatchable.emitter")

Listener = Callable[[Any], None]


class Notifier(Protocol):
    """What DispatchableStore needs from its change-notification mechanism."""

    def on(self, event: str, listener: Listener) -> Any: ...

    def off(self, event: str, listener: Listener) -> Any: ...

    def emit(self, event: str, payload: Any) -> Any: ...


class EventEmitter:
    """Named-event pub/sub with a listener-leak warning."""

    def __init__(self, max_listeners: int | None = 100) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._max_listeners = max_listeners
        self._leak_warned: set[str] = set()

    @property
    def max_listeners(self) -> int | None:
        return self._max_listeners

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Register listener for event. The same listener may be added twice."""
        listeners = self._listeners[event]
        listeners.append(listener)
        if (
            self._max_listeners
            and len(listeners) > self._max_listeners
            and event not in self._leak_warned
        ):
            self._leak_warned.add(event)
            logger.warning(
                "Possible listener leak: %d listeners added for '%s' (max %d)",
                len(listeners), event, self._max_listeners,
            )
        return self

    def off(self, event: str, listener: Listener) -> EventEmitter:
        """Remove the first registration of listener. Unknown listeners are ignored."""
        listeners = self._listeners.get(event)
        if listeners is None:
            return self
        try:
            listeners.remove(listener)
        except ValueError:
            pass  # already removed
        if not listeners:
            del self._listeners[event]
        return self

    def emit(self, event: str, payload: Any = None) -> bool:
        """Call every listener for event with payload. Returns True if any ran.

        The listener list is snapshotted first: listeners added or removed
        by a listener take effect on the next emit.
        """
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(payload)
        return bool(listeners)

    def listeners(self, event: str) -> list[Listener]:
        return list(self._listeners.get(event, ()))

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def remove_all_listeners(self, event: str | None = None) -> EventEmitter:
        if event is None:
            self._listeners.clear()
            self._leak_warned.clear()
        else:
            self._listeners.pop(event, None)
            self._leak_warned.discard(event)
        return self

    def __repr__(self) -> str:
        counts = {event: len(ls) for event, ls in self._listeners.items()}
        return f"EventEmitter({counts!r})"
