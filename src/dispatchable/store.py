"""DispatchableStore — action-dispatching state container.

State is replaced only by reducers run through dispatch(). Subscribers watch
a derived slice of the state and hear about it only when that slice changes.
chain() declares follow-up actions that dispatch() fires automatically.

Everything is synchronous: dispatch() returns after the reducer, every
subscriber notification and every chained dispatch have run.
"""

from __future__ import annotations

import itertools
import logging
import numbers
import threading
from collections.abc import Mapping
from typing import Any, Callable

from dispatchable.action import mark
from dispatchable.emitter import EventEmitter, Notifier

logger = logging.getLogger("dispatchable.store")

CHANGE = "change"

Reducer = Callable[[Any, Any], Any]
StateMapper = Callable[[Any], Any]
Callback = Callable[[Mapping, Any, Any], None]

# Compared by value when both sides share a type; anything else by identity.
_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def _changed(prev: Any, target: Any) -> bool:
    if prev is target:
        return False
    if type(prev) is type(target) and isinstance(prev, _SCALARS):
        return prev != target
    return True


class DispatchableStore:
    """Single-state store driven by reducers, chains and slice subscribers.

    Usage:
        store = DispatchableStore({"count": 0})
        store.register({
            "INC": lambda state, payload: {**state, "count": state["count"] + payload},
        })
        store.chain("INC", {"type": "LOG"})
        store.subscribe(lambda s: s["count"])(
            lambda action, prev, count: print(prev, "->", count)
        )
        store.dispatch({"type": "INC", "payload": 5})
    """

    def __init__(
        self,
        initial_state: Mapping | None = None,
        *,
        emitter: Notifier | None = None,
        max_listeners: int | None = 100,
    ) -> None:
        if initial_state is None:
            initial_state = {}
        if not isinstance(initial_state, Mapping):
            raise TypeError("Expected a mapping")
        self._state = initial_state
        self._emitter = emitter if emitter is not None else EventEmitter(max_listeners)
        self._reducers: dict[str, Reducer] = {}
        self._chains: dict[str, list[Mapping]] = {}
        self._subscribers: dict[int, Callable[[dict], None]] = {}
        self._index = itertools.count()
        self._lock = threading.RLock()

    @property
    def emitter(self) -> Notifier:
        return self._emitter

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get_state(self) -> Any:
        """Shallow copy of the current state. Mutating it never touches the store."""
        return dict(self._state)

    def register(self, reducers: Mapping[str, Reducer]) -> None:
        """Replace the whole reducer table. Earlier registrations are discarded, not merged."""
        if not isinstance(reducers, Mapping):
            raise TypeError("Expected a mapping")
        self._reducers = dict(reducers)

    def dispatch(self, action: Mapping, chained: bool = False) -> None:
        """Run the reducer for action["type"], then every action chained to that type.

        A missing reducer is logged and skipped; chained actions still run.
        Chain cycles are not detected and end in RecursionError.
        """
        act = mark(action, chained)
        action_type = act.get("type")
        with self._lock:
            reducer = self._reducers.get(action_type)
            if callable(reducer):
                self._set_state(reducer(self._state, act.get("payload")), act)
            else:
                logger.warning("'%s' action is not registered in reducer.", action_type)

            for follow_up in list(self._chains.get(action_type, ())):
                logger.debug("Chaining '%s' -> '%s'", action_type, follow_up.get("type"))
                self.dispatch(follow_up, True)

    def chain(self, from_type: str, action: Mapping) -> None:
        """Dispatch action (marked chained) every time from_type is dispatched.

        Appends to the list for from_type; there is no de-duplication and no unchain.
        """
        self._chains.setdefault(from_type, []).append(action)

    def subscribe(self, state_mapper: StateMapper) -> Callable[[Callback], int]:
        """Watch state_mapper(state). Returns register(callback) -> subscriber index.

        callback(action, prev_value, next_value) runs only when the mapped value
        changed. Scalars of the same type compare by value, everything else by
        identity, so a mapper building a fresh dict or list reports a change on
        every dispatch, and 1 -> True counts as a change.
        """

        def register(callback: Callback) -> int:
            if not callable(callback):
                raise TypeError("Expected a callable")

            def subscriber(event: dict) -> None:
                target = state_mapper(event["state"])
                prev_target = state_mapper(event["prev"])
                if _changed(prev_target, target):
                    callback(event["action"], prev_target, target)

            index = next(self._index)
            self._subscribers[index] = subscriber
            self._emitter.on(CHANGE, subscriber)
            return index

        return register

    def unsubscribe(self, index: numbers.Real) -> None:
        """Detach the subscriber at index. Unknown or already-removed indices are ignored."""
        if not isinstance(index, numbers.Real) or isinstance(index, bool):
            raise TypeError("Expected a number")
        subscriber = self._subscribers.pop(index, None)
        if subscriber is not None:
            self._emitter.off(CHANGE, subscriber)

    def _set_state(self, next_state: Any, action: dict) -> None:
        """The only place the state is assigned. Emits one change event."""
        prev = self._state
        self._state = next_state
        self._emitter.emit(CHANGE, {"action": action, "prev": prev, "state": next_state})

    def __repr__(self) -> str:
        return (
            f"DispatchableStore({self._state!r}, "
            f"reducers={len(self._reducers)}, subscribers={len(self._subscribers)})"
        )
