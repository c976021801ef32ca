"""Actions — typed messages describing an intended state change.

An action is a plain mapping: {"type": str, "payload": Any}. When the store
dispatches it, it works on a copy carrying the CHAINED marker, which tells
subscribers whether the action was dispatched directly or by a chain rule.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

CHAINED = "@@chained"


def create_action(type: str, payload: Any = None) -> dict[str, Any]:
    """Build an action mapping.

    Usage:
        store.dispatch(create_action("INC", {"amount": 5}))
    """
    return {"type": type, "payload": payload}


def is_chained(action: Mapping) -> bool:
    """True if the store dispatched this action from a chain rule."""
    return bool(action.get(CHAINED, False))


def mark(action: Mapping, chained: bool) -> dict[str, Any]:
    """Copy action with the chained marker set. The original is left untouched."""
    if not isinstance(action, Mapping):
        raise TypeError("Expected a mapping")
    return {**action, CHAINED: chained}
