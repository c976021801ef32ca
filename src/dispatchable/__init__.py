"""Dispatchable: a synchronous, reducer-driven state store for Python."""

from importlib.metadata import version as _version

__version__ = _version("dispatchable")

from dispatchable.action import CHAINED, create_action, is_chained, mark
from dispatchable.emitter import EventEmitter, Notifier
from dispatchable.store import DispatchableStore

__all__ = [
    "CHAINED",
    "create_action",
    "is_chained",
    "mark",
    "EventEmitter",
    "Notifier",
    "DispatchableStore",
]
