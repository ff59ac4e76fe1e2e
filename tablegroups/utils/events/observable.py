"""Module: observable.py

Author: Michael Economou
Date: 2026-10-02

Observable - Qt-like signals for the non-UI layers.

- Signal descriptor for declaring events on a class
- SignalInstance holding the connected callbacks of one object
- Temporary blocking of a signal (initialization, bulk updates)

Callbacks run synchronously in the emitting thread. An exception raised by
one callback is logged and does not prevent the remaining callbacks from
running.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from tablegroups.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

__all__ = ["Observable", "Signal", "SignalInstance"]


class Signal:
    """Descriptor for declaring observable signals.

    Usage:
        class GroupRegistry(Observable):
            group_added = Signal(str)

        registry.group_added.connect(callback)
        registry.group_added.emit("G1")
    """

    def __init__(self, *arg_types: type):
        """Initialize signal with expected argument types (documentation only)."""
        self.arg_types = arg_types
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, _objtype: type | None = None) -> SignalInstance:
        if obj is None:
            return self  # type: ignore[return-value]

        instances = obj.__dict__.setdefault("_signal_instances", {})
        if self.name not in instances:
            instances[self.name] = SignalInstance(self.name, self.arg_types)
        return instances[self.name]


class SignalInstance:
    """Connected callbacks of one signal on one object."""

    def __init__(self, name: str, arg_types: tuple[type, ...]):
        self.name = name
        self.arg_types = arg_types
        self._callbacks: list[Callable[..., Any]] = []
        self._lock = threading.Lock()
        self._block_depth = 0

    def connect(self, callback: Callable[..., Any]) -> None:
        """Connect a callback; connecting the same callback twice is a no-op."""
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)
                logger.debug(
                    "Signal connected: %s -> %s",
                    self.name,
                    getattr(callback, "__name__", repr(callback)),
                    extra={"dev_only": True},
                )

    def disconnect(self, callback: Callable[..., Any] | None = None) -> None:
        """Disconnect a callback, or every callback when None."""
        with self._lock:
            if callback is None:
                self._callbacks.clear()
            elif callback in self._callbacks:
                self._callbacks.remove(callback)

    def receiver_count(self) -> int:
        """Number of connected callbacks."""
        with self._lock:
            return len(self._callbacks)

    @property
    def is_blocked(self) -> bool:
        return self._block_depth > 0

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress emissions of this signal inside the block (nestable)."""
        self._block_depth += 1
        try:
            yield
        finally:
            self._block_depth -= 1

    def emit(self, *args: Any) -> None:
        """Call every connected callback with the given arguments."""
        if self._block_depth:
            return

        with self._lock:
            callbacks = self._callbacks.copy()

        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception(
                    "Error in signal callback: %s -> %s",
                    self.name,
                    getattr(callback, "__name__", repr(callback)),
                )


class Observable:
    """Base class for objects that declare Signal attributes.

        class Counter(Observable):
            value_changed = Signal(int)
    """

    def signals(self) -> dict[str, SignalInstance]:
        """Return every signal declared on the class, bound to this object."""
        result = {}
        for klass in type(self).__mro__:
            for name, attr in vars(klass).items():
                if isinstance(attr, Signal) and name not in result:
                    result[name] = getattr(self, name)
        return result
