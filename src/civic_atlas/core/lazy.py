"""Construct-once shared values.

Process-wide data (boundary layers, rosters) is built on first use and then
shared read-only by every request. ``LazyValue`` guards the first
construction with a lock so concurrent first callers all receive the same
instance.
"""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNINITIALIZED = object()


class LazyValue(Generic[T]):
    """Thread-safe lazily constructed value.

    The factory runs at most once per successful initialization. If it
    raises, nothing is stored and the next caller retries.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._value: object = _UNINITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self._value is not _UNINITIALIZED

    def get(self) -> T:
        """Return the shared value, constructing it on first access."""
        value = self._value
        if value is _UNINITIALIZED:
            with self._lock:
                value = self._value
                if value is _UNINITIALIZED:
                    value = self._factory()
                    self._value = value
        return value  # type: ignore[return-value]
