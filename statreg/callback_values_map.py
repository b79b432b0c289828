"""Thread-safe maps of named callbacks that produce values on demand."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from .regex_util import RegexKeyCache

T = TypeVar("T")

_log = logging.getLogger(__name__)


class UnregisteredCallbackError(LookupError):
    """Raised when a callback entry has been cleared."""


class CallbackEntry(Generic[T]):
    """A callback that can be cleared while others still hold a reference."""

    def __init__(self, callback: Callable[[], T]) -> None:
        self._lock = threading.RLock()
        self._callback: Callable[[], T] | None = callback

    def clear(self) -> None:
        """Drop the callback; later calls to :meth:`get_value` raise."""
        with self._lock:
            self._callback = None

    def get_value(self) -> T:
        """Invoke the callback and return its result."""
        with self._lock:
            if self._callback is None:
                raise UnregisteredCallbackError("callback has been unregistered")
            return self._callback()


class CallbackValuesMap(Generic[T]):
    """Maps names to callbacks; values are computed when read."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._map: dict[str, CallbackEntry[T]] = {}
        self._regex_cache = RegexKeyCache()

    def get_values(self) -> dict[str, T]:
        """Invoke every callback and return the results ordered by name."""
        # Callbacks run outside the map lock so they cannot deadlock with it.
        with self._lock:
            entries = sorted(self._map.items())
        values: dict[str, T] = {}
        for name, entry in entries:
            try:
                values[name] = entry.get_value()
            except UnregisteredCallbackError:
                continue
        return values

    def get_value(self, name: str) -> T | None:
        """Invoke the named callback, or return None if it is not registered."""
        with self._lock:
            entry = self._map.get(name)
        if entry is None:
            return None
        try:
            return entry.get_value()
        except UnregisteredCallbackError:
            return None

    def contains(self, name: str) -> bool:
        """Return True if a callback is registered under ``name``."""
        with self._lock:
            return name in self._map

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def keys(self) -> list[str]:
        """Return all registered names in sorted order."""
        with self._lock:
            return sorted(self._map)

    def regex_keys(self, regex: str) -> list[str]:
        """Return the registered names that fully match ``regex``."""
        return self._regex_cache.get_regex_keys(regex, self.keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._map)

    def register_callback(self, name: str, callback: Callable[[], T]) -> None:
        """Register ``callback`` under ``name``, replacing any previous one."""
        with self._lock:
            self._map[name] = CallbackEntry(callback)
            self._regex_cache.bump_epoch()

    def unregister_callback(self, name: str) -> bool:
        """Remove the named callback; return False if it was not registered."""
        with self._lock:
            entry = self._map.pop(name, None)
            if entry is None:
                return False
            entry.clear()
            self._regex_cache.bump_epoch()
        _log.debug("Unregistered callback: %s", name)
        return True

    def clear(self) -> None:
        """Unregister all callbacks."""
        with self._lock:
            for entry in self._map.values():
                entry.clear()
            self._regex_cache.bump_epoch()
            self._map.clear()

    def get_callback(self, name: str) -> CallbackEntry[T] | None:
        """Return the entry registered under ``name``, or None."""
        with self._lock:
            return self._map.get(name)


class DynamicCounters(CallbackValuesMap[int]):
    """Integer-valued callbacks, with counter-named accessors."""

    def get_counters(self) -> dict[str, int]:
        """Return every counter value ordered by name."""
        return self.get_values()

    def get_counter(self, name: str) -> int | None:
        """Return the named counter's value, or None if absent."""
        return self.get_value(name)


class DynamicStrings(CallbackValuesMap[str]):
    """String-valued callbacks."""