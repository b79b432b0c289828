"""Locking policies and value holders for thread-local stats."""

from __future__ import annotations

import threading

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def add_clamped(a: int, b: int) -> int:
    """Add two 64-bit integers, clamping the result to the int64 range."""
    return max(INT64_MIN, min(INT64_MAX, a + b))


class NoLock:
    """A lock that never blocks; it only counts how deeply it is held."""

    def __init__(self) -> None:
        self._depth = 0

    def lock(self) -> None:
        self._depth += 1

    def unlock(self) -> None:
        if self._depth > 0:
            self._depth -= 1

    @property
    def locked(self) -> bool:
        """True while at least one lock() has not been matched by unlock()."""
        return self._depth > 0

    def __enter__(self) -> NoLock:
        self.lock()
        return self

    def __exit__(self, *exc: object) -> None:
        self.unlock()


class DebugCheckedLock:
    """A non-blocking lock that asserts it is only ever taken from one thread.

    The owning thread is fixed at the first acquisition rather than at
    construction, so an object may be created in one thread and used in another.
    """

    def __init__(self) -> None:
        self._thread_id: int | None = None
        self._depth = 0

    def lock(self) -> None:
        self.assert_on_correct_thread()
        self._depth += 1

    def unlock(self) -> None:
        if self._depth > 0:
            self._depth -= 1

    @property
    def locked(self) -> bool:
        """True while at least one lock() has not been matched by unlock()."""
        return self._depth > 0

    def __enter__(self) -> DebugCheckedLock:
        self.lock()
        return self

    def __exit__(self, *exc: object) -> None:
        self.unlock()

    def assert_on_correct_thread(self) -> None:
        """Raise AssertionError if called from a thread other than the owner."""
        current = threading.get_ident()
        if self._thread_id is None:
            self._thread_id = current
            return
        if self._thread_id != current:
            raise AssertionError("lock acquired from the wrong thread")

    def swap_threads(self) -> None:
        """Forget the owning thread so another thread may take over."""
        self._thread_id = None


class CounterValue:
    """An integer counter for single-threaded use."""

    def __init__(self, value: int = 0) -> None:
        self._value = value

    def increment(self, n: int) -> None:
        self._value += n

    def reset(self) -> int:
        """Set the counter to 0 and return the previous value."""
        previous, self._value = self._value, 0
        return previous

    @property
    def value(self) -> int:
        return self._value


class AtomicCounterValue:
    """An integer counter that may be updated and reset from several threads."""

    def __init__(self, value: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = value

    def increment(self, n: int) -> None:
        with self._lock:
            self._value += n

    def reset(self) -> int:
        """Set the counter to 0 and return the previous value."""
        with self._lock:
            previous, self._value = self._value, 0
            return previous

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class TimeSeriesValue:
    """A count and sum pair for single-threaded use, clamped to int64."""

    def __init__(self, count: int = 0, sum: int = 0) -> None:
        self._count = count
        self._sum = sum

    def add_value(self, value: int, count: int = 1) -> None:
        self._count = add_clamped(self._count, count)
        self._sum = add_clamped(self._sum, value)

    def reset(self) -> tuple[int, int]:
        """Set count and sum to 0 and return the previous ``(count, sum)``."""
        previous = (self._count, self._sum)
        self._count = 0
        self._sum = 0
        return previous

    @property
    def count(self) -> int:
        return self._count

    @property
    def sum(self) -> int:
        return self._sum


class LockedTimeSeriesValue:
    """A count and sum pair that may be reset while another thread adds to it."""

    def __init__(self, count: int = 0, sum: int = 0) -> None:
        self._lock = threading.Lock()
        self._count = count
        self._sum = sum

    def add_value(self, value: int, count: int = 1) -> None:
        with self._lock:
            self._count = add_clamped(self._count, count)
            self._sum = add_clamped(self._sum, value)

    def reset(self) -> tuple[int, int]:
        """Set count and sum to 0 and return the previous ``(count, sum)``."""
        with self._lock:
            previous = (self._count, self._sum)
            self._count = 0
            self._sum = 0
            return previous

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def sum(self) -> int:
        with self._lock:
            return self._sum