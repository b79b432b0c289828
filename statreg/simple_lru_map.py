"""A bounded mapping that keeps entries in most-recently-used order."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

EvictCallback = Callable[[K, V], None]


class NoCapacityError(Exception):
    """Raised when an entry cannot be added because the capacity is zero."""


class SimpleLRUMap(Generic[K, V]):
    """An LRU map with a fixed capacity and hit/miss statistics.

    Iteration runs from the most recently used entry to the least recently
    used one. When room is needed, entries are evicted from the back and
    handed to an optional ``on_evict(key, value)`` callback.
    """

    def __init__(self, capacity: int = 0) -> None:
        self._capacity = capacity
        # The first entry of the OrderedDict is the front of the list.
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def _evict(self, on_evict: EvictCallback | None) -> None:
        key, value = self._entries.popitem(last=True)
        if on_evict is not None:
            on_evict(key, value)

    def _ensure_room(self, on_evict: EvictCallback | None) -> bool:
        if self._capacity < 1:
            return False
        while len(self._entries) >= self._capacity:
            self._evict(on_evict)
        return True

    def _try_add(self, key: K, value: V, on_evict: EvictCallback | None) -> bool:
        if not self._ensure_room(on_evict):
            return False
        self._entries[key] = value
        self._entries.move_to_end(key, last=False)
        return True

    def find(self, key: K, move_to_front: bool = False) -> tuple[K, V] | None:
        """Return the ``(key, value)`` entry for ``key`` or None, counting the lookup."""
        if key not in self._entries:
            self._misses += 1
            return None
        if move_to_front:
            self._entries.move_to_end(key, last=False)
        self._hits += 1
        return key, self._entries[key]

    def peek(self, key: K) -> V:
        """Return the value for ``key`` without moving it; raise KeyError if absent."""
        found = self.find(key, False)
        if found is None:
            raise KeyError(key)
        return found[1]

    def touch(self, key: K) -> V:
        """Return the value for ``key`` and move it to the front; raise KeyError if absent."""
        found = self.find(key, True)
        if found is None:
            raise KeyError(key)
        return found[1]

    def __getitem__(self, key: K) -> V:
        return self.peek(key)

    def try_get_or_create(
        self,
        key: K,
        factory: Callable[[K], V],
        move_to_front: bool = True,
        on_evict: EvictCallback | None = None,
    ) -> V | None:
        """Return the value for ``key``, creating it with ``factory(key)`` if absent.

        Returns None when the entry is missing and there is no capacity.
        """
        found = self.find(key, move_to_front)
        if found is not None:
            return found[1]
        value = factory(key)
        if not self._try_add(key, value, on_evict):
            return None
        return value

    def get_or_create(
        self,
        key: K,
        factory: Callable[[K], V],
        move_to_front: bool = True,
        on_evict: EvictCallback | None = None,
    ) -> V:
        """Like :meth:`try_get_or_create`, but raise NoCapacityError instead of None."""
        found = self.find(key, move_to_front)
        if found is not None:
            return found[1]
        value = factory(key)
        if not self._try_add(key, value, on_evict):
            raise NoCapacityError("no capacity")
        return value

    def try_set(
        self,
        key: K,
        value: V,
        move_to_front: bool = True,
        on_evict: EvictCallback | None = None,
    ) -> bool | None:
        """Store ``value`` under ``key``.

        Returns True if a new entry was created, False if an existing entry
        was replaced, and None if there was no capacity. ``move_to_front``
        applies only to existing keys.
        """
        if key not in self._entries:
            if not self._try_add(key, value, on_evict):
                return None
            return True
        if move_to_front:
            self._entries.move_to_end(key, last=False)
        self._entries[key] = value
        return False

    def set(
        self,
        key: K,
        value: V,
        move_to_front: bool = True,
        on_evict: EvictCallback | None = None,
    ) -> bool:
        """Store ``value`` under ``key``; return whether a new entry was created."""
        created = self.try_set(key, value, move_to_front, on_evict)
        if created is None:
            raise NoCapacityError("no capacity")
        return created

    def erase(self, key: K) -> bool:
        """Remove ``key``; return False if it was not present."""
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def items(self) -> list[tuple[K, V]]:
        """Return the entries from most to least recently used."""
        return list(self._entries.items())

    def clear(self, clear_stats: bool = True) -> None:
        """Remove all entries, and the statistics unless told otherwise."""
        self._entries.clear()
        if clear_stats:
            self.clear_stats()

    @property
    def capacity(self) -> int:
        """The maximum number of entries."""
        return self._capacity

    def set_capacity(
        self, new_capacity: int, on_evict: EvictCallback | None = None
    ) -> int:
        """Change the capacity, evicting as needed; return the old capacity."""
        old_capacity = self._capacity
        while len(self._entries) > new_capacity:
            self._evict(on_evict)
        self._capacity = new_capacity
        return old_capacity

    @property
    def hits(self) -> int:
        """Number of lookups that found their key."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of lookups that did not find their key."""
        return self._misses

    @property
    def hit_ratio(self) -> float:
        """Fraction of lookups that were hits, or 0 when there were none."""
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total

    def clear_stats(self) -> None:
        """Reset the hit and miss counts."""
        self._hits = 0
        self._misses = 0