"""Regex key filtering with an epoch-validated result cache."""

from __future__ import annotations

import re
import threading
import time
from collections.abc import Callable, Iterable, MutableMapping

REGEX_CACHE_LIMIT = 20000
REGEX_LENGTH_LIMIT = 1024 * 1024
ONE_DAY_SECONDS = 24 * 60 * 60
_TIME_ZERO = 0.0


def filter_regex_keys(keys: Iterable[str], regex: str) -> list[str]:
    """Return the keys that match ``regex`` in full, in their original order."""
    pattern = re.compile(regex)
    return [key for key in keys if pattern.fullmatch(key)]


def cache_regex_keys(
    keys: Iterable[str],
    regex: str,
    cache: MutableMapping[str, list[str]],
) -> bool:
    """Store the matched keys for ``regex`` in ``cache`` if the limits allow.

    Returns True when the keys were cached.
    """
    if len(regex) > REGEX_LENGTH_LIMIT:
        return False
    keys = list(keys)
    cached_total = sum(len(vec) for vec in cache.values())
    if cached_total + len(keys) > REGEX_CACHE_LIMIT:
        return False
    cache[regex] = keys
    return True


class RegexKeyCache:
    """Caches regex lookups over a changing key set.

    The owner calls :meth:`bump_epoch` whenever its key set changes; cached
    results are only served while the epoch they were computed at is current.
    The whole cache is rebuilt once a day.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[str, list[str]] = {}
        self._map_epoch = 0
        self._cache_epoch = 0
        self._cache_clear_time = _TIME_ZERO

    def bump_epoch(self) -> None:
        """Mark the owner's key set as changed."""
        with self._lock:
            self._map_epoch += 1

    def get_regex_keys(
        self,
        regex: str,
        list_keys: Callable[[], Iterable[str]],
        now: float | None = None,
    ) -> list[str]:
        """Return the keys from ``list_keys()`` that fully match ``regex``."""
        if now is None:
            now = time.time()

        with self._lock:
            orig_epoch = self._map_epoch
            force_clear = (
                self._cache_clear_time != _TIME_ZERO
                and now - self._cache_clear_time >= ONE_DAY_SECONDS
            )
            if not force_clear and orig_epoch == self._cache_epoch:
                cached = self._cache.get(regex)
                if cached is not None:
                    return list(cached)

        matched = filter_regex_keys(list_keys(), regex)

        with self._lock:
            if force_clear:
                self._cache.clear()
                self._cache_epoch = orig_epoch
                self._cache_clear_time = now
                if orig_epoch == self._map_epoch:
                    cache_regex_keys(matched, regex, self._cache)
            elif orig_epoch == self._map_epoch:
                if orig_epoch != self._cache_epoch:
                    self._cache.clear()
                    self._cache_epoch = orig_epoch
                    self._cache_clear_time = now
                cache_regex_keys(matched, regex, self._cache)

        return list(matched)