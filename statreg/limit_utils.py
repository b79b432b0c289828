"""Helpers for the counter-limit request and response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping

COUNTERS_AVAILABLE_HEADER = "fb303_counters_available"

_INT_RE = re.compile(r"\s*[-+]?\d+\s*")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def read_limit_header(headers: Mapping[str, str] | None, key: str) -> int | None:
    """Return the non-negative integer limit stored under ``key``, if any.

    Missing headers, unparsable values and negative values all yield None.
    """
    if headers is None:
        return None
    raw = headers.get(key)
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    limit = int(raw)
    if limit < 0 or limit > _INT32_MAX or limit < _INT32_MIN:
        return None
    return limit


def add_counters_available(
    headers: MutableMapping[str, str] | None, available: int
) -> None:
    """Record how many counters were available, unless already recorded."""
    if headers is None:
        return
    headers.setdefault(COUNTERS_AVAILABLE_HEADER, str(available))