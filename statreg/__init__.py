"""Thread-safe registries, an LRU map and value holders for service counters."""

__version__ = "0.1.0"
__all__ = [
    "callback_values_map",
    "limit_utils",
    "lock_traits",
    "regex_util",
    "simple_lru_map",
]