# statreg

Small, thread-safe building blocks for exposing counters from a running
service.

## What is in it

- `statreg.callback_values_map`
  - `CallbackValuesMap` maps names to callables that produce a value when it
    is read. Callbacks run outside the map's internal lock, so a slow or
    blocking callback does not hold up registration.
  - `DynamicCounters` holds integer counters and adds `get_counters()` and
    `get_counter(name)`. `DynamicStrings` holds string values.
  - `get_callback(name)` returns a `CallbackEntry`. Once the name is
    unregistered, calling `get_value()` on that entry raises
    `UnregisteredCallbackError`.
- `statreg.regex_util`
  - `filter_regex_keys(keys, regex)` keeps the keys that fully match a
    regular expression, in their original order.
  - `cache_regex_keys` stores results within size limits.
  - `RegexKeyCache` reuses those results until `bump_epoch()` signals that
    the key set has changed, and rebuilds the cache once a day.
- `statreg.limit_utils`
  - `read_limit_header(headers, key)` returns a non-negative integer limit
    from a header mapping. It returns `None` when the header is missing,
    cannot be parsed or holds a negative value.
  - `add_counters_available(headers, available)` records the
    `fb303_counters_available` header, unless that header is already set.
- `statreg.simple_lru_map`
  - `SimpleLRUMap` is a bounded map that evicts the least recently used
    entry. It takes an optional `on_evict(key, value)` callback.
  - It counts `hits` and `misses` and reports a `hit_ratio`.
  - With no capacity, `set` and `get_or_create` raise `NoCapacityError`,
    while `try_set` and `try_get_or_create` return `None`.
- `statreg.lock_traits`
  - `NoLock` is a lock that never blocks.
  - `DebugCheckedLock` raises `AssertionError` when it is taken from a
    second thread. `swap_threads()` lets another thread take over.
  - Counter holders: `CounterValue` and `AtomicCounterValue`.
  - Count/sum holders: `TimeSeriesValue` and `LockedTimeSeriesValue`. Their
    additions are clamped to the 64-bit range by `add_clamped`.

## Example

```python
from statreg.callback_values_map import DynamicCounters

counters = DynamicCounters()
counters.register_callback("requests", lambda: 42)
counters.register_callback("errors", lambda: 0)

counters.get_counter("requests")     # 42
counters.get_counters()              # {'errors': 0, 'requests': 42}
counters.regex_keys("req.*")         # ['requests']
counters.unregister_callback("errors")  # True
"errors" in counters                 # False
```

```python
from statreg.simple_lru_map import SimpleLRUMap

lru = SimpleLRUMap(2)
lru.set("a", 1)
lru.set("b", 2)
lru.set("c", 3)                      # evicts "a"
list(lru)                            # ['c', 'b']
lru.touch("b")                       # 2, and "b" moves to the front
lru.hit_ratio                        # 1.0
```

## What it does not do

This is a library of in-process building blocks. It has no network service
or request handler that answers counter queries. It has no command-line
tool. It does not persist counters. It has no time-bucketed series,
histograms or quantile estimation. The value holders in `lock_traits` store
raw counts and sums, and aggregating them is left to the caller.

## Tests

```
pip install -e ".[test]"
pytest
```