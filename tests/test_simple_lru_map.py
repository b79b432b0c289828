import pytest

from statreg.simple_lru_map import NoCapacityError, SimpleLRUMap


def test_set_and_peek():
    m = SimpleLRUMap(3)
    assert m.set("a", 1) is True
    assert m.set("a", 2) is False
    assert m.peek("a") == 2
    assert len(m) == 1


def test_eviction_order_and_callback():
    evicted = []
    m = SimpleLRUMap(2)
    m.set("a", 1)
    m.set("b", 2)
    m.set("c", 3, on_evict=lambda k, v: evicted.append((k, v)))
    assert evicted == [("a", 1)]
    assert list(m) == ["c", "b"]


def test_touch_moves_to_front():
    m = SimpleLRUMap(2)
    m.set("a", 1)
    m.set("b", 2)
    assert m.touch("a") == 1
    assert list(m) == ["a", "b"]
    m.set("c", 3)
    assert "b" not in m
    assert m.items() == [("c", 3), ("a", 1)]


def test_peek_does_not_move():
    m = SimpleLRUMap(2)
    m.set("a", 1)
    m.set("b", 2)
    assert m.peek("a") == 1
    assert m["a"] == 1
    assert list(m) == ["b", "a"]


def test_missing_key_raises():
    m = SimpleLRUMap(2)
    with pytest.raises(KeyError):
        m.peek("x")
    with pytest.raises(KeyError):
        m.touch("x")
    with pytest.raises(KeyError):
        m["x"]


def test_zero_capacity():
    m = SimpleLRUMap(0)
    assert m.try_set("a", 1) is None
    assert m.try_get_or_create("a", lambda k: k * 2) is None
    with pytest.raises(NoCapacityError):
        m.set("a", 1)
    with pytest.raises(NoCapacityError):
        m.get_or_create("a", lambda k: 0)
    assert len(m) == 0


def test_get_or_create_uses_factory_once():
    calls = []

    def factory(key):
        calls.append(key)
        return key.upper()

    m = SimpleLRUMap(4)
    assert m.get_or_create("ab", factory) == "AB"
    assert m.get_or_create("ab", factory) == "AB"
    assert calls == ["ab"]


def test_try_set_existing_without_move():
    m = SimpleLRUMap(3)
    m.set("a", 1)
    m.set("b", 2)
    assert m.try_set("a", 10, move_to_front=False) is False
    assert list(m) == ["b", "a"]
    assert m.peek("a") == 10


def test_erase():
    m = SimpleLRUMap(3)
    m.set("a", 1)
    assert m.erase("a") is True
    assert m.erase("a") is False
    assert len(m) == 0


def test_stats_and_hit_ratio():
    m = SimpleLRUMap(3)
    assert m.hit_ratio == 0
    m.set("a", 1)
    assert m.find("a") == ("a", 1)
    assert m.find("zz") is None
    assert m.hits == 1
    assert m.misses == 1
    assert m.hit_ratio == 0.5
    m.clear_stats()
    assert (m.hits, m.misses) == (0, 0)


def test_clear_keeps_stats_when_asked():
    m = SimpleLRUMap(3)
    m.set("a", 1)
    m.find("a")
    m.clear(clear_stats=False)
    assert len(m) == 0
    assert m.hits == 1
    m.clear()
    assert m.hits == 0


def test_set_capacity_evicts_from_back():
    evicted = []
    m = SimpleLRUMap(3)
    for key, value in [("a", 1), ("b", 2), ("c", 3)]:
        m.set(key, value)
    old = m.set_capacity(1, on_evict=lambda k, v: evicted.append(k))
    assert old == 3
    assert m.capacity == 1
    assert evicted == ["a", "b"]
    assert list(m) == ["c"]


def test_size_never_exceeds_capacity():
    m = SimpleLRUMap(5)
    for i in range(50):
        m.set(i, i)
        assert len(m) <= m.capacity
    assert list(m) == list(range(49, 44, -1))