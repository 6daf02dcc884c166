import pytest

from sslibev.cache import LruCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_insert_and_lookup():
    cache = LruCache(10)
    cache.insert(b"k1", "v1")
    assert cache.lookup(b"k1") == "v1"
    assert cache.lookup(b"missing") is None


def test_eviction_when_count_reaches_capacity():
    freed = []
    cache = LruCache(3, free_cb=lambda k, v: freed.append((k, v)))
    cache.insert("a", 1)
    cache.insert("b", 2)
    cache.insert("c", 3)
    assert freed == [("a", 1)]
    assert cache.keys() == ["b", "c"]


def test_lookup_refreshes_recency():
    cache = LruCache(3)
    cache.insert("a", 1)
    cache.insert("b", 2)
    assert cache.lookup("a") == 1
    cache.insert("c", 3)
    assert "b" not in cache
    assert cache.keys() == ["a", "c"]


def test_contains_refreshes_recency():
    cache = LruCache(3)
    cache.insert("a", 1)
    cache.insert("b", 2)
    assert cache.contains("a") is True
    assert cache.contains("zzz") is False
    assert cache.keys() == ["b", "a"]


def test_remove_calls_free_callback():
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append((k, v)))
    cache.insert("a", "x")
    cache.remove("a")
    cache.remove("absent")
    assert freed == [("a", "x")]
    assert len(cache) == 0


def test_none_values_are_not_released():
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append(k))
    cache.insert("a", None)
    cache.remove("a")
    assert freed == []


def test_clear_removes_only_old_entries():
    clock = FakeClock()
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append(k), clock=clock)
    cache.insert("old", 1)
    clock.now += 100
    cache.insert("new", 2)
    clock.now += 10
    cache.clear(60)
    assert cache.keys() == ["new"]
    assert freed == ["old"]


def test_lookup_updates_timestamp():
    clock = FakeClock()
    cache = LruCache(10, clock=clock)
    cache.insert("a", 1)
    clock.now += 100
    cache.lookup("a")
    clock.now += 10
    cache.clear(60)
    assert cache.lookup("a") == 1


def test_close_keep_data():
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append(k))
    cache.insert("a", 1)
    cache.insert("b", 2)
    cache.close(keep_data=True)
    assert freed == []
    assert len(cache) == 0


def test_close_releases_data():
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append(k))
    cache.insert("a", 1)
    cache.insert("b", 2)
    cache.close(keep_data=False)
    assert freed == ["a", "b"]
    assert len(cache) == 0


def test_reinsert_replaces_value():
    freed = []
    cache = LruCache(10, free_cb=lambda k, v: freed.append(v))
    cache.insert("a", "first")
    cache.insert("a", "second")
    assert cache.lookup("a") == "second"
    assert freed == ["first"]
    assert len(cache) == 1


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        LruCache(-1)