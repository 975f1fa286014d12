"""Tests for the bounded LRU cache."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from kbmatch.matching.cache import LRUCache


def test_capacity_is_never_exceeded():
    cache = LRUCache(3)
    for key in range(1, 6):
        cache.put(key, str(key))

    assert cache.size() == 3
    assert cache.keys() == [3, 4, 5]


def test_get_promotes_key():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)

    assert cache.get("a") == 1
    cache.put("c", 3)

    assert "b" not in cache
    assert cache.keys() == ["a", "c"]


def test_put_existing_key_updates_without_eviction():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 9)

    assert cache.size() == 2
    assert cache.get("a") == 9

    cache.put("c", 3)
    assert cache.keys() == ["a", "c"]


def test_miss_returns_default():
    cache = LRUCache(2)
    assert cache.get("missing") is None
    assert cache.get("missing", "fallback") == "fallback"


def test_contains_does_not_promote():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)

    assert "a" in cache
    cache.put("c", 3)

    assert "a" not in cache


def test_get_or_compute_calls_factory_once_per_key():
    cache = LRUCache(4)
    calls = []

    def factory(key):
        calls.append(key)
        return key * 2

    assert cache.get_or_compute(3, factory) == 6
    assert cache.get_or_compute(3, factory) == 6
    assert calls == [3]


def test_clear_empties_cache():
    cache = LRUCache(2)
    cache.put("a", 1)
    cache.clear()

    assert len(cache) == 0
    assert cache.get("a") is None


@pytest.mark.parametrize("capacity", [0, -1])
def test_rejects_non_positive_capacity(capacity):
    with pytest.raises(ValueError):
        LRUCache(capacity)


def test_concurrent_writers_respect_capacity():
    cache = LRUCache(50)

    def writer(offset):
        for i in range(500):
            key = offset * 1000 + i
            cache.put(key, i)
            cache.get(key - 1)
            assert cache.size() <= 50

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(writer, range(8)))

    assert cache.size() == 50
