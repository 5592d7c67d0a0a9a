import pytest

from grokcode.cache import CacheStats, ResponseCache


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return _Clock()


def test_cache_basic():
    cache = ResponseCache(10, 60)
    key = ResponseCache.generate_key("test query", ["result1"])
    cache.put(key, "cached response")
    assert cache.get(key) == "cached response"
    assert cache.get("non-existent") is None


def test_cache_expiration(clock):
    cache = ResponseCache(10, 1, clock=clock)
    key = ResponseCache.generate_key("test query", [])
    cache.put(key, "response")
    assert cache.get(key) == "response"
    clock.now += 2
    assert cache.get(key) is None
    assert cache.stats().total_entries == 0


def test_entry_at_exact_ttl_is_still_valid(clock):
    cache = ResponseCache(10, 5, clock=clock)
    cache.put("k", "v")
    clock.now += 5
    assert cache.get("k") == "v"


def test_get_refreshes_timestamp(clock):
    cache = ResponseCache(10, 10, clock=clock)
    cache.put("k", "v")
    clock.now += 8
    assert cache.get("k") == "v"
    clock.now += 8
    assert cache.get("k") == "v"


def test_cache_lru_eviction():
    cache = ResponseCache(2, 60)
    key1 = ResponseCache.generate_key("query1", [])
    key2 = ResponseCache.generate_key("query2", [])
    key3 = ResponseCache.generate_key("query3", [])

    cache.put(key1, "response1")
    cache.put(key2, "response2")
    cache.get(key1)
    cache.put(key3, "response3")

    assert cache.get(key1) == "response1"
    assert cache.get(key2) is None
    assert cache.get(key3) == "response3"


def test_overwrite_in_full_cache_does_not_evict():
    cache = ResponseCache(2, 60)
    cache.put("a", "1")
    cache.put("b", "2")
    cache.put("a", "3")
    assert cache.get("a") == "3"
    assert cache.get("b") == "2"


def test_cache_key_generation():
    key1 = ResponseCache.generate_key("same query", ["result1"])
    key2 = ResponseCache.generate_key("same query", ["result1"])
    key3 = ResponseCache.generate_key("different query", ["result1"])
    assert key1 == key2
    assert key1 != key3


def test_key_is_hex_sha256():
    key = ResponseCache.generate_key("", [])
    assert key == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    other = ResponseCache.generate_key("anything", ["x", "y"])
    assert len(other) == 64
    assert all(c in "0123456789abcdef" for c in other)


def test_key_separator_joins_results():
    assert ResponseCache.generate_key("a|b", []) == ResponseCache.generate_key("a", ["b"])
    assert ResponseCache.generate_key("a", ["b", "c"]) != ResponseCache.generate_key("a", ["c", "b"])


def test_stats(clock):
    cache = ResponseCache(10, 10, clock=clock)
    cache.put("old", "1")
    clock.now += 5
    cache.put("new", "2")
    clock.now += 8
    assert cache.stats() == CacheStats(total_entries=2, expired_entries=1, active_entries=1)


def test_clear():
    cache = ResponseCache(10, 60)
    cache.put("a", "1")
    cache.put("b", "2")
    cache.clear()
    assert cache.get("a") is None
    assert cache.stats().total_entries == 0