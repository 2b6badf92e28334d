"""Unit tests for ResultCache (TTL-on-read)."""

import pytest

from study_helper.persistence.result_cache import ResultCache


@pytest.fixture
def cache(clock) -> ResultCache:
    return ResultCache(ttl_seconds=1800, clock=clock)


def test_get_missing_returns_none(cache):
    assert cache.get("explain/math/primes") is None


def test_put_then_get(cache):
    cache.put("k", "payload")
    assert cache.get("k") == "payload"


def test_entry_valid_until_just_before_ttl(cache, clock):
    cache.put("k", "payload")
    clock.advance(1799.9)
    assert cache.get("k") == "payload"


def test_entry_absent_once_ttl_elapses_but_not_deleted(cache, clock):
    cache.put("k", "payload")
    clock.advance(1800)
    
    assert cache.get("k") is None
    assert len(cache) == 1  # stale entries are not evicted


def test_repeated_put_is_idempotent_within_ttl(cache, clock):
    cache.put("k", "v")
    cache.put("k", "v")
    assert cache.get("k") == "v"
    
    clock.advance(1800)
    assert cache.get("k") is None


def test_overwrite_resets_stored_at(cache, clock):
    cache.put("k", "old")
    clock.advance(1000)
    cache.put("k", "new")
    clock.advance(1000)
    
    assert cache.get("k") == "new"


def test_stale_entry_is_refreshed_by_put(cache, clock):
    cache.put("k", "old")
    clock.advance(5000)
    cache.put("k", "fresh")
    assert cache.get("k") == "fresh"


def test_keys_are_independent(cache):
    cache.put("a", "1")
    assert cache.get("b") is None


def test_invalid_ttl():
    with pytest.raises(ValueError):
        ResultCache(ttl_seconds=0)
