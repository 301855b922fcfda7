"""Tests for the process-wide functional cache API."""

import asyncio

import pytest

from equine_cache import cache
from equine_cache.services import CacheService


def run_async(coro):
    return asyncio.run(coro)


@pytest.fixture(autouse=True)
def _isolated_cache(global_cache):
    """Every test runs against a fresh in-memory cache with a manual clock."""
    run_async(cache.cache_delete_by_prefix(""))
    yield global_cache


def test_stores_and_retrieves_values():
    async def scenario():
        await cache.cache_set("test:key", {"foo": "bar"}, 60)
        return await cache.cache_get("test:key")

    assert run_async(scenario()) == {"foo": "bar"}


def test_returns_none_for_missing_keys():
    assert run_async(cache.cache_get("nonexistent:key")) is None


def test_deletes_values():
    async def scenario():
        await cache.cache_set("test:delete", "value", 60)
        await cache.cache_delete("test:delete")
        return await cache.cache_get("test:delete")

    assert run_async(scenario()) is None


def test_deletes_values_by_prefix():
    async def scenario():
        await cache.cache_set("prefix:one", "1", 60)
        await cache.cache_set("prefix:two", "2", 60)
        await cache.cache_set("other:key", "3", 60)

        await cache.cache_delete_by_prefix("prefix:")

        assert await cache.cache_get("prefix:one") is None
        assert await cache.cache_get("prefix:two") is None
        assert await cache.cache_get("other:key") == "3"

    run_async(scenario())


def test_expiry_with_one_second_ttl(clock):
    run_async(cache.cache_set("test:ttl", {"v": 1}, 1))
    clock.advance(1)
    assert run_async(cache.cache_get("test:ttl")) is None


def test_get_cached_breed_fetches_once():
    fetch_count = 0

    async def fetch_fn():
        nonlocal fetch_count
        fetch_count += 1
        return {"id": 1, "name": "Arabian"}

    async def scenario():
        first = await cache.get_cached_breed(1, fetch_fn)
        second = await cache.get_cached_breed(1, fetch_fn)
        return first, second

    first, second = run_async(scenario())

    assert first == {"id": 1, "name": "Arabian"}
    assert second == first
    assert fetch_count == 1


def test_invalidate_breed_cache_forces_refetch():
    fetch_count = 0

    async def fetch_fn():
        nonlocal fetch_count
        fetch_count += 1
        return {"id": 1, "name": "Arabian"}

    async def scenario():
        await cache.get_cached_breed(1, fetch_fn)
        await cache.invalidate_breed_cache(1)
        await cache.get_cached_breed(1, fetch_fn)

    run_async(scenario())

    assert fetch_count == 2


def test_invalidate_facts_cache():
    async def fetch_facts():
        return [{"id": 1, "title": "Horse Fact"}]

    async def scenario():
        await cache.get_cached_facts(None, fetch_facts)
        await cache.get_cached_facts("training", fetch_facts)
        await cache.invalidate_facts_cache()

    run_async(scenario())

    assert cache.get_cache_stats() == {"size": 0, "keys": []}


def test_search_and_popular_helpers():
    async def fetch():
        return [{"id": 1, "name": "Arabian"}]

    async def scenario():
        await cache.get_cached_search("arab", fetch)
        await cache.get_cached_popular_breeds(fetch)

    run_async(scenario())

    assert sorted(cache.get_cache_stats()["keys"]) == ["popular:breeds", "search:arab"]


def test_returns_cache_statistics():
    async def scenario():
        await cache.cache_set("stat:test1", "value1", 60)
        await cache.cache_set("stat:test2", "value2", 60)

    run_async(scenario())

    stats = cache.get_cache_stats()
    assert stats["size"] == 2
    assert "stat:test1" in stats["keys"]
    assert "stat:test2" in stats["keys"]


def test_end_to_end_scenario():
    """Direct set, read, invalidate, then a read-through list population."""
    breeds = [{"id": 1, "name": "Arabian"}, {"id": 2, "name": "Quarter Horse"}]

    async def fetch_all():
        return breeds

    async def scenario():
        await cache.cache_set("breed:1", {"id": 1, "name": "Arabian"}, 86400)
        assert await cache.cache_get("breed:1") == {"id": 1, "name": "Arabian"}

        await cache.invalidate_breed_cache(1)
        assert await cache.cache_get("breed:1") is None

        return await cache.get_cached_breed_list(None, fetch_all)

    result = run_async(scenario())

    assert len(result) == 2
    assert "breeds:list" in cache.get_cache_stats()["keys"]


def test_cache_key_constants():
    assert cache.CACHE_KEYS[cache.CacheFamily.BREED] == "breed:"
    assert cache.CACHE_KEYS[cache.CacheFamily.BREED_LIST] == "breeds:list"
    assert cache.CACHE_KEYS[cache.CacheFamily.FACTS] == "facts:"


def test_cache_ttl_constants():
    assert cache.CACHE_TTL[cache.CacheFamily.BREED] == 86400
    assert cache.CACHE_TTL[cache.CacheFamily.BREED_LIST] == 3600
    assert cache.CACHE_TTL[cache.CacheFamily.FACTS] == 86400


def test_get_cache_is_a_singleton(global_cache):
    assert cache.get_cache() is global_cache
    assert cache.get_cache() is cache.get_cache()


def test_set_cache_none_rebuilds_from_settings():
    cache.set_cache(None)
    rebuilt = cache.get_cache()
    assert isinstance(rebuilt, CacheService)
    assert cache.get_cache() is rebuilt
