"""Process-wide cache and its functional API.

The host application's data-access layer calls these functions directly:

    ```python
    from equine_cache import cache

    breed = await cache.get_cached_breed(breed_id, lambda: db.get_breed_by_id(breed_id))

    await db.update_breed(breed_id, changes)
    await cache.invalidate_breed_cache(breed_id)
    ```

All calls go to one lazily built CacheService whose backend comes from
settings. Tests and the HTTP app can install their own with set_cache().
"""

from typing import Any, TypeVar

from equine_cache.policy import CACHE_KEYS, CACHE_TTL, CacheFamily
from equine_cache.repositories import create_cache_store
from equine_cache.services import CacheService, FetchFn

T = TypeVar("T")

# Global instance
_cache_instance: CacheService | None = None


def get_cache() -> CacheService:
    """Get or create the global cache service."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = CacheService.create(repository=create_cache_store())
    return _cache_instance


def set_cache(service: CacheService | None) -> None:
    """Replace the global cache service.

    Args:
        service: The service to install, or None to rebuild from settings
            on next use
    """
    global _cache_instance
    _cache_instance = service


async def cache_get(key: str) -> Any | None:
    """Get a value from cache, or None on a miss."""
    return get_cache().get(key)


async def cache_set(key: str, value: Any, ttl_seconds: int) -> None:
    """Set a value in cache with TTL."""
    get_cache().set(key, value, ttl_seconds)


async def cache_delete(key: str) -> None:
    get_cache().delete(key)


async def cache_delete_by_prefix(prefix: str) -> None:
    """Delete all values whose key starts with prefix ("" clears the cache)."""
    get_cache().delete_by_prefix(prefix)


async def get_cached_breed(breed_id: int, fetch_fn: FetchFn[T]) -> T:
    """Get breed from cache or fetch from database."""
    return await get_cache().get_cached_breed(breed_id, fetch_fn)


async def get_cached_breed_list(category: str | None, fetch_fn: FetchFn[T]) -> T:
    """Get breed list from cache or fetch from database."""
    return await get_cache().get_cached_breed_list(category, fetch_fn)


async def get_cached_facts(category: str | None, fetch_fn: FetchFn[T]) -> T:
    """Get facts from cache or fetch from database."""
    return await get_cache().get_cached_facts(category, fetch_fn)


async def get_cached_search(query: str, fetch_fn: FetchFn[T]) -> T:
    return await get_cache().get_cached_search(query, fetch_fn)


async def get_cached_popular_breeds(fetch_fn: FetchFn[T]) -> T:
    return await get_cache().get_cached_popular_breeds(fetch_fn)


async def invalidate_breed_cache(breed_id: int | None = None) -> None:
    """Invalidate breed cache when data is updated."""
    await get_cache().invalidate_breed_cache(breed_id)


async def invalidate_facts_cache() -> None:
    """Invalidate facts cache when data is updated."""
    await get_cache().invalidate_facts_cache()


def get_cache_stats() -> dict[str, Any]:
    """Get cache statistics for monitoring.

    Returns:
        {"size": <entry count>, "keys": [<key>, ...]}
    """
    return get_cache().get_cache_stats().to_dict()


__all__ = [
    "CACHE_KEYS",
    "CACHE_TTL",
    "CacheFamily",
    "cache_delete",
    "cache_delete_by_prefix",
    "cache_get",
    "cache_set",
    "get_cache",
    "get_cache_stats",
    "get_cached_breed",
    "get_cached_breed_list",
    "get_cached_facts",
    "get_cached_popular_breeds",
    "get_cached_search",
    "invalidate_breed_cache",
    "invalidate_facts_cache",
    "set_cache",
]
