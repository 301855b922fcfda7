"""Equine Cache - read-through TTL caching for breed and horse-fact reference data.

This package provides a layered architecture for caching:

Layers:
    - policy: Entity families, key prefixes and TTLs
    - protocols: Interface contracts (CacheStore, Clock)
    - repositories: Storage backends (in-memory, Redis)
    - services: Read-through and invalidation logic
    - cache: Process-wide functional API
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from equine_cache import cache

    breeds = await cache.get_cached_breed_list("draft", lambda: db.get_breeds_by_category("draft"))
    await cache.invalidate_breed_cache(breed_id)
    ```

For HTTP API:
    ```python
    from equine_cache.api.app import app
    ```
"""

from equine_cache.cache import (
    cache_delete,
    cache_delete_by_prefix,
    cache_get,
    cache_set,
    get_cache,
    get_cache_stats,
    get_cached_breed,
    get_cached_breed_list,
    get_cached_facts,
    get_cached_popular_breeds,
    get_cached_search,
    invalidate_breed_cache,
    invalidate_facts_cache,
    set_cache,
)
from equine_cache.config import get_redis_client, settings
from equine_cache.entities import CacheEntryEntity, CacheStatsEntity
from equine_cache.exceptions import CacheError, CacheSerializationError
from equine_cache.handlers import CacheHandler
from equine_cache.policy import CACHE_KEYS, CACHE_TTL, CacheFamily, CachePolicy
from equine_cache.protocols import CacheStore, Clock, SystemClock
from equine_cache.repositories import (
    InMemoryCacheRepository,
    RedisCacheRepository,
    create_cache_store,
)
from equine_cache.services import CacheService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Policy
    "CACHE_KEYS",
    "CACHE_TTL",
    "CacheFamily",
    "CachePolicy",
    # Protocols (interfaces)
    "CacheStore",
    "Clock",
    "SystemClock",
    # Services (business logic)
    "CacheService",
    # Handlers (HTTP)
    "CacheHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "create_cache_store",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheStatsEntity",
    # Errors
    "CacheError",
    "CacheSerializationError",
    # Functional API
    "cache_get",
    "cache_set",
    "cache_delete",
    "cache_delete_by_prefix",
    "get_cached_breed",
    "get_cached_breed_list",
    "get_cached_facts",
    "get_cached_search",
    "get_cached_popular_breeds",
    "invalidate_breed_cache",
    "invalidate_facts_cache",
    "get_cache_stats",
    "get_cache",
    "set_cache",
]
