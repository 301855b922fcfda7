"""Backend selection from settings."""

import redis

from equine_cache.config import Settings, settings
from equine_cache.protocols import CacheStore

from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository


def create_cache_store(
    config: Settings | None = None,
    redis_client: redis.Redis | None = None,
) -> CacheStore:
    """Create the cache backend named by CACHE_BACKEND.

    Backends:
    - `memory` (default): process-local dictionary
    - `redis`: shared Redis keyspace under CACHE_NAMESPACE

    Args:
        config: Settings to read. Defaults to the global settings.
        redis_client: Client for the redis backend. If None, one is built
            from REDIS_URL.

    Returns:
        A CacheStore implementation
    """
    config = config or settings
    if config.is_redis_backend:
        return RedisCacheRepository(redis_client=redis_client, namespace=config.cache_namespace)
    return InMemoryCacheRepository()
