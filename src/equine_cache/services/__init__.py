"""Service layer for business logic.

This layer contains the read-through and invalidation logic.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from equine_cache.services import CacheService

    # Using factory method (recommended)
    cache = CacheService.create(repository=InMemoryCacheRepository())
    cache = CacheService.create(repository=RedisCacheRepository.create(), coalesce=True)
    ```
"""

from .cache_service import CacheService, FetchFn

__all__ = [
    "CacheService",
    "FetchFn",
]
