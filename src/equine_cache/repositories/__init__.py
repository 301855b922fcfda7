"""Repository layer for data access.

This layer abstracts the storage backend behind the CacheStore
protocol. This enables:
- Easy swapping of implementations (in-memory → Redis, etc.)
- Unit testing with fake clocks and fake clients
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from equine_cache.protocols import CacheStore

from .factory import create_cache_store
from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "create_cache_store",
]
