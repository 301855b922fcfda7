"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, etc.)
- Unit testing with fake clocks and fake clients
- Clear separation of concerns

Usage:
    ```python
    from equine_cache.protocols import CacheStore, Clock

    # Type hints work with any implementation
    store: CacheStore = InMemoryCacheRepository()  # works
    store: CacheStore = RedisCacheRepository()     # also works
    ```
"""

from .cache_store import CacheStore
from .clock import Clock, SystemClock

__all__ = [
    "CacheStore",
    "Clock",
    "SystemClock",
]
