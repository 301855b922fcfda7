"""Exceptions raised by the cache layer.

Misses are never errors. These are raised only for faults a caller must see,
such as a value that cannot be stored.
"""


class CacheError(Exception):
    """Base class for cache layer errors."""


class CacheSerializationError(CacheError):
    """Raised when a value cannot be encoded for storage.

    Attributes:
        key: The cache key the write was aimed at
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Cannot cache value for key {key!r}: {reason}")
