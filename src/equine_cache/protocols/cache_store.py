"""Storage seam for the read-through cache.

The service only ever talks to a CacheStore, so the in-process map used in
development and the shared Redis store used by multi-process deployments are
interchangeable. Anything else that can keep a string under a key with a
per-entry expiry (Memcached, a database table) can be added the same way.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Key-value store with per-entry TTL and prefix deletes.

    Backends conform structurally; none of them subclass this.

    All methods are synchronous. A miss is never an error: absent, expired
    and undecodable entries all read back as None.

    Example:
        ```python
        from equine_cache.protocols import CacheStore

        store: CacheStore = InMemoryCacheRepository()
        store: CacheStore = RedisCacheRepository(...)
        ```
    """

    def get(self, key: str) -> Any | None:
        """Get the value stored under a key.

        Args:
            key: The cache key

        Returns:
            A fresh copy of the stored value, or None on a miss
        """
        ...

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: The cache key
            value: A JSON-serializable value
            ttl_seconds: Time-to-live in seconds

        Raises:
            CacheSerializationError: If the value cannot be encoded
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a single entry.

        Args:
            key: The cache key

        Returns:
            True if an entry was removed, False if none existed
        """
        ...

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete every entry whose key starts with a prefix.

        An empty prefix clears the store.

        Args:
            prefix: The key prefix to match

        Returns:
            Number of entries deleted
        """
        ...

    def keys(self) -> list[str]:
        """List stored keys.

        Returns:
            Stored keys, possibly including expired ones not yet purged
        """
        ...

    def count(self) -> int:
        """Count stored entries.

        Returns:
            Number of stored entries
        """
        ...

    def prune_expired(self) -> int:
        """Remove expired entries now.

        Returns:
            Number of entries removed
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            False if the backend cannot be reached
        """
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Backend name and entry count, plus backend-specific fields
        """
        ...
