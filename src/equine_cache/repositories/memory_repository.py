"""In-memory implementation of CacheStore.

The default backend: a process-local dictionary of encoded values with
absolute expiry timestamps. Contents are lost when the process exits.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from equine_cache.entities import CacheEntryEntity
from equine_cache.protocols import Clock, SystemClock
from equine_cache.utils import decode_value, encode_value

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Dictionary-backed cache store with lazy TTL expiry.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Expired entries are removed when a read touches them. Nothing sweeps
    the map in the background; call prune_expired() to purge explicitly.
    There is no size bound.

    Example:
        ```python
        repo = InMemoryCacheRepository()
        repo.set("breed:1", {"id": 1, "name": "Arabian"}, 86400)
        repo.get("breed:1")  # {"id": 1, "name": "Arabian"}
        ```
    """

    def __init__(
        self,
        clock: Clock | None = None,
        backing: MutableMapping[str, CacheEntryEntity] | None = None,
    ) -> None:
        """Initialize the in-memory repository.

        Args:
            clock: Time source for expiry. Defaults to the wall clock.
            backing: Map to hold entries. Defaults to a new dict.
        """
        self._clock = clock or SystemClock()
        self._entries: MutableMapping[str, CacheEntryEntity] = (
            backing if backing is not None else {}
        )

    @classmethod
    def create(cls, clock: Clock | None = None) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults.

        Args:
            clock: Time source. If None, uses the wall clock.

        Returns:
            Empty InMemoryCacheRepository
        """
        return cls(clock=clock)

    def get(self, key: str) -> Any | None:
        """Get a value, purging the entry if it has expired.

        Args:
            key: The cache key

        Returns:
            Decoded copy of the stored value, or None on a miss
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock.now_ms()):
            self._entries.pop(key, None)
            logger.debug("Expired cache entry purged: %s", key)
            return None

        return decode_value(entry.value)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value, replacing any existing entry.

        Args:
            key: The cache key
            value: A JSON-serializable value
            ttl_seconds: Time-to-live in seconds. Zero or less stores an
                entry that is already expired.
        """
        encoded = encode_value(key, value)
        expires_at = self._clock.now_ms() + ttl_seconds * 1000
        self._entries[key] = CacheEntryEntity(key=key, value=encoded, expires_at=expires_at)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete all entries whose key starts with prefix.

        Args:
            prefix: Key prefix. An empty string clears everything.

        Returns:
            Number of entries deleted
        """
        # Snapshot first, the map cannot change size while iterated
        keys_to_delete = [k for k in self._entries if k.startswith(prefix)]
        for key in keys_to_delete:
            self._entries.pop(key, None)
        return len(keys_to_delete)

    def keys(self) -> list[str]:
        return list(self._entries)

    def count(self) -> int:
        return len(self._entries)

    def prune_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock.now_ms()
        expired_keys = [k for k, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired_keys:
            self._entries.pop(key, None)
        if expired_keys:
            logger.debug("Pruned %d expired cache entries", len(expired_keys))
        return len(expired_keys)

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "memory",
            "total_entries": self.count(),
        }
