"""Redis implementation of CacheStore.

Entries are plain string keys holding JSON text, expired by Redis itself
through a millisecond TTL. It satisfies the CacheStore protocol and can
replace the in-memory repository when several processes share one cache.
"""

import logging
import re
from typing import Any

import redis

from equine_cache.config import get_redis_client, settings
from equine_cache.utils import decode_value, encode_value

logger = logging.getLogger(__name__)

# Characters with special meaning in a SCAN MATCH pattern
_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


class RedisCacheRepository:
    """CacheStore backed by Redis strings with PX expiry.

    Keys are stored as ``<namespace><key>``. With an empty namespace a
    prefix delete of "" removes every key in the selected Redis database,
    so give the cache a namespace when the database is shared.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
        scan_count: int = 500,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
                The client must be created with decode_responses=True.
            namespace: String prepended to every key. Defaults to settings.
            scan_count: COUNT hint for SCAN during prefix deletes.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = settings.cache_namespace if namespace is None else namespace
        self._scan_count = scan_count

    @classmethod
    def create(cls, namespace: str | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            namespace: Key namespace. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(namespace=namespace)

    def _full_key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    def _match_pattern(self, prefix: str) -> str:
        return _GLOB_SPECIALS.sub(r"\\\1", self._full_key(prefix)) + "*"

    def get(self, key: str) -> Any | None:
        """Get a value from Redis.

        Args:
            key: The cache key

        Returns:
            Decoded value, or None if absent, expired, undecodable or held
            under a non-string Redis type
        """
        try:
            raw = self._client.get(self._full_key(key))
        except redis.ResponseError as e:
            logger.debug("Unreadable Redis value for %s: %s", key, e)
            return None
        return decode_value(raw)  # type: ignore[arg-type]

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value with a TTL.

        Args:
            key: The cache key
            value: A JSON-serializable value
            ttl_seconds: Time-to-live in seconds
        """
        encoded = encode_value(key, value)
        ttl_ms = int(ttl_seconds * 1000)
        if ttl_ms <= 0:
            # Redis rejects non-positive expiries; the entry would be stale anyway
            self._client.delete(self._full_key(key))
            return
        self._client.set(self._full_key(key), encoded, px=ttl_ms)

    def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Args:
            key: The cache key

        Returns:
            True if deleted, False otherwise
        """
        result: int = self._client.delete(self._full_key(key))  # type: ignore[assignment]
        return result > 0

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete entries whose key starts with prefix.

        Matching keys are collected with SCAN first, then deleted.

        Args:
            prefix: The key prefix to match

        Returns:
            Number of entries deleted
        """
        keys_to_delete = list(
            self._client.scan_iter(match=self._match_pattern(prefix), count=self._scan_count)
        )
        if not keys_to_delete:
            return 0
        deleted: int = self._client.delete(*keys_to_delete)  # type: ignore[assignment]
        return deleted

    def keys(self) -> list[str]:
        """List keys in this repository's namespace.

        Returns:
            Keys with the namespace stripped
        """
        start = len(self._namespace)
        return [
            key[start:]
            for key in self._client.scan_iter(match=self._match_pattern(""), count=self._scan_count)
        ]

    def count(self) -> int:
        count = 0
        for _ in self._client.scan_iter(match=self._match_pattern(""), count=self._scan_count):
            count += 1
        return count

    def prune_expired(self) -> int:
        # Redis evicts expired keys on its own
        return 0

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "redis",
            "namespace": self._namespace,
            "total_entries": self.count(),
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
