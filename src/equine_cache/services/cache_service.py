"""Cache service for core business logic.

This service composes the storage repository with the entity-family policy
into read-through lookups and mutation-driven invalidation.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from equine_cache.config import settings
from equine_cache.entities import CacheStatsEntity
from equine_cache.models import CacheMetrics
from equine_cache.policy import CacheFamily, CachePolicy
from equine_cache.protocols import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
FetchFn = Callable[[], Awaitable[T]]


class CacheService:
    """Read-through cache over reference data (breeds, facts).

    This service depends on the CacheStore PROTOCOL, not a concrete
    implementation, so the in-memory map can be swapped for Redis
    without touching the read-through or invalidation logic.

    Read-through contract:
    1. Look the key up; a hit is returned without calling the fetch.
    2. On a miss, await the fetch.
    3. Store the result with the family TTL only if it is truthy, so
       "not found" (None) and empty results are retried on the next read.
    4. Fetch exceptions propagate unchanged and nothing is stored.

    Concurrent misses for one key each call the fetch (last write wins)
    unless the service is built with coalesce=True, in which case they
    share a single in-flight fetch.

    Example:
        ```python
        from equine_cache.repositories import InMemoryCacheRepository
        from equine_cache.services import CacheService

        cache = CacheService.create(repository=InMemoryCacheRepository())

        breed = await cache.get_cached_breed(1, lambda: db.get_breed_by_id(1))

        # After a breed is edited
        await cache.invalidate_breed_cache(1)
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        policy: CachePolicy | None = None,
        coalesce: bool | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            policy: Prefix/TTL table. Defaults to the settings-driven policy.
            coalesce: Share one in-flight fetch per key. Defaults to settings.
        """
        self._repository = repository
        self._policy = policy or CachePolicy.from_settings()
        self._coalesce = settings.cache_coalesce if coalesce is None else coalesce
        self._metrics = CacheMetrics()
        self._inflight: dict[str, asyncio.Future] = {}
        # Bumped when a key is invalidated mid-fetch; a fetch started under an
        # older generation does not write its result.
        self._generations: dict[str, int] = {}

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        policy: CachePolicy | None = None,
        coalesce: bool | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Like dict.fromkeys() or Path.home() - this is an alternative constructor
        that provides default implementations.

        Args:
            repository: Cache storage backend (required).
            policy: Prefix/TTL table. If None, uses settings.
            coalesce: Singleflight on misses. If None, uses settings.

        Returns:
            Configured CacheService instance
        """
        return cls(repository=repository, policy=policy, coalesce=coalesce)

    # Store primitives

    def get(self, key: str) -> Any | None:
        return self._repository.get(key)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._repository.set(key, value, ttl_seconds)

    def delete(self, key: str) -> bool:
        self._detach_inflight(lambda k: k == key)
        return self._repository.delete(key)

    def delete_by_prefix(self, prefix: str) -> int:
        self._detach_inflight(lambda k: k.startswith(prefix))
        return self._repository.delete_by_prefix(prefix)

    # Read-through

    async def read_through(self, key: str, ttl_seconds: int, fetch_fn: FetchFn[T]) -> T:
        """Return the cached value for key, or fetch and populate it.

        Args:
            key: The cache key
            ttl_seconds: TTL applied when the fetched value is stored
            fetch_fn: Zero-argument coroutine function doing the
                authoritative fetch

        Returns:
            The cached value on a hit, otherwise whatever fetch_fn returned
        """
        cached = self._repository.get(key)
        if cached:
            self._metrics.record_hit()
            logger.debug("Cache hit: %s", key)
            return cached

        self._metrics.record_miss()
        logger.debug("Cache miss: %s", key)

        if not self._coalesce:
            return await self._fetch_and_populate(key, ttl_seconds, fetch_fn)

        task = self._inflight.get(key)
        if task is None or task.done():
            generation = self._generations.get(key, 0)
            task = asyncio.ensure_future(self._fetch_and_populate(key, ttl_seconds, fetch_fn, generation))
            self._inflight[key] = task
            task.add_done_callback(lambda done, k=key: self._forget_inflight(k, done))
        else:
            self._metrics.record_coalesced_wait()
            logger.debug("Joining in-flight fetch: %s", key)

        # A cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    async def _fetch_and_populate(
        self,
        key: str,
        ttl_seconds: int,
        fetch_fn: FetchFn[T],
        generation: int | None = None,
    ) -> T:
        try:
            data = await fetch_fn()
        except Exception:
            self._metrics.record_fetch(failed=True)
            raise
        self._metrics.record_fetch()

        if not data:
            return data
        if generation is not None and self._generations.get(key, 0) != generation:
            logger.debug("Discarding fetch invalidated while in flight: %s", key)
            return data
        self._repository.set(key, data, ttl_seconds)
        return data

    def _forget_inflight(self, key: str, done: asyncio.Future) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]
        if not done.cancelled():
            # Marks the failure as retrieved when every waiter was cancelled
            done.exception()

    def _detach_inflight(self, matches: Callable[[str], bool]) -> None:
        """Stop later readers joining fetches for keys being invalidated."""
        for key in [k for k in self._inflight if matches(k)]:
            del self._inflight[key]
            self._generations[key] = self._generations.get(key, 0) + 1

    async def get_cached_breed(self, breed_id: int, fetch_fn: FetchFn[T]) -> T:
        """Get one breed from cache or fetch it.

        Args:
            breed_id: The breed id
            fetch_fn: Fetches the breed record (or None when missing)

        Returns:
            The breed record, or whatever fetch_fn returned
        """
        return await self.read_through(
            self._policy.breed_key(breed_id),
            self._policy.ttl(CacheFamily.BREED),
            fetch_fn,
        )

    async def get_cached_breed_list(self, category: str | None, fetch_fn: FetchFn[T]) -> T:
        """Get the breed list, optionally for one category, from cache or fetch it.

        Args:
            category: Breed category (e.g. "draft"), or None for all breeds
            fetch_fn: Fetches the list

        Returns:
            The list of breeds
        """
        family = CacheFamily.BREED_BY_CATEGORY if category else CacheFamily.BREED_LIST
        return await self.read_through(
            self._policy.breed_list_key(category),
            self._policy.ttl(family),
            fetch_fn,
        )

    async def get_cached_facts(self, category: str | None, fetch_fn: FetchFn[T]) -> T:
        """Get horse facts, optionally for one category, from cache or fetch them.

        Args:
            category: Fact category (e.g. "health"), or None for all facts
            fetch_fn: Fetches the facts

        Returns:
            The list of facts
        """
        family = CacheFamily.FACTS_BY_CATEGORY if category else CacheFamily.FACTS
        return await self.read_through(
            self._policy.facts_key(category),
            self._policy.ttl(family),
            fetch_fn,
        )

    async def get_cached_search(self, query: str, fetch_fn: FetchFn[T]) -> T:
        """Get breed search results from cache or run the search.

        Breed invalidation does not touch search results; they age out
        after the search TTL.

        Args:
            query: The search text
            fetch_fn: Runs the search

        Returns:
            The search results
        """
        return await self.read_through(
            self._policy.search_key(query),
            self._policy.ttl(CacheFamily.SEARCH),
            fetch_fn,
        )

    async def get_cached_popular_breeds(self, fetch_fn: FetchFn[T]) -> T:
        return await self.read_through(
            self._policy.popular_key(),
            self._policy.ttl(CacheFamily.POPULAR),
            fetch_fn,
        )

    # Invalidation

    async def invalidate_breed_cache(self, breed_id: int | None = None) -> None:
        """Invalidate breed entries after a breed is created, updated or deleted.

        Removes the single-breed entry (when an id is given), every breed
        list and category list, and the popular breeds list. Nothing is
        re-fetched; the next read repopulates. Later readers do not join a
        coalesced fetch already in flight for one of these keys, and that
        fetch does not write its result.

        Args:
            breed_id: Id of the changed breed, if known
        """
        if breed_id is not None:
            self.delete(self._policy.breed_key(breed_id))
        self.delete_by_prefix(self._policy.prefix(CacheFamily.BREED_LIST))
        self.delete_by_prefix(self._policy.prefix(CacheFamily.BREED_BY_CATEGORY))
        self.delete(self._policy.popular_key())
        self._metrics.record_invalidation()
        logger.debug("Breed cache invalidated (breed_id=%s)", breed_id)

    async def invalidate_facts_cache(self) -> None:
        """Invalidate every cached facts list after a fact changes."""
        self.delete_by_prefix(self._policy.prefix(CacheFamily.FACTS))
        self.delete_by_prefix(self._policy.prefix(CacheFamily.FACTS_BY_CATEGORY))
        self._metrics.record_invalidation()
        logger.debug("Facts cache invalidated")

    def clear(self, prefix: str = "") -> int:
        """Delete entries by prefix, everything by default.

        Args:
            prefix: Key prefix to clear

        Returns:
            Number of entries deleted
        """
        count = self.delete_by_prefix(prefix)
        logger.info("Cache cleared (prefix=%r, deleted=%d)", prefix, count)
        return count

    def prune_expired(self) -> int:
        return self._repository.prune_expired()

    # Diagnostics

    def get_cache_stats(self) -> CacheStatsEntity:
        """Get entry count and keys.

        Returns:
            CacheStatsEntity snapshot (may include expired, unpurged keys)
        """
        keys = self._repository.keys()
        return CacheStatsEntity(size=len(keys), keys=keys)

    def get_stats(self) -> dict:
        """Get backend statistics and read-through counters.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._repository.get_stats()
        stats["coalesce"] = self._coalesce
        stats["metrics"] = self._metrics.to_dict()
        return stats

    def is_healthy(self) -> bool:
        return self._repository.health_check()

    def reset_metrics(self) -> None:
        self._metrics = CacheMetrics()

    @property
    def coalesce(self) -> bool:
        """Whether concurrent misses share one fetch."""
        return self._coalesce

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def policy(self) -> CachePolicy:
        """Get the prefix/TTL policy table."""
        return self._policy

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
