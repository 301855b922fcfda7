"""HTTP handlers for cache administration.

Each handler calls one CacheService operation and shapes the result into a
response DTO. Backend failures surface as 500s, an unreachable backend on
the health probe as 503.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from equine_cache.dto import (
    CacheStatsResponse,
    ClearCacheRequest,
    ClearCacheResponse,
    HealthCheckResponse,
    InvalidateBreedRequest,
    InvalidationResponse,
)
from equine_cache.services import CacheService

logger = logging.getLogger(__name__)


@contextmanager
def _backend_errors(action: str) -> Iterator[None]:
    """Log any failure inside the block and re-raise it as a 500."""
    try:
        yield
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Failed to %s", action)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}: {e}",
        ) from e


class CacheHandler:
    """Admin endpoints over a CacheService.

    The same service instance backs the host application's read-through
    lookups, so invalidating here is visible to every reader at once.

    Example:
        ```python
        handler = CacheHandler(cache_service=CacheService.create(repository=repo))

        @app.post("/cache/invalidate/facts")
        async def invalidate_facts():
            return await handler.invalidate_facts()
        ```
    """

    def __init__(self, cache_service: CacheService) -> None:
        self._cache = cache_service

    async def get_stats(self) -> CacheStatsResponse:
        """GET /cache/stats: entry count, keys and read-through counters."""
        with _backend_errors("get stats"):
            snapshot = self._cache.get_cache_stats()
            stats = self._cache.get_stats()
            return CacheStatsResponse(
                size=snapshot.size,
                keys=snapshot.keys,
                backend=stats.get("backend", "unknown"),
                coalesce=stats.get("coalesce", False),
                metrics=stats.get("metrics", {}),
            )

    async def invalidate_breeds(self, request: InvalidateBreedRequest) -> InvalidationResponse:
        """POST /cache/invalidate/breeds.

        Args:
            request: Carries the id of the changed breed, if any

        Returns:
            InvalidationResponse naming what was dropped
        """
        with _backend_errors("invalidate breeds"):
            await self._cache.invalidate_breed_cache(request.breed_id)

        target = f"breed {request.breed_id} and " if request.breed_id is not None else ""
        return InvalidationResponse(
            success=True,
            family="breeds",
            message=f"Invalidated {target}breed lists",
        )

    async def invalidate_facts(self) -> InvalidationResponse:
        """POST /cache/invalidate/facts."""
        with _backend_errors("invalidate facts"):
            await self._cache.invalidate_facts_cache()

        return InvalidationResponse(
            success=True,
            family="facts",
            message="Invalidated all facts lists",
        )

    async def clear_cache(self, request: ClearCacheRequest) -> ClearCacheResponse:
        """DELETE /cache.

        Args:
            request: Holds the key prefix to drop; empty drops everything

        Returns:
            ClearCacheResponse with the number of entries removed
        """
        with _backend_errors("clear cache"):
            count = self._cache.clear(request.prefix)

        return ClearCacheResponse(
            success=True,
            deleted_count=count,
            message=f"Deleted {count} entries",
        )

    async def prune_expired(self) -> ClearCacheResponse:
        """POST /cache/prune: drop expired entries no read has purged yet."""
        with _backend_errors("prune cache"):
            count = self._cache.prune_expired()

        return ClearCacheResponse(
            success=True,
            deleted_count=count,
            message=f"Pruned {count} expired entries",
        )

    async def health_check(self) -> HealthCheckResponse:
        """GET /health.

        Raises:
            HTTPException: 503 if the backend does not answer
        """
        if not self._cache.is_healthy():
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache backend unreachable",
            )
        return HealthCheckResponse(status="healthy", cache_healthy=True)
