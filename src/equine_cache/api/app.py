from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from equine_cache.api.dependencies import HandlerDep, ServiceDep, lifespan
from equine_cache.config import settings
from equine_cache.dto import (
    CacheStatsResponse,
    ClearCacheRequest,
    ClearCacheResponse,
    HealthCheckResponse,
    InvalidateBreedRequest,
    InvalidationResponse,
)
from equine_cache.policy import CacheFamily

app = FastAPI(
    title="Equine Cache API",
    description="Read-through cache administration for breed and horse-fact reference data",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=list(settings.api_cors_origins),
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Equine Cache API",
        "version": "0.1.0",
        "description": "Read-through cache administration for breed and horse-fact reference data",
        "endpoints": {
            "health": "GET /health",
            "stats": "GET /cache/stats",
            "policy": "GET /cache/policy",
            "invalidate_breeds": "POST /cache/invalidate/breeds",
            "invalidate_facts": "POST /cache/invalidate/facts",
            "clear": "DELETE /cache?prefix=",
            "prune": "POST /cache/prune",
            "reset_stats": "POST /stats/reset",
            "docs": "GET /docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/cache/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get entry count, keys and read-through counters."""
    return await handler.get_stats()


@app.get("/cache/policy", response_model=dict[str, dict[str, Any]])
async def get_policy(service: ServiceDep) -> dict[str, dict[str, Any]]:
    """Get the prefix and TTL of every cached entity family."""
    policy = service.policy
    return {
        family.value: {"prefix": policy.prefix(family), "ttl_seconds": policy.ttl(family)}
        for family in CacheFamily
    }


@app.post("/cache/invalidate/breeds", response_model=InvalidationResponse)
async def invalidate_breeds(
    handler: HandlerDep,
    request: InvalidateBreedRequest | None = None,
) -> InvalidationResponse:
    """
    Invalidate breed entries after a breed is created, updated or deleted.

    Args:
        request: Optional body with the id of the changed breed.

    Returns:
        Invalidation confirmation.
    """
    return await handler.invalidate_breeds(request or InvalidateBreedRequest())


@app.post("/cache/invalidate/facts", response_model=InvalidationResponse)
async def invalidate_facts(handler: HandlerDep) -> InvalidationResponse:
    """Invalidate every cached facts list."""
    return await handler.invalidate_facts()


@app.delete("/cache", response_model=ClearCacheResponse)
async def clear_cache(handler: HandlerDep, prefix: str = "") -> ClearCacheResponse:
    """
    Delete cache entries.

    Args:
        prefix: Only delete keys starting with this prefix. Empty clears all.

    Returns:
        Number of entries deleted.
    """
    return await handler.clear_cache(ClearCacheRequest(prefix=prefix))


@app.post("/cache/prune", response_model=ClearCacheResponse)
async def prune_cache(handler: HandlerDep) -> ClearCacheResponse:
    """Remove expired entries no read has purged yet."""
    return await handler.prune_expired()


@app.post("/stats/reset", response_model=dict[str, str])
async def reset_stats(service: ServiceDep) -> dict[str, str]:
    """Reset read-through counters."""
    service.reset_metrics()
    return {"message": "Cache metrics reset"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "equine_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
