"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    size: int = Field(
        ...,
        description="Number of stored entries (may include expired, unpurged ones)",
        ge=0,
    )
    keys: list[str] = Field(default_factory=list, description="Stored keys")
    backend: str = Field(..., description="Storage backend: 'memory' or 'redis'")
    coalesce: bool = Field(..., description="Whether concurrent misses share one fetch")
    metrics: dict[str, Any] = Field(
        default_factory=dict,
        description="Read-through counters (hits, misses, fetches, invalidations)",
    )


class InvalidationResponse(BaseModel):
    """Response DTO for an invalidation request."""

    success: bool = Field(..., description="Whether the operation succeeded")
    family: str = Field(..., description="Entity family invalidated: 'breeds' or 'facts'")
    message: str = Field(..., description="Human-readable status message")


class ClearCacheResponse(BaseModel):
    """Response DTO for clear and prune operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
