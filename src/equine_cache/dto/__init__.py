"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ClearCacheRequest, InvalidateBreedRequest
from .responses import (
    CacheStatsResponse,
    ClearCacheResponse,
    HealthCheckResponse,
    InvalidationResponse,
)

__all__ = [
    "InvalidateBreedRequest",
    "ClearCacheRequest",
    "CacheStatsResponse",
    "ClearCacheResponse",
    "HealthCheckResponse",
    "InvalidationResponse",
]
