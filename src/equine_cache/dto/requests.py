"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class InvalidateBreedRequest(BaseModel):
    """Request DTO for invalidating breed entries.

    The handler will convert this to a call to the service layer.
    """

    breed_id: int | None = Field(
        None,
        description="Id of the changed breed (if null, only list views are invalidated)",
        ge=0,
    )


class ClearCacheRequest(BaseModel):
    """Request DTO for clearing cache entries."""

    prefix: str = Field(
        "",
        description="Delete entries whose key starts with this prefix (empty clears all)",
    )
