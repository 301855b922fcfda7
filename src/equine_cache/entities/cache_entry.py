"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for one stored key.

    This is an internal representation used by repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        key: Unique key, a family prefix plus optional qualifier (e.g. "breed:42")
        value: The payload as encoded JSON text
        expires_at: Absolute expiry in epoch milliseconds
    """

    key: str
    value: str
    expires_at: float

    def is_expired(self, now_ms: float) -> bool:
        """Check whether the entry is stale at the given instant.

        An entry is stale from its expiry instant onwards.
        """
        return now_ms >= self.expires_at
