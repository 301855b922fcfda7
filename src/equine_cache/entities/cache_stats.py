"""Cache statistics domain entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CacheStatsEntity:
    """Snapshot of the store for monitoring and tests.

    Counts may include expired entries that no read has purged yet.

    Attributes:
        size: Number of stored entries
        keys: Every stored key
    """

    size: int
    keys: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"size": self.size, "keys": list(self.keys)}
