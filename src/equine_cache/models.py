from dataclasses import dataclass


@dataclass
class CacheMetrics:
    """Track read-through and invalidation counters."""

    total_lookups: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    fetches: int = 0
    fetch_errors: int = 0
    coalesced_waits: int = 0
    invalidations: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_lookups == 0:
            return 0.0
        return self.cache_hits / self.total_lookups

    def record_hit(self) -> None:
        """Record a cache hit."""
        self.total_lookups += 1
        self.cache_hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self.total_lookups += 1
        self.cache_misses += 1

    def record_fetch(self, failed: bool = False) -> None:
        """Record a call to a fallback fetch."""
        self.fetches += 1
        if failed:
            self.fetch_errors += 1

    def record_coalesced_wait(self) -> None:
        """Record a miss that joined another caller's in-flight fetch."""
        self.coalesced_waits += 1

    def record_invalidation(self) -> None:
        self.invalidations += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_lookups": self.total_lookups,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "fetches": self.fetches,
            "fetch_errors": self.fetch_errors,
            "coalesced_waits": self.coalesced_waits,
            "invalidations": self.invalidations,
        }
