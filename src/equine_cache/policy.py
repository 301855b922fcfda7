"""Entity-family cache policy.

Each cached entity family owns one reserved key prefix and one TTL. The read
helpers and the invalidation routine both look families up here, so the key
taxonomy is defined in exactly one place.

    | Family            | Prefix / key       | TTL  |
    |-------------------|--------------------|------|
    | BREED             | breed:             | 24h  |
    | BREED_LIST        | breeds:list        | 1h   |
    | BREED_BY_CATEGORY | breeds:category:   | 1h   |
    | FACTS             | facts:             | 24h  |
    | FACTS_BY_CATEGORY | facts:category:    | 24h  |
    | SEARCH            | search:            | 30m  |
    | POPULAR           | popular:breeds     | 1h   |
"""

from dataclasses import dataclass
from enum import Enum

from equine_cache.config import Settings, settings


class CacheFamily(str, Enum):
    """Cached entity families."""

    BREED = "breed"
    BREED_LIST = "breed_list"
    BREED_BY_CATEGORY = "breed_by_category"
    FACTS = "facts"
    FACTS_BY_CATEGORY = "facts_by_category"
    SEARCH = "search"
    POPULAR = "popular"


# Key prefixes for organization
CACHE_KEYS: dict[CacheFamily, str] = {
    CacheFamily.BREED: "breed:",
    CacheFamily.BREED_LIST: "breeds:list",
    CacheFamily.BREED_BY_CATEGORY: "breeds:category:",
    CacheFamily.FACTS: "facts:",
    CacheFamily.FACTS_BY_CATEGORY: "facts:category:",
    CacheFamily.SEARCH: "search:",
    CacheFamily.POPULAR: "popular:breeds",
}

# TTL values in seconds
CACHE_TTL: dict[CacheFamily, int] = {
    CacheFamily.BREED: 86400,
    CacheFamily.BREED_LIST: 3600,
    CacheFamily.BREED_BY_CATEGORY: 3600,
    CacheFamily.FACTS: 86400,
    CacheFamily.FACTS_BY_CATEGORY: 86400,
    CacheFamily.SEARCH: 1800,
    CacheFamily.POPULAR: 3600,
}


@dataclass(frozen=True)
class CachePolicy:
    """Prefix and TTL for every entity family.

    Attributes:
        prefixes: Family to reserved key prefix
        ttls: Family to time-to-live in seconds
    """

    prefixes: dict[CacheFamily, str]
    ttls: dict[CacheFamily, int]

    @classmethod
    def default(cls) -> "CachePolicy":
        """Policy with the built-in TTL table."""
        return cls(prefixes=dict(CACHE_KEYS), ttls=dict(CACHE_TTL))

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "CachePolicy":
        """Policy with TTLs taken from settings.

        Args:
            config: Settings to read TTLs from. Defaults to the global settings.

        Returns:
            CachePolicy whose TTLs honor the CACHE_TTL_* variables
        """
        config = config or settings
        return cls(
            prefixes=dict(CACHE_KEYS),
            ttls={
                CacheFamily.BREED: config.ttl_breed,
                CacheFamily.BREED_LIST: config.ttl_breed_list,
                CacheFamily.BREED_BY_CATEGORY: config.ttl_breed_list,
                CacheFamily.FACTS: config.ttl_facts,
                CacheFamily.FACTS_BY_CATEGORY: config.ttl_facts,
                CacheFamily.SEARCH: config.ttl_search,
                CacheFamily.POPULAR: config.ttl_popular,
            },
        )

    def prefix(self, family: CacheFamily) -> str:
        return self.prefixes[family]

    def ttl(self, family: CacheFamily) -> int:
        return self.ttls[family]

    def breed_key(self, breed_id: int) -> str:
        """Key for a single breed.

        Example:
            >>> CachePolicy.default().breed_key(42)
            'breed:42'
        """
        return f"{self.prefixes[CacheFamily.BREED]}{breed_id}"

    def breed_list_key(self, category: str | None) -> str:
        """Key for the full breed list, or one category of it.

        Example:
            >>> CachePolicy.default().breed_list_key("draft")
            'breeds:category:draft'
            >>> CachePolicy.default().breed_list_key(None)
            'breeds:list'
        """
        if category:
            return f"{self.prefixes[CacheFamily.BREED_BY_CATEGORY]}{category}"
        return self.prefixes[CacheFamily.BREED_LIST]

    def facts_key(self, category: str | None) -> str:
        """Key for all facts, or the facts of one category."""
        if category:
            return f"{self.prefixes[CacheFamily.FACTS_BY_CATEGORY]}{category}"
        return self.prefixes[CacheFamily.FACTS]

    def search_key(self, query: str) -> str:
        """Key for a search result set.

        Queries differing only in case or surrounding whitespace share a key.
        """
        return f"{self.prefixes[CacheFamily.SEARCH]}{query.strip().lower()}"

    def popular_key(self) -> str:
        return self.prefixes[CacheFamily.POPULAR]
