"""Tests for the entity-family policy table and settings."""

import pytest

from equine_cache.config import Settings
from equine_cache.policy import CACHE_KEYS, CACHE_TTL, CacheFamily, CachePolicy


class TestCacheKeys:
    def setup_method(self):
        self.policy = CachePolicy.default()

    def test_every_family_has_prefix_and_ttl(self):
        assert set(CACHE_KEYS) == set(CacheFamily)
        assert set(CACHE_TTL) == set(CacheFamily)

    def test_breed_key(self):
        assert self.policy.breed_key(42) == "breed:42"

    def test_breed_list_keys(self):
        assert self.policy.breed_list_key(None) == "breeds:list"
        assert self.policy.breed_list_key("") == "breeds:list"
        assert self.policy.breed_list_key("draft") == "breeds:category:draft"

    def test_facts_keys(self):
        assert self.policy.facts_key(None) == "facts:"
        assert self.policy.facts_key("health") == "facts:category:health"

    def test_category_facts_share_the_facts_prefix(self):
        """Clearing "facts:" also clears every category list."""
        assert self.policy.facts_key("health").startswith(self.policy.prefix(CacheFamily.FACTS))

    def test_search_key_is_normalized(self):
        assert self.policy.search_key("  Quarter HORSE ") == "search:quarter horse"

    def test_popular_key(self):
        assert self.policy.popular_key() == "popular:breeds"

    def test_default_ttls(self):
        assert self.policy.ttl(CacheFamily.BREED) == 24 * 60 * 60
        assert self.policy.ttl(CacheFamily.BREED_LIST) == 60 * 60
        assert self.policy.ttl(CacheFamily.BREED_BY_CATEGORY) == 60 * 60
        assert self.policy.ttl(CacheFamily.FACTS) == 24 * 60 * 60
        assert self.policy.ttl(CacheFamily.SEARCH) == 30 * 60
        assert self.policy.ttl(CacheFamily.POPULAR) == 60 * 60


class TestSettings:
    def test_policy_from_settings(self):
        config = Settings(ttl_breed=60, ttl_breed_list=30, ttl_facts=90, ttl_search=10, ttl_popular=20)
        policy = CachePolicy.from_settings(config)

        assert policy.ttl(CacheFamily.BREED) == 60
        assert policy.ttl(CacheFamily.BREED_LIST) == 30
        assert policy.ttl(CacheFamily.BREED_BY_CATEGORY) == 30
        assert policy.ttl(CacheFamily.FACTS_BY_CATEGORY) == 90
        assert policy.ttl(CacheFamily.SEARCH) == 10
        assert policy.ttl(CacheFamily.POPULAR) == 20
        assert policy.prefixes == CACHE_KEYS

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValueError, match="CACHE_BACKEND"):
            Settings(cache_backend="memcached")

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError, match="TTL_SEARCH"):
            Settings(ttl_search=0)

    def test_backend_detection(self):
        assert Settings(cache_backend="REDIS").is_redis_backend is True
        assert Settings(cache_backend="memory").is_redis_backend is False
