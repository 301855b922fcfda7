"""Shared fixtures: a manual clock, in-memory caches and a fake Redis client."""

import re

import pytest
import redis

from equine_cache import cache as cache_module
from equine_cache.policy import CachePolicy
from equine_cache.repositories import InMemoryCacheRepository
from equine_cache.services import CacheService


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: float = 1_700_000_000_000.0) -> None:
        self._now = start_ms

    def now_ms(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds * 1000


class FakeRedis:
    """Just enough of redis.Redis (decode_responses=True) for the repository."""

    def __init__(self, clock: ManualClock) -> None:
        self._clock = clock
        self.data: dict[str, tuple[str, float]] = {}
        self.scan_patterns: list[str] = []

    def _live(self, key: str) -> bool:
        item = self.data.get(key)
        if item is None:
            return False
        if self._clock.now_ms() >= item[1]:
            del self.data[key]
            return False
        return True

    def get(self, name: str) -> str | None:
        return self.data[name][0] if self._live(name) else None

    def set(self, name: str, value: str, px: int | None = None) -> bool:
        expires_at = self._clock.now_ms() + px if px else float("inf")
        self.data[name] = (value, expires_at)
        return True

    def delete(self, *names: str) -> int:
        return sum(1 for name in names if self._live(name) and self.data.pop(name, None))

    def scan_iter(self, match: str | None = None, count: int | None = None):
        self.scan_patterns.append(match)
        assert match is not None and match.endswith("*")
        prefix = re.sub(r"\\(.)", r"\1", match[:-1])
        for key in list(self.data):
            if key.startswith(prefix) and self._live(key):
                yield key

    def ping(self) -> bool:
        return True


class BrokenRedis(FakeRedis):
    """Fake client whose server is unreachable."""

    def ping(self) -> bool:
        raise redis.ConnectionError("Connection refused")

    def get(self, name: str) -> str | None:
        raise redis.ConnectionError("Connection refused")

    def scan_iter(self, match: str | None = None, count: int | None = None):
        raise redis.ConnectionError("Connection refused")


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def repository(clock) -> InMemoryCacheRepository:
    return InMemoryCacheRepository(clock=clock)


@pytest.fixture
def service(repository) -> CacheService:
    return CacheService.create(
        repository=repository,
        policy=CachePolicy.default(),
        coalesce=False,
    )


@pytest.fixture
def fake_redis(clock) -> FakeRedis:
    return FakeRedis(clock)


@pytest.fixture
def global_cache(service):
    """Install an isolated service as the process-wide cache."""
    cache_module.set_cache(service)
    yield service
    cache_module.set_cache(None)


@pytest.fixture
def broken_redis(clock) -> BrokenRedis:
    return BrokenRedis(clock)
