import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Cache and admin-API settings, read from the environment (and .env) once."""

    # Backend
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    cache_namespace: str = os.getenv("CACHE_NAMESPACE", "")

    # Redis, only used when CACHE_BACKEND=redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # TTL policy (seconds)
    ttl_breed: int = int(os.getenv("CACHE_TTL_BREED", "86400"))  # 24 hours
    ttl_breed_list: int = int(os.getenv("CACHE_TTL_BREED_LIST", "3600"))  # 1 hour
    ttl_facts: int = int(os.getenv("CACHE_TTL_FACTS", "86400"))  # 24 hours
    ttl_search: int = int(os.getenv("CACHE_TTL_SEARCH", "1800"))  # 30 minutes
    ttl_popular: int = int(os.getenv("CACHE_TTL_POPULAR", "3600"))  # 1 hour

    # Share one in-flight fetch per key among concurrent misses
    cache_coalesce: bool = os.getenv("CACHE_COALESCE", "false").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    # Comma-separated browser origins allowed to call the admin API; none by default
    api_cors_origins: tuple[str, ...] = tuple(
        origin.strip() for origin in os.getenv("API_CORS_ORIGINS", "").split(",") if origin.strip()
    )

    @property
    def is_redis_backend(self) -> bool:
        """Check if the configured backend is Redis.

        Returns:
            True if cache entries live in Redis, False for the in-process map
        """
        return self.cache_backend.lower() == "redis"

    def __post_init__(self) -> None:
        """Reject an unknown backend or a non-positive TTL at startup."""
        if self.cache_backend.lower() not in ("memory", "redis"):
            raise ValueError(
                f"CACHE_BACKEND must be one of ['memory', 'redis'], got {self.cache_backend!r}"
            )

        for name in ("ttl_breed", "ttl_breed_list", "ttl_facts", "ttl_search", "ttl_popular"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be a positive number of seconds")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings."""
    return Settings()


settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Build a client for REDIS_URL that returns str, not bytes."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
