"""Request-scoped access to the shared cache objects.

The lifespan hook attaches the process-wide CacheService (and a handler
wrapping it) to ``app.state``; route dependencies read them back from
``request.app.state``. Routes therefore operate on the very cache the host
application reads through, not a private copy.
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request

from equine_cache.cache import get_cache
from equine_cache.handlers import CacheHandler
from equine_cache.services import CacheService

logger = logging.getLogger(__name__)


def _from_state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"app.state.{name} is missing; was the app started without its lifespan?")
    return value


def get_cache_service(request: Request) -> CacheService:
    """Return the CacheService attached during startup.

    Raises:
        RuntimeError: If the lifespan hook has not run
    """
    return _from_state(request, "cache_service")


def get_handler(request: Request) -> CacheHandler:
    """Return the CacheHandler attached during startup.

    Raises:
        RuntimeError: If the lifespan hook has not run
    """
    return _from_state(request, "cache_handler")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Attach the shared cache to the app for the life of the process.

    On shutdown the references are dropped from ``app.state``; cached
    entries stay in the backend.
    """
    cache_service = get_cache()
    app.state.cache_service = cache_service
    app.state.cache_handler = CacheHandler(cache_service=cache_service)

    logger.info(
        "Cache ready (backend=%s, coalesce=%s, healthy=%s)",
        type(cache_service.repository).__name__,
        cache_service.coalesce,
        cache_service.is_healthy(),
    )

    try:
        yield
    finally:
        app.state.cache_handler = None
        app.state.cache_service = None
        logger.info("Cache detached from app")


HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
ServiceDep = Annotated[CacheService, Depends(get_cache_service)]
