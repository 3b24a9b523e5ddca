"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (Redis cache, SQL engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from useraccounts.core.config import get_settings
from useraccounts.infrastructure.cache.redis_cache import CacheService
from useraccounts.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the cache (if enabled), yield, then disconnect and dispose the engine.

    A Redis that cannot be reached at startup leaves the cache disabled;
    the service keeps answering from the primary store.
    """
    settings = get_settings()

    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled by configuration")

    yield

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    await dispose_engine()
    logger.info("Shutdown complete")
