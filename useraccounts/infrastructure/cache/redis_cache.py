"""Redis-based cache service.

Provides async Redis access with optional TTL and JSON serialization.
Every operation degrades to a miss (None / False / empty) when Redis is
unavailable, so callers fall through to the primary store.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from useraccounts.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache service.

    Uses useraccounts.core.config for connection settings. Call connect()
    at startup and disconnect() at shutdown.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When given,
                the service is considered connected.
        """
        self.redis = redis_client
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        settings = get_settings()
        try:
            self.redis = redis.Redis(
                host=settings.redis_host,
                port=settings.redis_port,
                db=settings.redis_db,
                password=(
                    settings.redis_password.get_secret_value()
                    if settings.redis_password
                    else None
                ),
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                settings.redis_host,
                settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a dropped connection. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _execute(
        self,
        label: str,
        command: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run command against Redis; reconnect once on connection loss.

        Args:
            label: Operation and key for log messages (e.g. "get user:id:1").
            command: Callable receiving the live client.
            default: Value returned when Redis is unavailable or errors.

        Returns:
            The command result, or default.
        """
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await command(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s failed after reconnect", label)
                    return default
            logger.warning("Cache %s unavailable (Redis disconnected)", label)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error", label)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use useraccounts.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        value = await self._execute(f"get {key}", lambda r: r.get(key), None)
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value, optionally with a TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds; None keeps the entry until deleted.

        Returns:
            True if stored, False otherwise.
        """
        serialized = json.dumps(value)

        async def _set(r: redis.Redis) -> bool:
            await r.set(key, serialized, ex=ttl)
            logger.debug("Cache SET: %s (TTL: %s)", key, ttl)
            return True

        return await self._execute(f"set {key}", _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command ran.

        Args:
            key: Cache key to delete.

        Returns:
            True if deleted, False otherwise.
        """

        async def _delete(r: redis.Redis) -> bool:
            await r.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._execute(f"delete {key}", _delete, False)

    async def exists(self, key: str) -> bool:
        """Return True if key is present."""

        async def _exists(r: redis.Redis) -> bool:
            return bool(await r.exists(key))

        return await self._execute(f"exists {key}", _exists, False)

    async def incr(self, key: str) -> int | None:
        """Atomically increment an integer counter. Returns the new value, or None if unavailable."""

        async def _incr(r: redis.Redis) -> int:
            return int(await r.incr(key))

        return await self._execute(f"incr {key}", _incr, None)
