"""Cache: Redis service, user record cache and cache key utilities."""

from useraccounts.infrastructure.cache.keys import revoked_session_key, user_key
from useraccounts.infrastructure.cache.redis_cache import CacheService
from useraccounts.infrastructure.cache.user_cache import UserCache

__all__ = [
    "CacheService",
    "UserCache",
    "revoked_session_key",
    "user_key",
]
