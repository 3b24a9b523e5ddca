"""User record cache on top of CacheService (implements IUserCache).

Entries hold the full record (including the password hash) as JSON under
user:id:<id>. They are a disposable copy of the primary store.
"""

from __future__ import annotations

import logging

from useraccounts.core.constants import CACHE_KEY_SEP
from useraccounts.domain.entities.user import UserRecord
from useraccounts.infrastructure.cache.keys import user_key
from useraccounts.infrastructure.cache.redis_cache import CacheService

logger = logging.getLogger(__name__)


class UserCache:
    """Cache of user records keyed by user id."""

    def __init__(self, cache: CacheService, ttl: int | None = None) -> None:
        self.cache = cache
        self._ttl = ttl

    async def get(self, user_id: str) -> UserRecord | None:
        if CACHE_KEY_SEP in user_id:
            return None
        data = await self.cache.get(user_key(user_id))
        if not isinstance(data, dict):
            return None
        return UserRecord.from_dict(data)

    async def set(self, user_id: str, record: UserRecord) -> None:
        await self.cache.set(user_key(user_id), record.to_dict(), ttl=self._ttl)

    async def delete(self, user_id: str) -> None:
        if CACHE_KEY_SEP in user_id:
            return
        await self.cache.delete(user_key(user_id))

    async def keys_matching(self, user_id: str) -> set[str]:
        """Return {user_id} if an entry exists for exactly this id, else an empty set."""
        if not user_id or CACHE_KEY_SEP in user_id:
            return set()
        if await self.cache.exists(user_key(user_id)):
            return {user_id}
        return set()
