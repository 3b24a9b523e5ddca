"""Session revocation (logout and forced re-authentication).

A session is the jti of a bearer token. Logout revokes that one jti until
the token would have expired anyway. A credential change or deletion bumps
the user's session generation, which revokes every token issued before it.
When Redis is unavailable revocation cannot be recorded and tokens stay
valid until expiry.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from useraccounts.infrastructure.cache.keys import (
    revoked_session_key,
    session_generation_key,
)
from useraccounts.infrastructure.cache.redis_cache import CacheService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerSession:
    """Authenticated caller resolved from a bearer token.

    ``user_id`` comes from the token; ``username`` is the record's current
    username, loaded from the primary store on every request.
    """

    user_id: str
    username: str
    session_id: str
    expires_at: int
    generation: int = 0


class SessionStore:
    """Revoked-session registry backed by CacheService."""

    def __init__(self, cache: CacheService) -> None:
        self.cache = cache

    async def current_generation(self, user_id: str) -> int:
        """Return the user's session generation (0 when never bumped)."""
        value = await self.cache.get(session_generation_key(user_id))
        return value if isinstance(value, int) else 0

    async def revoke(self, session: CallerSession) -> bool:
        """Mark the session revoked until its expiry. Returns True if recorded."""
        ttl = max(int(session.expires_at - time.time()), 1)
        stored = await self.cache.set(revoked_session_key(session.session_id), 1, ttl=ttl)
        if not stored:
            logger.warning(
                "Could not record revocation of session for %s (cache unavailable)",
                session.user_id,
            )
        return stored

    async def revoke_all(self, user_id: str) -> bool:
        """Invalidate every token issued to user_id so far. Returns True if recorded."""
        generation = await self.cache.incr(session_generation_key(user_id))
        if generation is None:
            logger.warning(
                "Could not revoke sessions of %s (cache unavailable)", user_id
            )
            return False
        logger.info("Sessions of %s revoked (generation %s)", user_id, generation)
        return True

    async def is_revoked(self, session: CallerSession) -> bool:
        if await self.cache.exists(revoked_session_key(session.session_id)):
            return True
        return session.generation != await self.current_generation(session.user_id)


class TokenSessionInvalidator:
    """Session invalidation collaborator bound to the current caller's token.

    Revokes the presented token and every other token of the same user.
    """

    def __init__(self, store: SessionStore, session: CallerSession) -> None:
        self._store = store
        self._session = session

    async def invalidate(self) -> None:
        await self._store.revoke(self._session)
        await self._store.revoke_all(self._session.user_id)
