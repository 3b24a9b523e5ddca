"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the cache, the caller's
identity and the user access service. Routes depend only on these
dependencies, not on infrastructure directly.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from useraccounts.application.services.user_service import UserAccessService
from useraccounts.core.config import get_settings
from useraccounts.domain.exceptions import AuthenticationException
from useraccounts.infrastructure.cache.redis_cache import CacheService
from useraccounts.infrastructure.cache.user_cache import UserCache
from useraccounts.infrastructure.persistence.database import get_db
from useraccounts.infrastructure.persistence.repositories.user_repo import UserRepository
from useraccounts.infrastructure.security.jwt import verify_token
from useraccounts.infrastructure.security.password import BcryptPasswordHasher
from useraccounts.infrastructure.security.sessions import (
    CallerSession,
    SessionStore,
    TokenSessionInvalidator,
)

logger = logging.getLogger(__name__)

# Shared instance used when the app runs without Redis; never connects.
_DISABLED_CACHE = CacheService()


def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository bound to the request's DB session."""
    return UserRepository(db)


def get_cache(request: Request) -> CacheService:
    """Cache service from app state; a disabled one when Redis is off."""
    cache = getattr(request.app.state, "cache", None)
    return cache if cache is not None else _DISABLED_CACHE


def get_user_cache(
    cache: Annotated[CacheService, Depends(get_cache)],
) -> UserCache:
    return UserCache(cache, ttl=get_settings().cache_ttl_users)


def get_session_store(
    cache: Annotated[CacheService, Depends(get_cache)],
) -> SessionStore:
    return SessionStore(cache)


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


# ---- Auth (caller identity from JWT) ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> CallerSession:
    """Return the caller's session from the bearer token.

    The token's sub is the record id; the caller's username is read from
    the primary store so renames never hand the token to another account.
    Raises 401 if the token is missing, invalid or revoked, or the record is gone.
    """
    if not credentials:
        raise AuthenticationException()
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationException() from e
    user_id = payload["sub"]
    token_session = CallerSession(
        user_id=user_id,
        username=payload.get("username", ""),
        session_id=payload["jti"],
        expires_at=int(payload["exp"]),
        generation=int(payload.get("gen", 0)),
    )
    if await store.is_revoked(token_session):
        logger.info("Rejected revoked session for %s", user_id)
        raise AuthenticationException()
    record = await user_repo.find_by_id(user_id)
    if record is None:
        logger.info("Rejected token for missing user %s", user_id)
        raise AuthenticationException()
    return replace(token_session, username=record.username)


async def get_current_caller(
    session: Annotated[CallerSession, Depends(get_current_session)],
) -> str:
    """Return the authenticated caller's username."""
    return session.username


def get_session_invalidator(
    store: Annotated[SessionStore, Depends(get_session_store)],
    session: Annotated[CallerSession, Depends(get_current_session)],
) -> TokenSessionInvalidator:
    return TokenSessionInvalidator(store, session)


# ---- Application services ----


def get_user_access_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    cache: Annotated[UserCache, Depends(get_user_cache)],
    hasher: Annotated[BcryptPasswordHasher, Depends(get_password_hasher)],
) -> UserAccessService:
    """Access service for reads and registration (no session to invalidate)."""
    return UserAccessService(user_repo=user_repo, cache=cache, password_hasher=hasher)


def get_owner_access_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    cache: Annotated[UserCache, Depends(get_user_cache)],
    hasher: Annotated[BcryptPasswordHasher, Depends(get_password_hasher)],
    invalidator: Annotated[TokenSessionInvalidator, Depends(get_session_invalidator)],
) -> UserAccessService:
    """Access service for owner writes; invalidates the caller's session on success."""
    return UserAccessService(
        user_repo=user_repo,
        cache=cache,
        password_hasher=hasher,
        session_invalidator=invalidator,
    )
