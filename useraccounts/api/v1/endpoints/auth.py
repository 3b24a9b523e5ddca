"""Auth API: login (issue a bearer token) and logout (revoke it)."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from useraccounts.api.v1.dependencies import (
    get_current_session,
    get_session_store,
    get_user_repo,
)
from useraccounts.core.config import get_settings
from useraccounts.domain.exceptions import AuthenticationException
from useraccounts.infrastructure.persistence.repositories.user_repo import UserRepository
from useraccounts.infrastructure.security.jwt import create_access_token
from useraccounts.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)
from useraccounts.infrastructure.security.sessions import CallerSession, SessionStore
from useraccounts.schemas.auth import LoginRequest, TokenResponse
from useraccounts.schemas.user import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Compared against when the username is unknown so both paths cost one bcrypt check.
_DUMMY_HASH = get_password_hash("dummy-password-for-timing")


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": MessageResponse}},
)
async def login(
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> TokenResponse:
    """Authenticate with username and password; return a JWT."""
    record = await user_repo.find_by_username(body.username)
    hashed = record.password_hash if record is not None else _DUMMY_HASH
    valid = await asyncio.to_thread(verify_password, body.password, hashed)
    if record is None or not valid:
        logger.info("Failed login for %s", body.username)
        raise AuthenticationException("Invalid credentials")

    settings = get_settings()
    generation = await store.current_generation(record.id)
    token = create_access_token(
        data={"sub": record.id, "username": record.username, "gen": generation},
    )
    logger.info("User %s logged in", record.username)
    return TokenResponse(
        access_token=token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": MessageResponse}},
)
async def logout(
    session: Annotated[CallerSession, Depends(get_current_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> MessageResponse:
    """Revoke the presented token."""
    await store.revoke(session)
    logger.info("User %s logged out", session.username)
    return MessageResponse(message="Logged out")
