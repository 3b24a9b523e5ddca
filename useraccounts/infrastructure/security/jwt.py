"""JWT token creation and verification for authentication.

Tokens carry the user's record id in ``sub``, the username and session
generation as extra claims, and a session id in ``jti`` so a single
session can be revoked. Uses useraccounts.core.config for the
secret and algorithm.
"""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from useraccounts.core.config import get_settings


def new_session_id() -> str:
    """Return a fresh session id for the jti claim."""
    return uuid.uuid4().hex


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (e.g. sub, jti).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    to_encode.setdefault("jti", new_session_id())
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp, sub and jti. Raises ValueError if the token
    is invalid, expired, or missing required claims.

    Args:
        token: JWT string (e.g. from Authorization header).

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True, "require_jti": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    for claim in ("sub", "jti"):
        if not payload.get(claim):
            raise ValueError(f"Token missing required claim: {claim}")
    return payload
