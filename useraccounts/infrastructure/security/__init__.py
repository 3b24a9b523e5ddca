"""Security: JWT, password hashing, and session revocation."""

from useraccounts.infrastructure.security.jwt import create_access_token, verify_token
from useraccounts.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)
from useraccounts.infrastructure.security.sessions import (
    CallerSession,
    SessionStore,
    TokenSessionInvalidator,
)

__all__ = [
    "BcryptPasswordHasher",
    "CallerSession",
    "SessionStore",
    "TokenSessionInvalidator",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
