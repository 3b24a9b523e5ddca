"""Application ports (repository and service protocols)."""

from useraccounts.application.interfaces.repositories import IUserRepository
from useraccounts.application.interfaces.services import (
    IPasswordHasher,
    ISessionInvalidator,
    IUserCache,
)

__all__ = [
    "IPasswordHasher",
    "ISessionInvalidator",
    "IUserCache",
    "IUserRepository",
]
