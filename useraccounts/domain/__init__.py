"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from useraccounts.domain.entities import UserRecord
from useraccounts.domain.enums import Outcome
from useraccounts.domain.exceptions import (
    AccountsException,
    AuthenticationException,
    DuplicateUsernameException,
    UserStoreException,
)

__all__ = [
    "AccountsException",
    "AuthenticationException",
    "DuplicateUsernameException",
    "Outcome",
    "UserRecord",
    "UserStoreException",
]
