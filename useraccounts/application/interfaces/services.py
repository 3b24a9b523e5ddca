"""Service interfaces (ports) for the application layer.

Protocols define contracts for the collaborators of the access service (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from useraccounts.domain.entities.user import UserRecord


class IUserCache(Protocol):
    """Key-value cache of full user records keyed by user id."""

    async def get(self, user_id: str) -> UserRecord | None:
        """Return the cached record or None on a miss."""

    async def set(self, user_id: str, record: UserRecord) -> None:
        """Store the record under user_id."""

    async def delete(self, user_id: str) -> None:
        """Evict the entry for user_id."""

    async def keys_matching(self, user_id: str) -> set[str]:
        """Return the cached ids equal to user_id (empty set when absent)."""


class IPasswordHasher(Protocol):
    """One-way password hashing."""

    def hash(self, plaintext: str) -> str:
        """Return an opaque hash of plaintext."""


class ISessionInvalidator(Protocol):
    """Ends the caller's authenticated session (forces re-authentication)."""

    async def invalidate(self) -> None:
        """Invalidate the current caller's session."""
