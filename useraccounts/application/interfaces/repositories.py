"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from useraccounts.domain.entities.user import UserRecord


# User repository interface (primary store)
class IUserRepository(Protocol):
    """Protocol for the durable user store. Username is presumed unique."""

    async def find_all(self) -> list[UserRecord]:
        """Return every stored record."""

    async def find_by_id(self, user_id: str) -> UserRecord | None:
        """Return the record with this id, or None."""

    async def find_by_username(self, username: str) -> UserRecord | None:
        """Return the record with this username, or None."""

    async def save(self, record: UserRecord) -> UserRecord:
        """Insert (assigning record.id) or update the record; return it."""

    async def delete_by_id(self, user_id: str) -> None:
        """Remove the record with this id; no error when it does not exist."""
