"""DTOs for user use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass

from useraccounts.domain.entities.user import UserRecord


@dataclass(frozen=True)
class UserView:
    """Externally visible projection of a user record. No password hash."""

    id: str
    username: str

    @classmethod
    def from_record(cls, record: UserRecord) -> UserView:
        """Project a record to its view (id and username only)."""
        return cls(id=record.id or "", username=record.username)


@dataclass(frozen=True)
class NewUser:
    """Command: register a user with a plaintext password."""

    username: str
    password: str


@dataclass(frozen=True)
class UserUpdate:
    """Command: replace username and password of the record with this id."""

    id: str | None
    username: str
    password: str
