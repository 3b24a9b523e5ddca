"""User domain entity.

Represents a stored user account, independent of persistence. The record
carries the password hash and must be projected to a view before it
leaves the service.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class UserRecord:
    """Durable user account.

    ``id`` is None until the primary store assigns one on first save and
    never changes afterwards. ``username`` and ``password_hash`` are
    replaced in place by updates.
    """

    id: str | None
    username: str
    password_hash: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize the full record (cache payload)."""
        return {
            "id": self.id,
            "username": self.username,
            "password_hash": self.password_hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserRecord":
        """Build a record from a serialized dict; missing keys become empty."""
        return cls(
            id=data.get("id"),
            username=data.get("username", ""),
            password_hash=data.get("password_hash", ""),
        )

    def rename(self, username: str) -> None:
        self.username = username

    def change_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
