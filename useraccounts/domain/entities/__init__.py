"""Domain entities."""

from useraccounts.domain.entities.user import UserRecord

__all__ = ["UserRecord"]
