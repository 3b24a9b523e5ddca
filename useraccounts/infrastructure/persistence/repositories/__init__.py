"""SQLAlchemy repositories."""

from useraccounts.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["UserRepository"]
