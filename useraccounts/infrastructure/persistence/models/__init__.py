"""ORM models. Import here so Alembic autogenerate sees every table."""

from useraccounts.infrastructure.persistence.models.user import User

__all__ = ["User"]
