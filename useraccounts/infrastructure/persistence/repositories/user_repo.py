"""User repository (primary store). Implements IUserRepository with domain records."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from useraccounts.domain.entities.user import UserRecord
from useraccounts.domain.exceptions import DuplicateUsernameException
from useraccounts.infrastructure.persistence.models.user import User
from useraccounts.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _user_to_record(u: User) -> UserRecord:
    """Map ORM User to domain UserRecord."""
    return UserRecord(id=u.id, username=u.username, password_hash=u.hashed_password)


class UserRepository(BaseRepository[User]):
    """User repository. find_all, find_by_id, find_by_username, save, delete_by_id."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def find_all(self) -> list[UserRecord]:
        return [_user_to_record(u) for u in await self.get_all()]

    async def find_by_id(self, user_id: str) -> UserRecord | None:
        user = await self.get_by_id(user_id)
        return _user_to_record(user) if user else None

    async def find_by_username(self, username: str) -> UserRecord | None:
        result = await self.db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        return _user_to_record(user) if user else None

    async def save(self, record: UserRecord) -> UserRecord:
        """Insert or update record; assign record.id on insert.

        Raises:
            DuplicateUsernameException: If another row already has the username.
        """
        user = await self.get_by_id(record.id) if record.id else None
        if user is None:
            user = User(username=record.username, hashed_password=record.password_hash)
            if record.id:
                user.id = record.id
        else:
            user.username = record.username
            user.hashed_password = record.password_hash
        try:
            user = await self.add(user)
        except IntegrityError:
            logger.warning("Username %s already taken (constraint)", record.username)
            raise DuplicateUsernameException(record.username) from None
        record.id = user.id
        return record

    async def delete_by_id(self, user_id: str) -> None:
        """Delete by id; a missing row is not an error."""
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.commit()
