"""Base repository: generic reads and commit-per-write helpers."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from useraccounts.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, add and delete.

    Writes are committed immediately; on failure the session is rolled
    back and the error propagates to the caller.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Return all records."""
        result = await self.db.execute(select(self.model))
        return list(result.scalars().all())

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new or modified record and commit."""
        self.db.add(obj)
        await self.commit()
        await self.db.refresh(obj)
        return obj

    async def commit(self) -> None:
        """Commit the session; roll back and re-raise on failure."""
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
