"""User ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from useraccounts.core.constants import OBJECT_ID_LENGTH
from useraccounts.infrastructure.persistence.database import Base
from useraccounts.shared.utils.generators import generate_object_id


class User(Base):
    """User model. Table: app_user. Unique username."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    username: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_app_user_username"),
    )
