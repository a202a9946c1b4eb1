"""SQLAlchemy model for the users table."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from authbase.domain.entities import USER_STATUS_ACTIVE, User
from authbase.infrastructure.persistence.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Autoincrement primary key.
        name: Display name.
        email: Email address (unique).
        password_hash: bcrypt hash, stored in the ``password`` column.
        status: Account status.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        deleted_at: Soft-delete marker.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    password_hash: Mapped[str] = mapped_column(
        "password",
        String(255),
        nullable=False,
        comment="bcrypt hash ($2y$ prefix)",
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=USER_STATUS_ACTIVE,
        server_default=USER_STATUS_ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        server_default=func.now(),
        onupdate=_utc_now,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Soft-delete timestamp",
    )

    def to_entity(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            password_hash=self.password_hash,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
            deleted_at=self.deleted_at,
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, status={self.status})>"
