"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authbase.application.ports import UserRepositoryPort
from authbase.core.logging import get_logger
from authbase.domain.entities import User
from authbase.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)


class UserRepository(UserRepositoryPort):
    """Repository for user database operations.

    Soft-deleted users are invisible to every lookup. Writes are flushed,
    not committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email address.

        Args:
            email: User's email address.

        Returns:
            User if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(
                UserModel.email == email,
                UserModel.deleted_at.is_(None),
            )
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model is not None else None

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            user_id: User ID.

        Returns:
            User if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(
                UserModel.id == user_id,
                UserModel.deleted_at.is_(None),
            )
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model is not None else None

    async def create_user(
        self, name: str, email: str, password_hash: str, status: str
    ) -> User | None:
        """Create a new user.

        Args:
            name: Display name.
            email: Email address.
            password_hash: bcrypt hash of the password.
            status: Initial account status.

        Returns:
            The created user, or None if the insert was rejected
            (for example a duplicate email).
        """
        model = UserModel(
            name=name,
            email=email,
            password_hash=password_hash,
            status=status,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("User insert rejected", email=email, error=str(e.orig))
            return None

        if model.id is None:
            return None
        return model.to_entity()
