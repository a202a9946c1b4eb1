"""SQLAlchemy models."""

from authbase.infrastructure.persistence.models.user import UserModel

__all__ = ["UserModel"]
