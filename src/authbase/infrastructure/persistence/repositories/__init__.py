"""Repositories for database operations."""

from authbase.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
