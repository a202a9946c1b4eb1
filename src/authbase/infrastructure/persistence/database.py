"""Async SQLAlchemy engine and sessions for the user store.

``DatabaseManager`` owns one engine per process. The application lifespan
connects it and keeps it on ``app.state.db``; request handlers get a session
from ``get_db_session``. SQLite (aiosqlite) and PostgreSQL (asyncpg) URLs
are both accepted.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from authbase.core.config import Settings
from authbase.core.logging import get_logger

logger = get_logger(__name__)

_NOT_CONNECTED = "DatabaseManager.connect() has not been called"


class Base(DeclarativeBase):
    """Declarative base for authbase models."""


class DatabaseManager:
    """Engine and session factory bound to ``Settings.database_url``."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        """The connected engine.

        Raises:
            RuntimeError: Before ``connect()`` or after ``disconnect()``.
        """
        if self._engine is None:
            raise RuntimeError(_NOT_CONNECTED)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError(_NOT_CONNECTED)
        return self._session_factory

    def _engine_options(self) -> dict[str, Any]:
        if not self.is_sqlite:
            return {
                "pool_size": self.settings.db_pool_size,
                "max_overflow": self.settings.db_max_overflow,
                "pool_timeout": self.settings.db_pool_timeout,
                "pool_recycle": self.settings.db_pool_recycle,
            }

        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        db_path = self.settings.database_url.split(":///", 1)[-1]
        if db_path == ":memory:":
            # A single shared connection; each new one would open an empty database
            options["poolclass"] = StaticPool
        elif db_path:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return options

    def connect(self) -> None:
        """Create the engine and the session factory. Idempotent."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self.settings.database_url,
            echo=self.settings.db_echo,
            **self._engine_options(),
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(
            "Database engine created",
            database_url=self._engine.url.render_as_string(hide_password=True),
        )

    async def create_tables(self) -> None:
        """Create missing tables from the models, without migrations."""
        from authbase.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop every table known to the models. Destroys all users."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session; roll back if the block raises.

        Nothing is committed automatically.

        Example:
            async with db.session() as session:
                user = await UserRepository(session).get_user_by_id(1)
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Run ``SELECT 1``; False if the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False
        return True


async def init_database(db: DatabaseManager) -> None:
    """Connect and, in development only, create the tables.

    Other environments must be migrated with alembic beforehand.

    Raises:
        RuntimeError: If the database does not answer.
    """
    db.connect()
    if not await db.check_connection():
        raise RuntimeError("Failed to connect to database")

    if db.settings.is_development:
        logger.info("Creating tables for development")
        await db.create_tables()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from ``app.state.db``."""
    db: DatabaseManager = request.app.state.db
    async with db.session() as session:
        yield session
