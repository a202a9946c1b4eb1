"""Pytest configuration for all tests."""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from authbase.core.config import Settings
from authbase.infrastructure.api.app import create_app, wire_services
from authbase.infrastructure.auth import BcryptPasswordHasher, JWTService, TokenService
from authbase.infrastructure.persistence.database import DatabaseManager
from authbase.infrastructure.sessions import MemorySessionStore

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!!"


class FakeClock:
    """Controllable clock, starting at the real current time."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: in-memory SQLite, in-memory sessions, cheap bcrypt."""
    return Settings(
        environment="testing",
        jwt_secret=TEST_SECRET,
        database_url="sqlite+aiosqlite:///:memory:",
        session_store="memory",
        password_hash_rounds=4,
        log_format="console",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(clock: FakeClock) -> MemorySessionStore:
    return MemorySessionStore(clock=clock)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(TEST_SECRET)


@pytest.fixture
def token_service(
    jwt_service: JWTService, session_store: MemorySessionStore, clock: FakeClock
) -> TokenService:
    return TokenService(jwt_service, session_store, clock=clock)


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def db(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Connected database manager with all tables created."""
    manager = DatabaseManager(settings)
    manager.connect()
    await manager.create_tables()
    yield manager
    await manager.drop_tables()
    await manager.disconnect()


@pytest_asyncio.fixture
async def db_session(db: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    async with db.session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(
    settings: Settings,
    db: DatabaseManager,
    session_store: MemorySessionStore,
    clock: FakeClock,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app wired to the test database and session store."""
    app = create_app(settings)
    wire_services(app, db=db, session_store=session_store, clock=clock)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
