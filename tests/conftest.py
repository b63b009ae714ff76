"""Pytest configuration and shared fixtures for all tests."""

import os

# Minimal environment for Settings() at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("ENVIRONMENT", "test")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from aiohttp.test_utils import TestClient, TestServer  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from api.app import create_app  # noqa: E402
from app.config.settings import Settings  # noqa: E402
from app.models import Base, User  # noqa: E402
from app.services.user_service import UserService  # noqa: E402


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        cors_origins="http://localhost:5500,https://luxearn.site",
        log_file=str(tmp_path / "ledger.log"),
    )


@pytest_asyncio.fixture
async def engine(test_settings):
    """Async engine with all tables created."""
    engine = create_async_engine(test_settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    """Session for a single test."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker, test_settings):
    """HTTP client for the API application."""
    app = create_app(session_maker, test_settings)
    async with TestClient(TestServer(app)) as client:
        yield client


@pytest.fixture
def register(session):
    """
    Register a user, optionally under a referrer, and commit.

    Usage:
        alice = await register("alice@example.com")
        bob = await register("bob@example.com", referrer=alice)
    """
    async def _register(email: str, referrer: User | None = None) -> User:
        service = UserService(session)
        user, _ = await service.register(
            email, referrer.referral_code if referrer else None
        )
        await session.commit()
        return user

    return _register
