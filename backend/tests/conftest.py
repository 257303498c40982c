"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine: In-memory SQLite engine with the schema created
    ├── session_factory: Session factory bound to db_engine
    ├── db_session: One AsyncSession (the store handle services receive)
    ├── add_note: Insert a note with explicit timestamps
    ├── mock_db_session: Mock database session (no real DB)
    └── test_client: HTTPX AsyncClient wired to the app and db_engine
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any notes_api imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notes_api.database import Base, get_db_session
from notes_api.models.note import Note

BASE_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_note(db_session):
    """
    Insert a note directly, bypassing the service, with chosen timestamps.

    Usage:
        note = await add_note("Title", created_at=at(0), updated_at=at(5))
    """
    async def _add(title, content="", created_at=None, updated_at=None):
        note = Note(
            title=title,
            content=content,
            created_at=created_at or BASE_TIME,
            updated_at=updated_at,
        )
        db_session.add(note)
        await db_session.flush()
        return note

    return _add


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = SQLAlchemyError("boom")
        with pytest.raises(DatabaseError):
            await note_service.get_note(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The session dependency is overridden so each request gets its own
    session on the per-test database, with the same commit/rollback
    behaviour as production.
    """
    from notes_api.main import app

    async def _session_override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
