"""Unit tests for database dependency injection.

Tests the FastAPI dependency providers for async database sessions. The
engine is pointed at an in-memory SQLite database so no server is needed.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_session,
    get_sessionmaker,
)
from infrastructure.settings import get_database_settings


@pytest_asyncio.fixture(autouse=True)
async def sqlite_engine(monkeypatch):
    """Point the module-level engine at in-memory SQLite for each test."""
    monkeypatch.setenv("HOAGIE_DB_URL", "sqlite+aiosqlite:///:memory:")
    get_database_settings.cache_clear()
    await close_database_connections()

    yield

    await close_database_connections()
    get_database_settings.cache_clear()


@pytest.mark.asyncio
async def test_get_engine():
    """Test that get_engine returns an AsyncEngine."""
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "sqlite+aiosqlite"


@pytest.mark.asyncio
async def test_engine_is_singleton():
    """Test that the engine is cached and reused."""
    assert get_engine() is get_engine()


@pytest.mark.asyncio
async def test_sessionmaker_is_bound_to_engine():
    engine = get_engine()

    async with get_sessionmaker()() as session:
        assert session.bind.sync_engine is engine.sync_engine


@pytest.mark.asyncio
async def test_get_session_yields_exactly_one_session():
    """Test that sessions are properly yielded from async generators."""
    session_count = 0

    async for session in get_session():
        session_count += 1
        assert isinstance(session, AsyncSession)

    assert session_count == 1


@pytest.mark.asyncio
async def test_close_database_connections():
    """Test that close_database_connections disposes the engine."""
    engine = get_engine()

    await close_database_connections()

    # After closing, getting the engine again creates a new instance
    assert get_engine() is not engine
