"""Integration test fixtures.

Each test gets its own file-backed SQLite database (via aiosqlite) with
the full schema created from the ORM metadata. A file database rather
than an in-memory one lets separate sessions, and so concurrent
requests, use separate connections.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog.application.services import (
    CommentService,
    HoagieService,
    ReferenceResolver,
)
from catalog.infrastructure.comment_repository import CommentRepository
from catalog.infrastructure.hoagie_repository import HoagieRepository
from catalog.infrastructure.models import (  # noqa: F401
    CommentModel,
    HoagieCollaboratorModel,
    HoagieModel,
)
from identity.application.services import UserService
from identity.domain.aggregates import User
from identity.infrastructure.models import UserModel  # noqa: F401
from identity.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import (
    DatabaseSettings,
    get_auth_settings,
    get_pagination_settings,
)

TEST_BCRYPT_ROUNDS = 4


@dataclass
class Services:
    """Application services sharing one session, wired like a request."""

    users: UserService
    hoagies: HoagieService
    comments: CommentService
    resolver: ReferenceResolver


def build_services(session: AsyncSession) -> Services:
    """Wire the application services around ``session``."""
    user_repository = UserRepository(session=session)
    hoagie_repository = HoagieRepository(session=session)
    hoagies = HoagieService(
        hoagie_repository=hoagie_repository,
        user_lookup=user_repository,
        session=session,
    )
    return Services(
        users=UserService(
            user_repository=user_repository,
            session=session,
            bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        ),
        hoagies=hoagies,
        comments=CommentService(
            comment_repository=CommentRepository(session=session),
            hoagie_repository=hoagie_repository,
            hoagie_service=hoagies,
            user_lookup=user_repository,
            session=session,
        ),
        resolver=ReferenceResolver(
            user_lookup=user_repository,
            hoagie_repository=hoagie_repository,
            session=session,
        ),
    )


@pytest.fixture
def db_settings(tmp_path) -> DatabaseSettings:
    """Database settings pointing at a fresh SQLite file."""
    return DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'hoagies.db'}")


@pytest_asyncio.fixture
async def engine(db_settings: DatabaseSettings) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine with the schema created."""
    engine = create_engine(db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Provide a session factory for tests that need several sessions."""
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def services(async_session: AsyncSession) -> Services:
    """Application services bound to the test session."""
    return build_services(async_session)


@pytest.fixture
def register_user(services: Services) -> Callable:
    """Register a user through UserService."""

    async def _register(name: str, email: str, password: str = "secret123") -> User:
        return await services.users.register(name=name, email=email, password=password)

    return _register


@pytest_asyncio.fixture
async def alice(register_user) -> User:
    return await register_user("Alice", "alice@example.com")


@pytest_asyncio.fixture
async def bob(register_user) -> User:
    return await register_user("Bob", "bob@example.com")


@pytest_asyncio.fixture
async def carol(register_user) -> User:
    return await register_user("Carol", "carol@example.com")


@pytest.fixture
def fast_hashing(monkeypatch) -> None:
    """Lower the bcrypt work factor for requests made through the app."""
    monkeypatch.setenv("HOAGIE_AUTH_BCRYPT_ROUNDS", str(TEST_BCRYPT_ROUNDS))
    monkeypatch.delenv("HOAGIE_AUTH_TEST_MODE", raising=False)
    get_auth_settings.cache_clear()
    get_pagination_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()
    get_pagination_settings.cache_clear()


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
    fast_hashing: None,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client for the app, backed by the test database."""
    from main import app

    async def _get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session

    async with LifespanManager(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_services() -> Callable[[AsyncSession], Services]:
    """Wire services around a session the test opened itself."""
    return build_services
