"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog.presentation import router as catalog_router
from identity.application.services import UserService
from identity.infrastructure.user_repository import UserRepository
from identity.presentation import auth_router, users_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_sessionmaker,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import get_auth_settings, get_settings
from infrastructure.version import __version__


async def seed_test_user(probe: StartupProbe) -> None:
    """Create or reset the passwordless test account.

    Failures are recorded and do not stop the application from starting.
    """
    settings = get_auth_settings()
    probe.test_mode_enabled(settings.test_user_email)

    try:
        async with get_sessionmaker()() as session:
            service = UserService(
                user_repository=UserRepository(session=session),
                session=session,
                bcrypt_rounds=settings.bcrypt_rounds,
            )
            user = await service.ensure_test_user(
                name=settings.test_user_name,
                email=settings.test_user_email,
                password=settings.test_user_password.get_secret_value(),
            )
    except Exception as e:
        probe.test_user_seed_failed(error=str(e))
        return

    probe.test_user_seeded(user_id=user.id.value, email=user.email)


@asynccontextmanager
async def hoagie_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Test account seeding when auth test mode is enabled
    - Engine disposal on shutdown
    """
    configure_logging(get_settings().log_level)

    if get_auth_settings().test_mode:
        await seed_test_user(DefaultStartupProbe())

    yield

    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Hoagies, their collaborators and comments",
    version=__version__,
    lifespan=hoagie_lifespan,
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(catalog_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
