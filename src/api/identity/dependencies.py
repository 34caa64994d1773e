"""FastAPI dependency providers for the identity bounded context."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identity.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from identity.application.services import AuthenticationService, UserService
from identity.application.value_objects import AuthenticationPolicy
from identity.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session
from infrastructure.settings import get_auth_settings, get_pagination_settings


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance."""
    return DefaultAuthenticationProbe()


@lru_cache
def get_authentication_policy() -> AuthenticationPolicy:
    """Get the login policy, resolved once per process from AuthSettings."""
    return AuthenticationPolicy.from_settings(get_auth_settings())


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    user_service_probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        user_service_probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(
        user_repository=user_repo,
        session=session,
        probe=user_service_probe,
        bcrypt_rounds=get_auth_settings().bcrypt_rounds,
        search_max_limit=get_pagination_settings().search_max_limit,
    )


def get_authentication_service(
    user_service: Annotated[UserService, Depends(get_user_service)],
    policy: Annotated[AuthenticationPolicy, Depends(get_authentication_policy)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthenticationService:
    """Get AuthenticationService instance."""
    return AuthenticationService(user_service=user_service, policy=policy, probe=probe)
