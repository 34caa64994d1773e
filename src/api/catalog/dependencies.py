"""FastAPI dependency providers for the catalog bounded context.

Every provider in a request shares one AsyncSession through FastAPI's
dependency caching. Services open their own ``session.begin()`` blocks
one after another on that session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    CommentServiceProbe,
    DefaultCommentServiceProbe,
    DefaultHoagieServiceProbe,
    HoagieServiceProbe,
)
from catalog.application.services import (
    CommentService,
    HoagieService,
    ReferenceResolver,
)
from catalog.infrastructure.comment_repository import CommentRepository
from catalog.infrastructure.hoagie_repository import HoagieRepository
from identity.dependencies import get_user_repository
from infrastructure.database.dependencies import get_session
from infrastructure.settings import PaginationSettings, get_pagination_settings
from shared_kernel.identity import UserSummaryLookup


def get_hoagie_service_probe() -> HoagieServiceProbe:
    """Get HoagieServiceProbe instance."""
    return DefaultHoagieServiceProbe()


def get_comment_service_probe() -> CommentServiceProbe:
    """Get CommentServiceProbe instance."""
    return DefaultCommentServiceProbe()


def get_user_summary_lookup(
    user_repo: Annotated[UserSummaryLookup, Depends(get_user_repository)],
) -> UserSummaryLookup:
    """Expose the identity user repository through the lookup port.

    Args:
        user_repo: Identity repository (implements get_summaries)

    Returns:
        UserSummaryLookup for catalog services
    """
    return user_repo


def get_hoagie_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HoagieRepository:
    """Get HoagieRepository instance."""
    return HoagieRepository(session=session)


def get_comment_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CommentRepository:
    """Get CommentRepository instance."""
    return CommentRepository(session=session)


def get_hoagie_service(
    hoagie_repo: Annotated[HoagieRepository, Depends(get_hoagie_repository)],
    user_lookup: Annotated[UserSummaryLookup, Depends(get_user_summary_lookup)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[HoagieServiceProbe, Depends(get_hoagie_service_probe)],
) -> HoagieService:
    """Get HoagieService instance.

    Args:
        hoagie_repo: Hoagie repository (shares session via FastAPI dependency caching)
        user_lookup: User reference lookup
        session: Database session for transaction management
        probe: Hoagie service probe for observability

    Returns:
        HoagieService instance
    """
    return HoagieService(
        hoagie_repository=hoagie_repo,
        user_lookup=user_lookup,
        session=session,
        probe=probe,
    )


def get_comment_service(
    comment_repo: Annotated[CommentRepository, Depends(get_comment_repository)],
    hoagie_repo: Annotated[HoagieRepository, Depends(get_hoagie_repository)],
    hoagie_service: Annotated[HoagieService, Depends(get_hoagie_service)],
    user_lookup: Annotated[UserSummaryLookup, Depends(get_user_summary_lookup)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[CommentServiceProbe, Depends(get_comment_service_probe)],
) -> CommentService:
    """Get CommentService instance."""
    return CommentService(
        comment_repository=comment_repo,
        hoagie_repository=hoagie_repo,
        hoagie_service=hoagie_service,
        user_lookup=user_lookup,
        session=session,
        probe=probe,
    )


def get_reference_resolver(
    user_lookup: Annotated[UserSummaryLookup, Depends(get_user_summary_lookup)],
    hoagie_repo: Annotated[HoagieRepository, Depends(get_hoagie_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ReferenceResolver:
    """Get ReferenceResolver instance."""
    return ReferenceResolver(
        user_lookup=user_lookup,
        hoagie_repository=hoagie_repo,
        session=session,
    )


def get_pagination() -> PaginationSettings:
    """Get pagination bounds for list endpoints."""
    return get_pagination_settings()
