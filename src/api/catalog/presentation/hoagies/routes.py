"""HTTP routes for hoagie management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.services import HoagieService, ReferenceResolver
from catalog.dependencies import (
    get_hoagie_service,
    get_pagination,
    get_reference_resolver,
)
from catalog.domain.value_objects import HoagieId
from catalog.presentation.hoagies.models import (
    AddCollaboratorRequest,
    CommentCountResponse,
    CreateHoagieRequest,
    HoagieListResponse,
    HoagieResponse,
    UpdateHoagieRequest,
)
from infrastructure.settings import PaginationSettings
from shared_kernel.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from shared_kernel.identity import UserId
from shared_kernel.pagination import PageRequest

router = APIRouter(
    prefix="/hoagies",
    tags=["hoagies"],
)

RequesterId = Annotated[
    str,
    Query(alias="userId", description="ID of the user making the request"),
]


def _parse_hoagie_id(hoagie_id: str) -> HoagieId:
    try:
        return HoagieId.from_string(hoagie_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid hoagie ID format",
        )


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format",
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Hoagie created"},
        400: {"description": "Missing or invalid field"},
        404: {"description": "Creator not found"},
        500: {"description": "Internal server error"},
    },
)
async def create_hoagie(
    request: CreateHoagieRequest,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Create a hoagie.

    The hoagie starts with no collaborators and a comment count of zero.

    Args:
        request: Name, ingredients, optional picture and creator ID
        service: Hoagie service
        resolver: Resolves embedded user summaries

    Returns:
        HoagieResponse for the created hoagie

    Raises:
        HTTPException: 400 if a field is invalid
        HTTPException: 404 if the creator does not exist
        HTTPException: 500 for unexpected errors
    """
    creator_id = _parse_user_id(request.creator_id)

    try:
        hoagie = await service.create(
            name=request.name,
            ingredients=request.ingredients,
            creator_id=creator_id,
            picture=request.picture,
        )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create hoagie",
        )


@router.get(
    "",
    response_model=HoagieListResponse,
    summary="List hoagies",
    description="List hoagies newest first, optionally filtered by creator",
)
async def list_hoagies(
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
    pagination: Annotated[PaginationSettings, Depends(get_pagination)],
    page: Annotated[int, Query(description="1-indexed page number")] = 1,
    limit: Annotated[int | None, Query(description="Page size")] = None,
    creator: Annotated[str | None, Query(description="Creator user ID")] = None,
) -> HoagieListResponse:
    """List hoagies.

    Raises:
        HTTPException: 400 if page, limit or creator is invalid
    """
    creator_id = _parse_user_id(creator) if creator is not None else None

    try:
        page_request = PageRequest.create(
            page=page,
            limit=limit if limit is not None else pagination.default_limit,
            max_limit=pagination.max_limit,
        )
        result = await service.list(page_request, creator_id=creator_id)
        views = await resolver.hoagie_views(result.items)
        return HoagieListResponse.from_page(result.with_items(views))

    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list hoagies",
        )


@router.get("/{hoagie_id}")
async def get_hoagie(
    hoagie_id: str,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Get a hoagie by ID.

    Raises:
        HTTPException: 400 if the ID is malformed
        HTTPException: 404 if the hoagie does not exist
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)

    try:
        hoagie = await service.get(hoagie_id_obj)
        if hoagie is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Hoagie not found",
            )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve hoagie",
        )


@router.put("/{hoagie_id}")
async def update_hoagie(
    hoagie_id: str,
    request: UpdateHoagieRequest,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Update a hoagie's name, ingredients, picture or collaborators.

    Args:
        hoagie_id: Hoagie ID (ULID format)
        request: Fields to change; omitted fields are kept
        service: Hoagie service
        resolver: Resolves embedded user summaries

    Raises:
        HTTPException: 400 if a field is invalid or names the creator as a
            collaborator
        HTTPException: 404 if the hoagie or a new collaborator does not exist
        HTTPException: 500 for unexpected errors
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)

    try:
        hoagie = await service.update(hoagie_id_obj, request.to_domain())
        if hoagie is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Hoagie not found",
            )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except HTTPException:
        raise
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update hoagie",
        )


@router.delete("/{hoagie_id}")
async def delete_hoagie(
    hoagie_id: str,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Delete a hoagie together with its comments.

    Returns:
        The deleted hoagie

    Raises:
        HTTPException: 400 if the ID is malformed
        HTTPException: 404 if the hoagie does not exist
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)

    try:
        hoagie = await service.remove(hoagie_id_obj)
        if hoagie is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Hoagie not found",
            )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete hoagie",
        )


@router.post("/{hoagie_id}/collaborators")
async def add_collaborator(
    hoagie_id: str,
    request: AddCollaboratorRequest,
    requester: RequesterId,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Add a collaborator. Only the creator may do this.

    Adding a user who is already a collaborator succeeds without change.

    Args:
        hoagie_id: Hoagie ID (ULID format)
        request: The user to add
        requester: The user making the request
        service: Hoagie service
        resolver: Resolves embedded user summaries

    Raises:
        HTTPException: 400 if an ID is malformed or the user is the creator
        HTTPException: 403 if the requester is not the creator
        HTTPException: 404 if the hoagie or user does not exist
        HTTPException: 500 for unexpected errors
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)
    user_id = _parse_user_id(request.user_id)
    requester_id = _parse_user_id(requester)

    try:
        hoagie = await service.add_collaborator(
            hoagie_id_obj, user_id=user_id, requester_id=requester_id
        )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except ForbiddenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the creator can add collaborators",
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add collaborator",
        )


@router.delete("/{hoagie_id}/collaborators/{user_id}")
async def remove_collaborator(
    hoagie_id: str,
    user_id: str,
    requester: RequesterId,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> HoagieResponse:
    """Remove a collaborator. Only the creator may do this.

    Removing a user who is not a collaborator succeeds without change.

    Raises:
        HTTPException: 400 if an ID is malformed
        HTTPException: 403 if the requester is not the creator
        HTTPException: 404 if the hoagie does not exist
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)
    user_id_obj = _parse_user_id(user_id)
    requester_id = _parse_user_id(requester)

    try:
        hoagie = await service.remove_collaborator(
            hoagie_id_obj, user_id=user_id_obj, requester_id=requester_id
        )
        return HoagieResponse.from_view(await resolver.hoagie_view(hoagie))

    except ForbiddenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the creator can remove collaborators",
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove collaborator",
        )


@router.post("/{hoagie_id}/reconcile-comment-count")
async def reconcile_comment_count(
    hoagie_id: str,
    service: Annotated[HoagieService, Depends(get_hoagie_service)],
) -> CommentCountResponse:
    """Recompute a hoagie's comment count from its comments.

    Used to repair a count after a logged comment-count drift.

    Raises:
        HTTPException: 404 if the hoagie does not exist
    """
    hoagie_id_obj = _parse_hoagie_id(hoagie_id)

    try:
        count = await service.reconcile_comment_count(hoagie_id_obj)
        return CommentCountResponse(hoagie_id=hoagie_id_obj.value, comment_count=count)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reconcile comment count",
        )
