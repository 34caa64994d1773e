"""HTTP routes for comment management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog.application.services import CommentService, ReferenceResolver
from catalog.dependencies import (
    get_comment_service,
    get_pagination,
    get_reference_resolver,
)
from catalog.domain.value_objects import CommentId, HoagieId
from catalog.presentation.comments.models import (
    CommentListResponse,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from infrastructure.settings import PaginationSettings
from shared_kernel.exceptions import InvalidInputError, NotFoundError
from shared_kernel.identity import UserId
from shared_kernel.pagination import PageRequest

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
)


def _parse_comment_id(comment_id: str) -> CommentId:
    try:
        return CommentId.from_string(comment_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid comment ID format",
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Comment created"},
        400: {"description": "Empty text or malformed ID"},
        404: {"description": "Author or hoagie not found"},
        500: {"description": "Internal server error"},
    },
)
async def create_comment(
    request: CreateCommentRequest,
    service: Annotated[CommentService, Depends(get_comment_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> CommentResponse:
    """Create a comment on a hoagie.

    The hoagie's comment count goes up by one.

    Args:
        request: Text, author ID and hoagie ID
        service: Comment service
        resolver: Resolves embedded author and hoagie summaries

    Raises:
        HTTPException: 400 if the text is empty or an ID is malformed
        HTTPException: 404 if the author or hoagie does not exist
        HTTPException: 500 for unexpected errors
    """
    try:
        comment = await service.create(
            text=request.text,
            author_id=UserId.from_string(request.author_id),
            hoagie_id=HoagieId.from_string(request.hoagie_id),
        )
        return CommentResponse.from_view(await resolver.comment_view(comment))

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
            detail="Failed to create comment",
        )


@router.get(
    "",
    response_model=CommentListResponse,
    summary="List comments",
    description="List comments newest first, optionally for a single hoagie",
)
async def list_comments(
    service: Annotated[CommentService, Depends(get_comment_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
    pagination: Annotated[PaginationSettings, Depends(get_pagination)],
    hoagie: Annotated[str | None, Query(description="Hoagie ID")] = None,
    page: Annotated[int, Query(description="1-indexed page number")] = 1,
    limit: Annotated[int | None, Query(description="Page size")] = None,
) -> CommentListResponse:
    """List comments.

    Raises:
        HTTPException: 400 if page, limit or hoagie ID is invalid
    """
    try:
        hoagie_id = HoagieId.from_string(hoagie) if hoagie is not None else None
        page_request = PageRequest.create(
            page=page,
            limit=limit if limit is not None else pagination.default_limit,
            max_limit=pagination.max_limit,
        )
        result = await service.list(page_request, hoagie_id=hoagie_id)
        views = await resolver.comment_views(result.items)
        return CommentListResponse.from_page(result.with_items(views))

    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list comments",
        )


@router.get("/{comment_id}")
async def get_comment(
    comment_id: str,
    service: Annotated[CommentService, Depends(get_comment_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> CommentResponse:
    """Get a comment by ID."""
    comment_id_obj = _parse_comment_id(comment_id)

    try:
        comment = await service.get(comment_id_obj)
        if comment is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Comment not found",
            )
        return CommentResponse.from_view(await resolver.comment_view(comment))

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve comment",
        )


@router.put("/{comment_id}")
async def update_comment(
    comment_id: str,
    request: UpdateCommentRequest,
    service: Annotated[CommentService, Depends(get_comment_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> CommentResponse:
    """Edit a comment's text.

    Raises:
        HTTPException: 400 if the text is empty
        HTTPException: 404 if the comment does not exist
    """
    comment_id_obj = _parse_comment_id(comment_id)

    try:
        comment = await service.update(comment_id_obj, text=request.text)
        if comment is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Comment not found",
            )
        return CommentResponse.from_view(await resolver.comment_view(comment))

    except HTTPException:
        raise
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update comment",
        )


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    service: Annotated[CommentService, Depends(get_comment_service)],
    resolver: Annotated[ReferenceResolver, Depends(get_reference_resolver)],
) -> CommentResponse:
    """Delete a comment.

    The owning hoagie's comment count goes down by one.

    Returns:
        The deleted comment

    Raises:
        HTTPException: 404 if the comment does not exist
    """
    comment_id_obj = _parse_comment_id(comment_id)

    try:
        comment = await service.remove(comment_id_obj)
        if comment is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Comment not found",
            )
        return CommentResponse.from_view(await resolver.comment_view(comment))

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment",
        )
