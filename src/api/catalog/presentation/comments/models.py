"""Pydantic models for comment API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalog.application.value_objects import CommentView
from catalog.presentation.models import HoagieSummaryResponse, UserSummaryResponse
from shared_kernel.pagination import Page


class CreateCommentRequest(BaseModel):
    """Request model for creating a comment."""

    text: str = Field(..., description="Comment text")
    author_id: str = Field(..., description="Author user ID", min_length=1)
    hoagie_id: str = Field(..., description="Hoagie being commented on", min_length=1)


class UpdateCommentRequest(BaseModel):
    """Request model for editing a comment's text."""

    text: str = Field(..., description="Replacement text")


class CommentResponse(BaseModel):
    """Response model for a comment with its references embedded."""

    id: str = Field(..., description="Comment ID (ULID format)")
    text: str = Field(..., description="Comment text")
    author: UserSummaryResponse | None = Field(
        default=None, description="Author, or null if the user no longer exists"
    )
    hoagie: HoagieSummaryResponse | None = Field(
        default=None, description="Owning hoagie, or null if it no longer exists"
    )
    timestamp: datetime = Field(..., description="When the comment was written")
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")

    @classmethod
    def from_view(cls, view: CommentView) -> CommentResponse:
        """Convert a resolved CommentView to API response."""
        comment = view.comment
        return cls(
            id=comment.id.value,
            text=comment.text,
            author=(
                UserSummaryResponse.from_summary(view.author)
                if view.author is not None
                else None
            ),
            hoagie=(
                HoagieSummaryResponse.from_summary(view.hoagie)
                if view.hoagie is not None
                else None
            ),
            timestamp=comment.timestamp,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentListResponse(BaseModel):
    """One page of comments."""

    items: list[CommentResponse] = Field(default_factory=list)
    total: int = Field(..., description="Total matching comments", ge=0)
    page: int = Field(..., description="1-indexed page number", ge=1)
    limit: int = Field(..., description="Page size after server bounds", ge=1)
    total_pages: int = Field(..., description="Pages needed for total", ge=0)

    @classmethod
    def from_page(cls, page: Page[CommentView]) -> CommentListResponse:
        """Convert a page of views to API response."""
        return cls(
            items=[CommentResponse.from_view(view) for view in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )
