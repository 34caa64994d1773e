"""Pydantic models for hoagie API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from catalog.application.value_objects import HoagieView
from catalog.domain.value_objects import HoagieUpdate
from catalog.presentation.models import UserSummaryResponse
from shared_kernel.identity import UserId
from shared_kernel.pagination import Page


class CreateHoagieRequest(BaseModel):
    """Request model for creating a hoagie."""

    name: str = Field(..., description="Hoagie name", min_length=1, max_length=255)
    ingredients: list[str] = Field(..., description="Ordered ingredient list")
    picture: str | None = Field(default=None, description="Picture reference")
    creator_id: str = Field(..., description="Creating user ID", min_length=1)


class UpdateHoagieRequest(BaseModel):
    """Request model for a partial hoagie update.

    Omitted fields are left unchanged. Creator and comment count cannot be
    set here.
    """

    name: str | None = Field(default=None, max_length=255, description="Hoagie name")
    ingredients: list[str] | None = Field(
        default=None, description="Replacement ingredient list"
    )
    picture: str | None = Field(
        default=None, description="Picture reference; empty string clears it"
    )
    collaborator_ids: list[str] | None = Field(
        default=None, description="Replacement collaborator set"
    )

    def to_domain(self) -> HoagieUpdate:
        """Convert to a HoagieUpdate.

        Raises:
            InvalidInputError: If a collaborator ID is malformed
        """
        collaborators = None
        if self.collaborator_ids is not None:
            collaborators = frozenset(
                UserId.from_string(user_id) for user_id in self.collaborator_ids
            )

        return HoagieUpdate(
            name=self.name,
            ingredients=None if self.ingredients is None else tuple(self.ingredients),
            picture=self.picture,
            collaborator_ids=collaborators,
        )


class AddCollaboratorRequest(BaseModel):
    """Request model for adding a collaborator."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(
        ..., alias="userId", description="User ID to add", min_length=1
    )


class HoagieResponse(BaseModel):
    """Response model for a hoagie with its user references embedded."""

    id: str = Field(..., description="Hoagie ID (ULID format)")
    name: str = Field(..., description="Hoagie name")
    ingredients: list[str] = Field(..., description="Ordered ingredient list")
    picture: str | None = Field(default=None, description="Picture reference")
    creator: UserSummaryResponse | None = Field(
        default=None, description="Creator, or null if the user no longer exists"
    )
    collaborators: list[UserSummaryResponse] = Field(
        default_factory=list, description="Collaborators"
    )
    comment_count: int = Field(..., description="Number of comments", ge=0)
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")

    @classmethod
    def from_view(cls, view: HoagieView) -> HoagieResponse:
        """Convert a resolved HoagieView to API response.

        Args:
            view: Hoagie with resolved user references

        Returns:
            HoagieResponse
        """
        hoagie = view.hoagie
        return cls(
            id=hoagie.id.value,
            name=hoagie.name,
            ingredients=list(hoagie.ingredients),
            picture=hoagie.picture,
            creator=(
                UserSummaryResponse.from_summary(view.creator)
                if view.creator is not None
                else None
            ),
            collaborators=[
                UserSummaryResponse.from_summary(c) for c in view.collaborators
            ],
            comment_count=hoagie.comment_count,
            created_at=hoagie.created_at,
            updated_at=hoagie.updated_at,
        )


class HoagieListResponse(BaseModel):
    """One page of hoagies."""

    items: list[HoagieResponse] = Field(default_factory=list)
    total: int = Field(..., description="Total matching hoagies", ge=0)
    page: int = Field(..., description="1-indexed page number", ge=1)
    limit: int = Field(..., description="Page size after server bounds", ge=1)
    total_pages: int = Field(..., description="Pages needed for total", ge=0)

    @classmethod
    def from_page(cls, page: Page[HoagieView]) -> HoagieListResponse:
        """Convert a page of views to API response."""
        return cls(
            items=[HoagieResponse.from_view(view) for view in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class CommentCountResponse(BaseModel):
    """Result of a comment count reconciliation."""

    hoagie_id: str = Field(..., description="Hoagie ID (ULID format)")
    comment_count: int = Field(..., description="Recomputed comment count", ge=0)
