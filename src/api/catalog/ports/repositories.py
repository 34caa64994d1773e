"""Repository protocols (ports) for the catalog bounded context.

The hoagie repository is the only writer of the denormalized comment count.
Its counter and collaborator operations are single store-level statements,
so concurrent callers never lose an update or create a duplicate.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from catalog.domain.aggregates import Comment, Hoagie
from catalog.domain.value_objects import CommentId, HoagieId, HoagieSummary
from shared_kernel.identity import UserId
from shared_kernel.pagination import Page, PageRequest


@runtime_checkable
class IHoagieRepository(Protocol):
    """Repository for Hoagie aggregate persistence."""

    async def add(self, hoagie: Hoagie) -> Hoagie:
        """Persist a new hoagie.

        Returns:
            The stored Hoagie with timestamps populated
        """
        ...

    async def get_by_id(self, hoagie_id: HoagieId) -> Hoagie | None:
        """Retrieve a hoagie with its collaborator set loaded.

        Returns:
            The Hoagie aggregate, or None if not found
        """
        ...

    async def exists(self, hoagie_id: HoagieId) -> bool:
        """Whether a hoagie with this id exists."""
        ...

    async def list_page(
        self, page_request: PageRequest, creator_id: UserId | None = None
    ) -> Page[Hoagie]:
        """List hoagies newest first.

        Args:
            page_request: Validated page and limit
            creator_id: When given, only hoagies created by this user

        Returns:
            One page of hoagies plus the total number of matches
        """
        ...

    async def save(self, hoagie: Hoagie) -> Hoagie:
        """Persist the mutable fields of an existing hoagie.

        Writes name, ingredients and picture, and replaces the stored
        collaborator set with ``hoagie.collaborator_ids``. Never writes the
        creator or the comment count.

        Returns:
            The stored Hoagie
        """
        ...

    async def delete(self, hoagie_id: HoagieId) -> bool:
        """Delete a hoagie along with its comments and collaborator rows.

        Returns:
            True if a hoagie was deleted
        """
        ...

    async def add_collaborator(self, hoagie_id: HoagieId, user_id: UserId) -> bool:
        """Add a collaborator if absent.

        Returns:
            True if the collaborator was inserted, False if already present
        """
        ...

    async def remove_collaborator(self, hoagie_id: HoagieId, user_id: UserId) -> bool:
        """Remove a collaborator if present.

        Returns:
            True if a collaborator was removed, False if absent
        """
        ...

    async def increment_comment_count(self, hoagie_id: HoagieId) -> bool:
        """Atomically add one to the comment count.

        Returns:
            True if the hoagie exists and was updated
        """
        ...

    async def decrement_comment_count(self, hoagie_id: HoagieId) -> bool:
        """Atomically subtract one from a positive comment count.

        Returns:
            True if the count was decremented; False if the hoagie is missing
            or its count is already zero
        """
        ...

    async def recount_comments(self, hoagie_id: HoagieId) -> int | None:
        """Reset the comment count to the number of live comments.

        Returns:
            The recomputed count, or None if the hoagie does not exist
        """
        ...

    async def get_summaries(
        self, hoagie_ids: Iterable[HoagieId]
    ) -> dict[HoagieId, HoagieSummary]:
        """Batch-resolve hoagie ids into public summaries.

        Returns:
            Mapping of id to summary; unknown ids are absent
        """
        ...


@runtime_checkable
class ICommentRepository(Protocol):
    """Repository for Comment aggregate persistence."""

    async def add(self, comment: Comment) -> Comment:
        """Persist a new comment.

        Returns:
            The stored Comment with timestamps populated
        """
        ...

    async def get_by_id(self, comment_id: CommentId) -> Comment | None:
        """Retrieve a comment by its ID."""
        ...

    async def list_page(
        self, page_request: PageRequest, hoagie_id: HoagieId | None = None
    ) -> Page[Comment]:
        """List comments newest first.

        Args:
            page_request: Validated page and limit
            hoagie_id: When given, only comments on this hoagie

        Returns:
            One page of comments plus the total number of matches
        """
        ...

    async def save(self, comment: Comment) -> Comment:
        """Persist an edited comment's text.

        Returns:
            The stored Comment
        """
        ...

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment.

        Returns:
            True if a comment was deleted
        """
        ...
