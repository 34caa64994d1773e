"""Comment application service for the catalog bounded context.

Creating or removing a comment is two steps. The comment write commits
first; the hoagie's counter is then adjusted by a separate command to the
hoagie service. If that second step fails the comment write stands, and the
divergence is recorded through the probe so the count can be reconciled.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    CommentServiceProbe,
    DefaultCommentServiceProbe,
)
from catalog.application.services.hoagie_service import HoagieService
from catalog.domain.aggregates import Comment
from catalog.domain.value_objects import CommentId, HoagieId
from catalog.ports.exceptions import HoagieNotFoundError, UserNotFoundError
from catalog.ports.repositories import ICommentRepository, IHoagieRepository
from shared_kernel.identity import UserId, UserSummaryLookup
from shared_kernel.pagination import Page, PageRequest


class CommentService:
    """Application service for comment management."""

    def __init__(
        self,
        comment_repository: ICommentRepository,
        hoagie_repository: IHoagieRepository,
        hoagie_service: HoagieService,
        user_lookup: UserSummaryLookup,
        session: AsyncSession,
        probe: CommentServiceProbe | None = None,
    ):
        """Initialize CommentService with dependencies.

        Args:
            comment_repository: Repository for comment persistence
            hoagie_repository: Read access for hoagie existence checks
            hoagie_service: Receives the comment-count commands
            user_lookup: Resolves the author for existence checks
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._comment_repository = comment_repository
        self._hoagie_repository = hoagie_repository
        self._hoagie_service = hoagie_service
        self._user_lookup = user_lookup
        self._session = session
        self._probe = probe or DefaultCommentServiceProbe()

    async def create(self, text: str, author_id: UserId, hoagie_id: HoagieId) -> Comment:
        """Create a comment, then increment the hoagie's comment count.

        Returns:
            The created Comment, also when the increment failed

        Raises:
            InvalidInputError: If the text is empty
            UserNotFoundError: If the author does not exist
            HoagieNotFoundError: If the hoagie does not exist
        """
        comment = Comment.create(text=text, author_id=author_id, hoagie_id=hoagie_id)

        async with self._session.begin():
            authors = await self._user_lookup.get_summaries([author_id])
            if author_id not in authors:
                raise UserNotFoundError(author_id.value)
            if not await self._hoagie_repository.exists(hoagie_id):
                raise HoagieNotFoundError(hoagie_id.value)

            stored = await self._comment_repository.add(comment)

        self._probe.comment_created(
            stored.id.value, hoagie_id.value, author_id.value
        )

        try:
            await self._hoagie_service.increment_comment_count(hoagie_id)
        except Exception as e:
            self._probe.comment_count_drift(
                hoagie_id=hoagie_id.value,
                comment_id=stored.id.value,
                operation="increment",
                error=str(e),
            )

        return stored

    async def list(
        self, page_request: PageRequest, hoagie_id: HoagieId | None = None
    ) -> Page[Comment]:
        """List comments newest first, optionally scoped to one hoagie."""
        async with self._session.begin():
            return await self._comment_repository.list_page(page_request, hoagie_id)

    async def get(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID."""
        async with self._session.begin():
            return await self._comment_repository.get_by_id(comment_id)

    async def update(self, comment_id: CommentId, text: str) -> Comment | None:
        """Replace a comment's text.

        Returns:
            The updated Comment, or None if it does not exist

        Raises:
            InvalidInputError: If the text is empty
        """
        async with self._session.begin():
            comment = await self._comment_repository.get_by_id(comment_id)
            if comment is None:
                return None

            comment.edit(text)
            stored = await self._comment_repository.save(comment)

        self._probe.comment_updated(comment_id.value)
        return stored

    async def remove(self, comment_id: CommentId) -> Comment | None:
        """Delete a comment, then decrement its hoagie's comment count.

        A missing comment returns None and leaves every counter untouched.

        Returns:
            The removed Comment, or None if it did not exist
        """
        async with self._session.begin():
            comment = await self._comment_repository.get_by_id(comment_id)
            if comment is None:
                return None
            deleted = await self._comment_repository.delete(comment_id)

        if not deleted:
            return None

        self._probe.comment_removed(comment_id.value, comment.hoagie_id.value)

        try:
            await self._hoagie_service.decrement_comment_count(comment.hoagie_id)
        except Exception as e:
            self._probe.comment_count_drift(
                hoagie_id=comment.hoagie_id.value,
                comment_id=comment_id.value,
                operation="decrement",
                error=str(e),
            )

        return comment
