"""SQLAlchemy implementation of ICommentRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.aggregates import Comment
from catalog.domain.value_objects import CommentId, HoagieId
from catalog.infrastructure.models import CommentModel
from catalog.infrastructure.observability import (
    CommentRepositoryProbe,
    DefaultCommentRepositoryProbe,
)
from catalog.ports.exceptions import CommentNotFoundError
from catalog.ports.repositories import ICommentRepository
from shared_kernel.identity import UserId
from shared_kernel.pagination import Page, PageRequest


class CommentRepository(ICommentRepository):
    """SQLAlchemy-backed repository for Comment aggregates.

    Never touches the owning hoagie's comment count; that is the hoagie
    service's job.
    """

    def __init__(
        self, session: AsyncSession, probe: CommentRepositoryProbe | None = None
    ) -> None:
        self._session = session
        self._probe = probe or DefaultCommentRepositoryProbe()

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        model = CommentModel(
            id=comment.id.value,
            text=comment.text,
            author_id=comment.author_id.value,
            hoagie_id=comment.hoagie_id.value,
            timestamp=comment.timestamp,
        )
        self._session.add(model)
        await self._session.flush()

        self._probe.comment_saved(comment.id.value, comment.hoagie_id.value)
        return self._to_domain(model)

    async def get_by_id(self, comment_id: CommentId) -> Comment | None:
        """Retrieve a comment by its ID."""
        stmt = (
            select(CommentModel)
            .where(CommentModel.id == comment_id.value)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.comment_not_found(comment_id.value)
            return None

        return self._to_domain(model)

    async def list_page(
        self, page_request: PageRequest, hoagie_id: HoagieId | None = None
    ) -> Page[Comment]:
        """List comments newest first, optionally scoped to one hoagie."""
        count_stmt = select(func.count()).select_from(CommentModel)
        stmt = select(CommentModel)
        if hoagie_id is not None:
            count_stmt = count_stmt.where(CommentModel.hoagie_id == hoagie_id.value)
            stmt = stmt.where(CommentModel.hoagie_id == hoagie_id.value)

        total = (await self._session.execute(count_stmt)).scalar_one()
        if page_request.is_past(total):
            return Page(
                items=[], total=total, page=page_request.page, limit=page_request.limit
            )

        stmt = (
            stmt.order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)

        return Page(
            items=[self._to_domain(m) for m in result.scalars().all()],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )

    async def save(self, comment: Comment) -> Comment:
        """Write an edited comment's text.

        Raises:
            CommentNotFoundError: If the comment no longer exists
        """
        result = await self._session.execute(
            update(CommentModel)
            .where(CommentModel.id == comment.id.value)
            .values(text=comment.text)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self._probe.comment_not_found(comment.id.value)
            raise CommentNotFoundError(comment.id.value)

        saved = await self.get_by_id(comment.id)
        if saved is None:
            raise CommentNotFoundError(comment.id.value)
        return saved

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment by ID."""
        result = await self._session.execute(
            delete(CommentModel).where(CommentModel.id == comment_id.value)
        )
        if result.rowcount == 0:
            self._probe.comment_not_found(comment_id.value)
            return False

        self._probe.comment_deleted(comment_id.value)
        return True

    @staticmethod
    def _to_domain(model: CommentModel) -> Comment:
        return Comment(
            id=CommentId(value=model.id),
            text=model.text,
            author_id=UserId(value=model.author_id),
            hoagie_id=HoagieId(value=model.hoagie_id),
            timestamp=model.timestamp,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
