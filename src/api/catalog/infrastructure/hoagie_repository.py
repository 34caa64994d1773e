"""SQLAlchemy implementation of IHoagieRepository.

Comment-count changes and collaborator set changes are each a single SQL
statement evaluated by the database, never a read followed by a write in
Python. That is what keeps them correct under concurrent requests.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Insert

from catalog.domain.aggregates import Hoagie
from catalog.domain.value_objects import HoagieId, HoagieSummary
from catalog.infrastructure.models import (
    CommentModel,
    HoagieCollaboratorModel,
    HoagieModel,
)
from catalog.infrastructure.observability import (
    DefaultHoagieRepositoryProbe,
    HoagieRepositoryProbe,
)
from catalog.ports.exceptions import HoagieNotFoundError
from catalog.ports.repositories import IHoagieRepository
from infrastructure.database.exceptions import UnsupportedDialectError
from shared_kernel.identity import UserId
from shared_kernel.pagination import Page, PageRequest

_INSERT_CONSTRUCTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class HoagieRepository(IHoagieRepository):
    """SQLAlchemy-backed repository for Hoagie aggregates.

    Runs inside the caller's transaction; services own ``session.begin()``.
    Reads use ``populate_existing`` so rows already in the session's identity
    map are refreshed with counter values written by bulk UPDATEs.
    """

    def __init__(
        self, session: AsyncSession, probe: HoagieRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultHoagieRepositoryProbe()

    async def add(self, hoagie: Hoagie) -> Hoagie:
        """Insert a new hoagie and its initial collaborator set."""
        model = HoagieModel(
            id=hoagie.id.value,
            name=hoagie.name,
            ingredients=list(hoagie.ingredients),
            picture=hoagie.picture,
            creator_id=hoagie.creator_id.value,
            comment_count=0,
        )
        self._session.add(model)
        await self._session.flush()

        for user_id in sorted(u.value for u in hoagie.collaborator_ids):
            await self._session.execute(
                self._insert_collaborator_statement(hoagie.id.value, user_id)
            )

        self._probe.hoagie_saved(hoagie.id.value, hoagie.creator_id.value)
        return self._to_domain(model, {u.value for u in hoagie.collaborator_ids})

    async def get_by_id(self, hoagie_id: HoagieId) -> Hoagie | None:
        """Retrieve a hoagie with its collaborator set."""
        stmt = (
            select(HoagieModel)
            .where(HoagieModel.id == hoagie_id.value)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.hoagie_not_found(hoagie_id.value)
            return None

        collaborators = await self._load_collaborators([model.id])
        return self._to_domain(model, collaborators.get(model.id, set()))

    async def exists(self, hoagie_id: HoagieId) -> bool:
        """Whether a hoagie with this id exists."""
        stmt = select(HoagieModel.id).where(HoagieModel.id == hoagie_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_page(
        self, page_request: PageRequest, creator_id: UserId | None = None
    ) -> Page[Hoagie]:
        """List hoagies newest first, optionally filtered by creator."""
        count_stmt = select(func.count()).select_from(HoagieModel)
        stmt = select(HoagieModel)
        if creator_id is not None:
            count_stmt = count_stmt.where(HoagieModel.creator_id == creator_id.value)
            stmt = stmt.where(HoagieModel.creator_id == creator_id.value)

        total = (await self._session.execute(count_stmt)).scalar_one()
        if page_request.is_past(total):
            return Page(
                items=[], total=total, page=page_request.page, limit=page_request.limit
            )

        stmt = (
            stmt.order_by(HoagieModel.created_at.desc(), HoagieModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        collaborators = await self._load_collaborators([m.id for m in models])
        return Page(
            items=[self._to_domain(m, collaborators.get(m.id, set())) for m in models],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )

    async def save(self, hoagie: Hoagie) -> Hoagie:
        """Write mutable fields and reconcile the stored collaborator set.

        Raises:
            HoagieNotFoundError: If the hoagie no longer exists
        """
        stmt = (
            update(HoagieModel)
            .where(HoagieModel.id == hoagie.id.value)
            .values(
                name=hoagie.name,
                ingredients=list(hoagie.ingredients),
                picture=hoagie.picture,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            self._probe.hoagie_not_found(hoagie.id.value)
            raise HoagieNotFoundError(hoagie.id.value)

        stored = (await self._load_collaborators([hoagie.id.value])).get(
            hoagie.id.value, set()
        )
        desired = {u.value for u in hoagie.collaborator_ids}

        stale = stored - desired
        if stale:
            await self._session.execute(
                delete(HoagieCollaboratorModel).where(
                    HoagieCollaboratorModel.hoagie_id == hoagie.id.value,
                    HoagieCollaboratorModel.user_id.in_(stale),
                )
            )
        for user_id in sorted(desired - stored):
            await self._session.execute(
                self._insert_collaborator_statement(hoagie.id.value, user_id)
            )

        self._probe.hoagie_saved(hoagie.id.value, hoagie.creator_id.value)
        saved = await self.get_by_id(hoagie.id)
        if saved is None:
            raise HoagieNotFoundError(hoagie.id.value)
        return saved

    async def delete(self, hoagie_id: HoagieId) -> bool:
        """Delete a hoagie, its comments and its collaborator rows.

        The rows are deleted explicitly rather than through ON DELETE CASCADE
        so the outcome does not depend on the database enforcing foreign keys.
        """
        comments = await self._session.execute(
            delete(CommentModel).where(CommentModel.hoagie_id == hoagie_id.value)
        )
        await self._session.execute(
            delete(HoagieCollaboratorModel).where(
                HoagieCollaboratorModel.hoagie_id == hoagie_id.value
            )
        )
        result = await self._session.execute(
            delete(HoagieModel).where(HoagieModel.id == hoagie_id.value)
        )

        if result.rowcount == 0:
            self._probe.hoagie_not_found(hoagie_id.value)
            return False

        self._probe.hoagie_deleted(hoagie_id.value, comments_deleted=comments.rowcount)
        return True

    async def add_collaborator(self, hoagie_id: HoagieId, user_id: UserId) -> bool:
        """Insert the collaborator row unless it already exists."""
        result = await self._session.execute(
            self._insert_collaborator_statement(hoagie_id.value, user_id.value)
        )
        inserted = result.rowcount == 1
        self._probe.collaborator_inserted(hoagie_id.value, user_id.value, inserted)
        return inserted

    async def remove_collaborator(self, hoagie_id: HoagieId, user_id: UserId) -> bool:
        """Delete the collaborator row if it exists."""
        result = await self._session.execute(
            delete(HoagieCollaboratorModel).where(
                HoagieCollaboratorModel.hoagie_id == hoagie_id.value,
                HoagieCollaboratorModel.user_id == user_id.value,
            )
        )
        deleted = result.rowcount > 0
        self._probe.collaborator_deleted(hoagie_id.value, user_id.value, deleted)
        return deleted

    async def increment_comment_count(self, hoagie_id: HoagieId) -> bool:
        """UPDATE hoagies SET comment_count = comment_count + 1."""
        stmt = (
            update(HoagieModel)
            .where(HoagieModel.id == hoagie_id.value)
            .values(comment_count=HoagieModel.comment_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def decrement_comment_count(self, hoagie_id: HoagieId) -> bool:
        """UPDATE hoagies SET comment_count = comment_count - 1, guarded at zero."""
        stmt = (
            update(HoagieModel)
            .where(
                HoagieModel.id == hoagie_id.value,
                HoagieModel.comment_count > 0,
            )
            .values(comment_count=HoagieModel.comment_count - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def recount_comments(self, hoagie_id: HoagieId) -> int | None:
        """Set comment_count from a correlated COUNT over live comments."""
        live_comments = (
            select(func.count(CommentModel.id))
            .where(CommentModel.hoagie_id == HoagieModel.id)
            .scalar_subquery()
        )
        stmt = (
            update(HoagieModel)
            .where(HoagieModel.id == hoagie_id.value)
            .values(comment_count=live_comments)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            self._probe.hoagie_not_found(hoagie_id.value)
            return None

        count = (
            await self._session.execute(
                select(HoagieModel.comment_count).where(
                    HoagieModel.id == hoagie_id.value
                )
            )
        ).scalar_one()
        self._probe.comment_count_recounted(hoagie_id.value, count)
        return count

    async def get_summaries(
        self, hoagie_ids: Iterable[HoagieId]
    ) -> dict[HoagieId, HoagieSummary]:
        """Batch-resolve hoagie ids into (id, name) summaries."""
        ids = {hoagie_id.value for hoagie_id in hoagie_ids}
        if not ids:
            return {}

        result = await self._session.execute(
            select(HoagieModel.id, HoagieModel.name).where(HoagieModel.id.in_(ids))
        )
        summaries: dict[HoagieId, HoagieSummary] = {}
        for row in result:
            hoagie_id = HoagieId(value=row.id)
            summaries[hoagie_id] = HoagieSummary(id=hoagie_id, name=row.name)
        return summaries

    def _insert_collaborator_statement(self, hoagie_id: str, user_id: str) -> Insert:
        """Build INSERT ... ON CONFLICT DO NOTHING for the current dialect.

        Raises:
            UnsupportedDialectError: If the dialect has no upsert construct
        """
        dialect = self._session.get_bind().dialect.name
        insert_construct = _INSERT_CONSTRUCTS.get(dialect)
        if insert_construct is None:
            raise UnsupportedDialectError(dialect, "collaborator insert-if-absent")

        return (
            insert_construct(HoagieCollaboratorModel.__table__)
            .values(hoagie_id=hoagie_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=["hoagie_id", "user_id"])
        )

    async def _load_collaborators(self, hoagie_ids: list[str]) -> dict[str, set[str]]:
        """Fetch collaborator ids for several hoagies in one query."""
        if not hoagie_ids:
            return {}

        result = await self._session.execute(
            select(
                HoagieCollaboratorModel.hoagie_id, HoagieCollaboratorModel.user_id
            ).where(HoagieCollaboratorModel.hoagie_id.in_(hoagie_ids))
        )
        collaborators: dict[str, set[str]] = {}
        for row in result:
            collaborators.setdefault(row.hoagie_id, set()).add(row.user_id)
        return collaborators

    @staticmethod
    def _to_domain(model: HoagieModel, collaborator_ids: Iterable[str]) -> Hoagie:
        """Map an ORM row and its collaborator ids to the Hoagie aggregate."""
        return Hoagie(
            id=HoagieId(value=model.id),
            name=model.name,
            ingredients=tuple(model.ingredients),
            picture=model.picture,
            creator_id=UserId(value=model.creator_id),
            collaborator_ids=frozenset(UserId(value=u) for u in collaborator_ids),
            comment_count=model.comment_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
