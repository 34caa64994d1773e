"""Hoagie application service for the catalog bounded context.

Owns the hoagie lifecycle, the collaborator set and every change to the
denormalized comment count. The comment service reaches the counter only
through ``increment_comment_count`` and ``decrement_comment_count``.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.observability import (
    DefaultHoagieServiceProbe,
    HoagieServiceProbe,
)
from catalog.domain.aggregates import Hoagie
from catalog.domain.authorization import can_mutate_collaborators
from catalog.domain.value_objects import HoagieId, HoagieUpdate
from catalog.ports.exceptions import HoagieNotFoundError, UserNotFoundError
from catalog.ports.repositories import IHoagieRepository
from shared_kernel.exceptions import ForbiddenError, InconsistencyError
from shared_kernel.identity import UserId, UserSummaryLookup
from shared_kernel.pagination import Page, PageRequest


class HoagieService:
    """Application service for hoagie management.

    Manages database transactions for each use case.
    """

    def __init__(
        self,
        hoagie_repository: IHoagieRepository,
        user_lookup: UserSummaryLookup,
        session: AsyncSession,
        probe: HoagieServiceProbe | None = None,
    ):
        """Initialize HoagieService with dependencies.

        Args:
            hoagie_repository: Repository for hoagie persistence
            user_lookup: Resolves user references for existence checks
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._hoagie_repository = hoagie_repository
        self._user_lookup = user_lookup
        self._session = session
        self._probe = probe or DefaultHoagieServiceProbe()

    async def create(
        self,
        name: str,
        ingredients: Iterable[str],
        creator_id: UserId,
        picture: str | None = None,
    ) -> Hoagie:
        """Create a hoagie with no collaborators and zero comments.

        Raises:
            InvalidInputError: If name or ingredients are missing or blank
            UserNotFoundError: If the creator does not exist
        """
        hoagie = Hoagie.create(
            name=name,
            ingredients=ingredients,
            creator_id=creator_id,
            picture=picture,
        )

        async with self._session.begin():
            await self._ensure_users_exist([creator_id])
            stored = await self._hoagie_repository.add(hoagie)

        self._probe.hoagie_created(stored.id.value, creator_id.value)
        return stored

    async def list(
        self, page_request: PageRequest, creator_id: UserId | None = None
    ) -> Page[Hoagie]:
        """List hoagies newest first.

        A creator filter for a user with no hoagies matches nothing; it never
        widens to an unfiltered listing.
        """
        async with self._session.begin():
            return await self._hoagie_repository.list_page(page_request, creator_id)

    async def get(self, hoagie_id: HoagieId) -> Hoagie | None:
        """Get a hoagie by ID."""
        async with self._session.begin():
            return await self._hoagie_repository.get_by_id(hoagie_id)

    async def update(self, hoagie_id: HoagieId, update: HoagieUpdate) -> Hoagie | None:
        """Apply a partial update to name, ingredients, picture or collaborators.

        Returns:
            The updated Hoagie, or None if it does not exist

        Raises:
            InvalidInputError: If a field is invalid or the collaborator set
                contains the creator
            UserNotFoundError: If a new collaborator does not exist
        """
        async with self._session.begin():
            hoagie = await self._hoagie_repository.get_by_id(hoagie_id)
            if hoagie is None:
                return None

            hoagie.apply_update(update)
            if update.collaborator_ids:
                await self._ensure_users_exist(update.collaborator_ids)

            stored = await self._hoagie_repository.save(hoagie)

        self._probe.hoagie_updated(hoagie_id.value)
        return stored

    async def remove(self, hoagie_id: HoagieId) -> Hoagie | None:
        """Delete a hoagie together with its comments and collaborator rows.

        Returns:
            The removed Hoagie, or None if it did not exist
        """
        async with self._session.begin():
            hoagie = await self._hoagie_repository.get_by_id(hoagie_id)
            if hoagie is None:
                return None
            await self._hoagie_repository.delete(hoagie_id)

        self._probe.hoagie_removed(hoagie_id.value)
        return hoagie

    async def add_collaborator(
        self, hoagie_id: HoagieId, user_id: UserId, requester_id: UserId
    ) -> Hoagie:
        """Add ``user_id`` to the collaborator set. Idempotent.

        Raises:
            HoagieNotFoundError: If the hoagie does not exist
            ForbiddenError: If the requester is not the creator
            InvalidInputError: If ``user_id`` is the creator
            UserNotFoundError: If ``user_id`` does not exist
        """
        async with self._session.begin():
            hoagie = await self._load_for_collaborator_change(
                hoagie_id, requester_id, action="add"
            )
            hoagie.ensure_can_collaborate(user_id)
            await self._ensure_users_exist([user_id])

            changed = await self._hoagie_repository.add_collaborator(
                hoagie_id, user_id
            )
            updated = await self._reload(hoagie_id)

        self._probe.collaborator_added(
            hoagie_id.value, user_id.value, requester_id.value, changed
        )
        return updated

    async def remove_collaborator(
        self, hoagie_id: HoagieId, user_id: UserId, requester_id: UserId
    ) -> Hoagie:
        """Remove ``user_id`` from the collaborator set. Idempotent.

        Removing a user who is not a collaborator, the creator included,
        succeeds without changing anything.

        Raises:
            HoagieNotFoundError: If the hoagie does not exist
            ForbiddenError: If the requester is not the creator
        """
        async with self._session.begin():
            await self._load_for_collaborator_change(
                hoagie_id, requester_id, action="remove"
            )
            changed = await self._hoagie_repository.remove_collaborator(
                hoagie_id, user_id
            )
            updated = await self._reload(hoagie_id)

        self._probe.collaborator_removed(
            hoagie_id.value, user_id.value, requester_id.value, changed
        )
        return updated

    async def increment_comment_count(self, hoagie_id: HoagieId) -> None:
        """Add one to the hoagie's comment count in a single statement.

        Raises:
            InconsistencyError: If the hoagie does not exist
        """
        async with self._session.begin():
            updated = await self._hoagie_repository.increment_comment_count(hoagie_id)

        if not updated:
            raise InconsistencyError(
                f"Cannot increment comment count: hoagie {hoagie_id} not found"
            )

    async def decrement_comment_count(self, hoagie_id: HoagieId) -> None:
        """Subtract one from the hoagie's comment count, never below zero.

        A decrement against a zero count leaves it at zero and is recorded
        as an underflow.

        Raises:
            InconsistencyError: If the hoagie does not exist
        """
        async with self._session.begin():
            updated = await self._hoagie_repository.decrement_comment_count(hoagie_id)
            exists = updated or await self._hoagie_repository.exists(hoagie_id)

        if not exists:
            raise InconsistencyError(
                f"Cannot decrement comment count: hoagie {hoagie_id} not found"
            )
        if not updated:
            self._probe.comment_count_underflow(hoagie_id.value)

    async def reconcile_comment_count(self, hoagie_id: HoagieId) -> int:
        """Recompute the comment count from the live comments.

        Returns:
            The corrected count

        Raises:
            HoagieNotFoundError: If the hoagie does not exist
        """
        async with self._session.begin():
            count = await self._hoagie_repository.recount_comments(hoagie_id)

        if count is None:
            raise HoagieNotFoundError(hoagie_id.value)

        self._probe.comment_count_reconciled(hoagie_id.value, count)
        return count

    async def _load_for_collaborator_change(
        self, hoagie_id: HoagieId, requester_id: UserId, action: str
    ) -> Hoagie:
        hoagie = await self._hoagie_repository.get_by_id(hoagie_id)
        if hoagie is None:
            raise HoagieNotFoundError(hoagie_id.value)

        if not can_mutate_collaborators(hoagie, requester_id):
            self._probe.collaborator_change_forbidden(
                hoagie_id.value, requester_id.value, action
            )
            raise ForbiddenError(
                "Only the creator can change this hoagie's collaborators"
            )
        return hoagie

    async def _reload(self, hoagie_id: HoagieId) -> Hoagie:
        hoagie = await self._hoagie_repository.get_by_id(hoagie_id)
        if hoagie is None:
            raise HoagieNotFoundError(hoagie_id.value)
        return hoagie

    async def _ensure_users_exist(self, user_ids: Iterable[UserId]) -> None:
        """Raise UserNotFoundError for the first id with no matching user."""
        wanted = list(user_ids)
        found = await self._user_lookup.get_summaries(wanted)
        for user_id in wanted:
            if user_id not in found:
                raise UserNotFoundError(user_id.value)
