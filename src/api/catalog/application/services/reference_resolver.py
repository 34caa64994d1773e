"""Read-path reference resolution for hoagies and comments.

Responses embed the public summary of every referenced user (and, for
comments, the owning hoagie). The lookups happen here in batches, one
query per referenced entity type per call.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.value_objects import CommentView, HoagieView
from catalog.domain.aggregates import Comment, Hoagie
from catalog.ports.repositories import IHoagieRepository
from shared_kernel.identity import UserId, UserSummary, UserSummaryLookup


class ReferenceResolver:
    """Turns aggregates into views with their references resolved.

    Dangling references never raise: a missing creator, author or hoagie
    resolves to None and a missing collaborator is left out.
    """

    def __init__(
        self,
        user_lookup: UserSummaryLookup,
        hoagie_repository: IHoagieRepository,
        session: AsyncSession,
    ):
        self._user_lookup = user_lookup
        self._hoagie_repository = hoagie_repository
        self._session = session

    async def hoagie_views(self, hoagies: Sequence[Hoagie]) -> list[HoagieView]:
        """Resolve creators and collaborators for several hoagies."""
        if not hoagies:
            return []

        user_ids: set[UserId] = set()
        for hoagie in hoagies:
            user_ids.add(hoagie.creator_id)
            user_ids.update(hoagie.collaborator_ids)

        async with self._session.begin():
            users = await self._user_lookup.get_summaries(user_ids)

        return [self._hoagie_view(hoagie, users) for hoagie in hoagies]

    async def hoagie_view(self, hoagie: Hoagie) -> HoagieView:
        """Resolve references for a single hoagie."""
        (view,) = await self.hoagie_views([hoagie])
        return view

    async def comment_views(self, comments: Sequence[Comment]) -> list[CommentView]:
        """Resolve authors and owning hoagies for several comments."""
        if not comments:
            return []

        async with self._session.begin():
            users = await self._user_lookup.get_summaries(
                {c.author_id for c in comments}
            )
            hoagies = await self._hoagie_repository.get_summaries(
                {c.hoagie_id for c in comments}
            )

        return [
            CommentView(
                comment=comment,
                author=users.get(comment.author_id),
                hoagie=hoagies.get(comment.hoagie_id),
            )
            for comment in comments
        ]

    async def comment_view(self, comment: Comment) -> CommentView:
        """Resolve references for a single comment."""
        (view,) = await self.comment_views([comment])
        return view

    @staticmethod
    def _hoagie_view(hoagie: Hoagie, users: dict[UserId, UserSummary]) -> HoagieView:
        collaborators = sorted(
            (users[u] for u in hoagie.collaborator_ids if u in users),
            key=lambda summary: (summary.name.lower(), summary.id.value),
        )
        return HoagieView(
            hoagie=hoagie,
            creator=users.get(hoagie.creator_id),
            collaborators=tuple(collaborators),
        )
