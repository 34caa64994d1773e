"""Unit tests for HoagieService."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from catalog.application.observability import HoagieServiceProbe
from catalog.application.services import HoagieService
from catalog.domain.aggregates import Hoagie
from catalog.domain.value_objects import HoagieId, HoagieUpdate
from catalog.ports.exceptions import HoagieNotFoundError, UserNotFoundError
from catalog.ports.repositories import IHoagieRepository
from shared_kernel.exceptions import (
    ForbiddenError,
    InconsistencyError,
    InvalidInputError,
)
from shared_kernel.identity import UserId, UserSummary, UserSummaryLookup
from shared_kernel.pagination import Page, PageRequest


@pytest.fixture
def mock_hoagie_repository():
    return create_autospec(IHoagieRepository, instance=True)


@pytest.fixture
def mock_user_lookup():
    """User lookup that knows every id it is asked about."""
    lookup = create_autospec(UserSummaryLookup, instance=True)

    async def known(user_ids):
        return {
            u: UserSummary(id=u, name="Someone", email=f"{u.value}@example.com")
            for u in user_ids
        }

    lookup.get_summaries = AsyncMock(side_effect=known)
    return lookup


@pytest.fixture
def mock_probe():
    return create_autospec(HoagieServiceProbe, instance=True)


@pytest.fixture
def hoagie_service(mock_hoagie_repository, mock_user_lookup, mock_session, mock_probe):
    return HoagieService(
        hoagie_repository=mock_hoagie_repository,
        user_lookup=mock_user_lookup,
        session=mock_session,
        probe=mock_probe,
    )


@pytest.fixture
def creator_id() -> UserId:
    return UserId.generate()


@pytest.fixture
def hoagie(creator_id) -> Hoagie:
    return Hoagie.create(name="Italian", ingredients=["salami"], creator_id=creator_id)


class TestCreate:
    """Tests for HoagieService.create."""

    @pytest.mark.asyncio
    async def test_creates_hoagie(
        self, hoagie_service, mock_hoagie_repository, mock_probe, creator_id
    ):
        mock_hoagie_repository.add = AsyncMock(side_effect=lambda h: h)

        hoagie = await hoagie_service.create(
            name="Italian", ingredients=["salami", "ham"], creator_id=creator_id
        )

        assert hoagie.comment_count == 0
        assert hoagie.collaborator_ids == frozenset()
        mock_probe.hoagie_created.assert_called_once_with(
            hoagie.id.value, creator_id.value
        )

    @pytest.mark.asyncio
    async def test_unknown_creator_raises(
        self, hoagie_service, mock_hoagie_repository, mock_user_lookup
    ):
        mock_user_lookup.get_summaries = AsyncMock(return_value={})

        with pytest.raises(UserNotFoundError):
            await hoagie_service.create(
                name="Italian", ingredients=["salami"], creator_id=UserId.generate()
            )

        mock_hoagie_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_fields_never_reach_repository(
        self, hoagie_service, mock_hoagie_repository, creator_id
    ):
        with pytest.raises(InvalidInputError):
            await hoagie_service.create(name="", ingredients=[], creator_id=creator_id)

        mock_hoagie_repository.add.assert_not_called()


class TestList:
    @pytest.mark.asyncio
    async def test_passes_creator_filter(
        self, hoagie_service, mock_hoagie_repository, creator_id
    ):
        page_request = PageRequest.create(page=1, limit=10, max_limit=100)
        mock_hoagie_repository.list_page = AsyncMock(return_value=Page())

        await hoagie_service.list(page_request, creator_id=creator_id)

        mock_hoagie_repository.list_page.assert_awaited_once_with(
            page_request, creator_id
        )


class TestUpdate:
    """Tests for HoagieService.update."""

    @pytest.mark.asyncio
    async def test_returns_none_for_missing_hoagie(
        self, hoagie_service, mock_hoagie_repository
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=None)

        result = await hoagie_service.update(HoagieId.generate(), HoagieUpdate(name="x"))

        assert result is None
        mock_hoagie_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_saves_updated_fields(
        self, hoagie_service, mock_hoagie_repository, hoagie
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_hoagie_repository.save = AsyncMock(side_effect=lambda h: h)

        result = await hoagie_service.update(hoagie.id, HoagieUpdate(name="Hot Italian"))

        assert result.name == "Hot Italian"
        mock_hoagie_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejects_creator_in_collaborator_set(
        self, hoagie_service, mock_hoagie_repository, hoagie, creator_id
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)

        with pytest.raises(InvalidInputError):
            await hoagie_service.update(
                hoagie.id, HoagieUpdate(collaborator_ids=frozenset({creator_id}))
            )

        mock_hoagie_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_unknown_collaborator(
        self, hoagie_service, mock_hoagie_repository, mock_user_lookup, hoagie
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_user_lookup.get_summaries = AsyncMock(return_value={})

        with pytest.raises(UserNotFoundError):
            await hoagie_service.update(
                hoagie.id,
                HoagieUpdate(collaborator_ids=frozenset({UserId.generate()})),
            )

        mock_hoagie_repository.save.assert_not_called()


class TestRemove:
    @pytest.mark.asyncio
    async def test_deletes_existing_hoagie(
        self, hoagie_service, mock_hoagie_repository, mock_probe, hoagie
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_hoagie_repository.delete = AsyncMock(return_value=True)

        result = await hoagie_service.remove(hoagie.id)

        assert result == hoagie
        mock_hoagie_repository.delete.assert_awaited_once_with(hoagie.id)
        mock_probe.hoagie_removed.assert_called_once_with(hoagie.id.value)

    @pytest.mark.asyncio
    async def test_missing_hoagie_returns_none(
        self, hoagie_service, mock_hoagie_repository
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=None)

        assert await hoagie_service.remove(HoagieId.generate()) is None
        mock_hoagie_repository.delete.assert_not_called()


class TestAddCollaborator:
    """Tests for HoagieService.add_collaborator."""

    @pytest.mark.asyncio
    async def test_creator_adds_collaborator(
        self, hoagie_service, mock_hoagie_repository, mock_probe, hoagie, creator_id
    ):
        friend = UserId.generate()
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_hoagie_repository.add_collaborator = AsyncMock(return_value=True)

        await hoagie_service.add_collaborator(
            hoagie.id, user_id=friend, requester_id=creator_id
        )

        mock_hoagie_repository.add_collaborator.assert_awaited_once_with(
            hoagie.id, friend
        )
        mock_probe.collaborator_added.assert_called_once_with(
            hoagie.id.value, friend.value, creator_id.value, True
        )

    @pytest.mark.asyncio
    async def test_adding_existing_collaborator_reports_no_change(
        self, hoagie_service, mock_hoagie_repository, mock_probe, hoagie, creator_id
    ):
        friend = UserId.generate()
        hoagie.collaborator_ids = frozenset({friend})
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_hoagie_repository.add_collaborator = AsyncMock(return_value=False)

        result = await hoagie_service.add_collaborator(
            hoagie.id, user_id=friend, requester_id=creator_id
        )

        assert result.collaborator_ids == frozenset({friend})
        mock_probe.collaborator_added.assert_called_once_with(
            hoagie.id.value, friend.value, creator_id.value, False
        )

    @pytest.mark.asyncio
    async def test_collaborator_cannot_add_collaborators(
        self, hoagie_service, mock_hoagie_repository, mock_probe, hoagie
    ):
        collaborator = UserId.generate()
        hoagie.collaborator_ids = frozenset({collaborator})
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)

        with pytest.raises(ForbiddenError):
            await hoagie_service.add_collaborator(
                hoagie.id, user_id=UserId.generate(), requester_id=collaborator
            )

        mock_hoagie_repository.add_collaborator.assert_not_called()
        mock_probe.collaborator_change_forbidden.assert_called_once_with(
            hoagie.id.value, collaborator.value, "add"
        )

    @pytest.mark.asyncio
    async def test_creator_cannot_be_added(
        self, hoagie_service, mock_hoagie_repository, hoagie, creator_id
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)

        with pytest.raises(InvalidInputError):
            await hoagie_service.add_collaborator(
                hoagie.id, user_id=creator_id, requester_id=creator_id
            )

        mock_hoagie_repository.add_collaborator.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_hoagie_raises_not_found(
        self, hoagie_service, mock_hoagie_repository
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(HoagieNotFoundError):
            await hoagie_service.add_collaborator(
                HoagieId.generate(),
                user_id=UserId.generate(),
                requester_id=UserId.generate(),
            )

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(
        self, hoagie_service, mock_hoagie_repository, mock_user_lookup, hoagie, creator_id
    ):
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_user_lookup.get_summaries = AsyncMock(return_value={})

        with pytest.raises(UserNotFoundError):
            await hoagie_service.add_collaborator(
                hoagie.id, user_id=UserId.generate(), requester_id=creator_id
            )

        mock_hoagie_repository.add_collaborator.assert_not_called()


class TestRemoveCollaborator:
    @pytest.mark.asyncio
    async def test_collaborator_cannot_remove_themselves(
        self, hoagie_service, mock_hoagie_repository, hoagie
    ):
        collaborator = UserId.generate()
        hoagie.collaborator_ids = frozenset({collaborator})
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)

        with pytest.raises(ForbiddenError):
            await hoagie_service.remove_collaborator(
                hoagie.id, user_id=collaborator, requester_id=collaborator
            )

        mock_hoagie_repository.remove_collaborator.assert_not_called()

    @pytest.mark.asyncio
    async def test_removing_non_member_succeeds(
        self, hoagie_service, mock_hoagie_repository, mock_probe, hoagie, creator_id
    ):
        stranger = UserId.generate()
        mock_hoagie_repository.get_by_id = AsyncMock(return_value=hoagie)
        mock_hoagie_repository.remove_collaborator = AsyncMock(return_value=False)

        await hoagie_service.remove_collaborator(
            hoagie.id, user_id=stranger, requester_id=creator_id
        )

        mock_probe.collaborator_removed.assert_called_once_with(
            hoagie.id.value, stranger.value, creator_id.value, False
        )


class TestCommentCount:
    """Tests for the comment-count commands."""

    @pytest.mark.asyncio
    async def test_increment_of_missing_hoagie_raises_inconsistency(
        self, hoagie_service, mock_hoagie_repository
    ):
        mock_hoagie_repository.increment_comment_count = AsyncMock(return_value=False)

        with pytest.raises(InconsistencyError):
            await hoagie_service.increment_comment_count(HoagieId.generate())

    @pytest.mark.asyncio
    async def test_increment_succeeds(self, hoagie_service, mock_hoagie_repository):
        hoagie_id = HoagieId.generate()
        mock_hoagie_repository.increment_comment_count = AsyncMock(return_value=True)

        await hoagie_service.increment_comment_count(hoagie_id)

        mock_hoagie_repository.increment_comment_count.assert_awaited_once_with(
            hoagie_id
        )

    @pytest.mark.asyncio
    async def test_decrement_at_zero_records_underflow(
        self, hoagie_service, mock_hoagie_repository, mock_probe
    ):
        hoagie_id = HoagieId.generate()
        mock_hoagie_repository.decrement_comment_count = AsyncMock(return_value=False)
        mock_hoagie_repository.exists = AsyncMock(return_value=True)

        await hoagie_service.decrement_comment_count(hoagie_id)

        mock_probe.comment_count_underflow.assert_called_once_with(hoagie_id.value)

    @pytest.mark.asyncio
    async def test_decrement_of_missing_hoagie_raises_inconsistency(
        self, hoagie_service, mock_hoagie_repository, mock_probe
    ):
        mock_hoagie_repository.decrement_comment_count = AsyncMock(return_value=False)
        mock_hoagie_repository.exists = AsyncMock(return_value=False)

        with pytest.raises(InconsistencyError):
            await hoagie_service.decrement_comment_count(HoagieId.generate())

        mock_probe.comment_count_underflow.assert_not_called()

    @pytest.mark.asyncio
    async def test_successful_decrement_skips_existence_check(
        self, hoagie_service, mock_hoagie_repository, mock_probe
    ):
        mock_hoagie_repository.decrement_comment_count = AsyncMock(return_value=True)

        await hoagie_service.decrement_comment_count(HoagieId.generate())

        mock_hoagie_repository.exists.assert_not_called()
        mock_probe.comment_count_underflow.assert_not_called()

    @pytest.mark.asyncio
    async def test_reconcile_returns_recount(
        self, hoagie_service, mock_hoagie_repository, mock_probe
    ):
        hoagie_id = HoagieId.generate()
        mock_hoagie_repository.recount_comments = AsyncMock(return_value=3)

        assert await hoagie_service.reconcile_comment_count(hoagie_id) == 3
        mock_probe.comment_count_reconciled.assert_called_once_with(hoagie_id.value, 3)

    @pytest.mark.asyncio
    async def test_reconcile_missing_hoagie_raises_not_found(
        self, hoagie_service, mock_hoagie_repository
    ):
        mock_hoagie_repository.recount_comments = AsyncMock(return_value=None)

        with pytest.raises(HoagieNotFoundError):
            await hoagie_service.reconcile_comment_count(HoagieId.generate())
