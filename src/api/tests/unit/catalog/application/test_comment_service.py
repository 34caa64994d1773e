"""Unit tests for CommentService.

Comment writes commit before the hoagie's counter is adjusted; a failed
counter command must never undo or fail the comment write.
"""

from unittest.mock import AsyncMock, create_autospec

import pytest

from catalog.application.observability import CommentServiceProbe
from catalog.application.services import CommentService, HoagieService
from catalog.domain.aggregates import Comment
from catalog.domain.value_objects import CommentId, HoagieId
from catalog.ports.exceptions import HoagieNotFoundError, UserNotFoundError
from catalog.ports.repositories import ICommentRepository, IHoagieRepository
from shared_kernel.exceptions import InconsistencyError, InvalidInputError
from shared_kernel.identity import UserId, UserSummary, UserSummaryLookup


@pytest.fixture
def author_id() -> UserId:
    return UserId.generate()


@pytest.fixture
def hoagie_id() -> HoagieId:
    return HoagieId.generate()


@pytest.fixture
def mock_comment_repository():
    repository = create_autospec(ICommentRepository, instance=True)
    repository.add = AsyncMock(side_effect=lambda comment: comment)
    return repository


@pytest.fixture
def mock_hoagie_repository():
    repository = create_autospec(IHoagieRepository, instance=True)
    repository.exists = AsyncMock(return_value=True)
    return repository


@pytest.fixture
def mock_hoagie_service():
    return create_autospec(HoagieService, instance=True)


@pytest.fixture
def mock_user_lookup(author_id):
    lookup = create_autospec(UserSummaryLookup, instance=True)
    lookup.get_summaries = AsyncMock(
        return_value={
            author_id: UserSummary(id=author_id, name="Ann", email="ann@example.com")
        }
    )
    return lookup


@pytest.fixture
def mock_probe():
    return create_autospec(CommentServiceProbe, instance=True)


@pytest.fixture
def comment_service(
    mock_comment_repository,
    mock_hoagie_repository,
    mock_hoagie_service,
    mock_user_lookup,
    mock_session,
    mock_probe,
):
    return CommentService(
        comment_repository=mock_comment_repository,
        hoagie_repository=mock_hoagie_repository,
        hoagie_service=mock_hoagie_service,
        user_lookup=mock_user_lookup,
        session=mock_session,
        probe=mock_probe,
    )


class TestCreate:
    """Tests for CommentService.create."""

    @pytest.mark.asyncio
    async def test_creates_comment_then_increments(
        self, comment_service, mock_hoagie_service, author_id, hoagie_id
    ):
        comment = await comment_service.create(
            text="Great bread", author_id=author_id, hoagie_id=hoagie_id
        )

        assert comment.text == "Great bread"
        mock_hoagie_service.increment_comment_count.assert_awaited_once_with(hoagie_id)

    @pytest.mark.asyncio
    async def test_failed_increment_keeps_comment_and_records_drift(
        self, comment_service, mock_hoagie_service, mock_probe, author_id, hoagie_id
    ):
        mock_hoagie_service.increment_comment_count = AsyncMock(
            side_effect=InconsistencyError("hoagie vanished")
        )

        comment = await comment_service.create(
            text="Great bread", author_id=author_id, hoagie_id=hoagie_id
        )

        assert comment.hoagie_id == hoagie_id
        mock_probe.comment_count_drift.assert_called_once_with(
            hoagie_id=hoagie_id.value,
            comment_id=comment.id.value,
            operation="increment",
            error="hoagie vanished",
        )

    @pytest.mark.asyncio
    async def test_unknown_author_raises(
        self,
        comment_service,
        mock_comment_repository,
        mock_hoagie_service,
        hoagie_id,
    ):
        with pytest.raises(UserNotFoundError):
            await comment_service.create(
                text="hi", author_id=UserId.generate(), hoagie_id=hoagie_id
            )

        mock_comment_repository.add.assert_not_called()
        mock_hoagie_service.increment_comment_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_hoagie_raises(
        self,
        comment_service,
        mock_comment_repository,
        mock_hoagie_repository,
        mock_hoagie_service,
        author_id,
    ):
        mock_hoagie_repository.exists = AsyncMock(return_value=False)

        with pytest.raises(HoagieNotFoundError):
            await comment_service.create(
                text="hi", author_id=author_id, hoagie_id=HoagieId.generate()
            )

        mock_comment_repository.add.assert_not_called()
        mock_hoagie_service.increment_comment_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_text_raises(
        self, comment_service, mock_comment_repository, author_id, hoagie_id
    ):
        with pytest.raises(InvalidInputError):
            await comment_service.create(text="", author_id=author_id, hoagie_id=hoagie_id)

        mock_comment_repository.add.assert_not_called()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_edits_text(
        self, comment_service, mock_comment_repository, author_id, hoagie_id
    ):
        comment = Comment.create(text="old", author_id=author_id, hoagie_id=hoagie_id)
        mock_comment_repository.get_by_id = AsyncMock(return_value=comment)
        mock_comment_repository.save = AsyncMock(side_effect=lambda c: c)

        result = await comment_service.update(comment.id, text="new")

        assert result.text == "new"
        assert result.author_id == author_id

    @pytest.mark.asyncio
    async def test_missing_comment_returns_none(
        self, comment_service, mock_comment_repository
    ):
        mock_comment_repository.get_by_id = AsyncMock(return_value=None)

        assert await comment_service.update(CommentId.generate(), text="new") is None
        mock_comment_repository.save.assert_not_called()


class TestRemove:
    """Tests for CommentService.remove."""

    @pytest.mark.asyncio
    async def test_deletes_then_decrements(
        self, comment_service, mock_comment_repository, mock_hoagie_service, author_id, hoagie_id
    ):
        comment = Comment.create(text="bye", author_id=author_id, hoagie_id=hoagie_id)
        mock_comment_repository.get_by_id = AsyncMock(return_value=comment)
        mock_comment_repository.delete = AsyncMock(return_value=True)

        result = await comment_service.remove(comment.id)

        assert result == comment
        mock_hoagie_service.decrement_comment_count.assert_awaited_once_with(hoagie_id)

    @pytest.mark.asyncio
    async def test_missing_comment_leaves_counters_alone(
        self, comment_service, mock_comment_repository, mock_hoagie_service
    ):
        mock_comment_repository.get_by_id = AsyncMock(return_value=None)

        assert await comment_service.remove(CommentId.generate()) is None
        mock_comment_repository.delete.assert_not_called()
        mock_hoagie_service.decrement_comment_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrently_deleted_comment_is_not_decremented_twice(
        self, comment_service, mock_comment_repository, mock_hoagie_service, author_id, hoagie_id
    ):
        comment = Comment.create(text="bye", author_id=author_id, hoagie_id=hoagie_id)
        mock_comment_repository.get_by_id = AsyncMock(return_value=comment)
        mock_comment_repository.delete = AsyncMock(return_value=False)

        assert await comment_service.remove(comment.id) is None
        mock_hoagie_service.decrement_comment_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_decrement_records_drift(
        self,
        comment_service,
        mock_comment_repository,
        mock_hoagie_service,
        mock_probe,
        author_id,
        hoagie_id,
    ):
        comment = Comment.create(text="bye", author_id=author_id, hoagie_id=hoagie_id)
        mock_comment_repository.get_by_id = AsyncMock(return_value=comment)
        mock_comment_repository.delete = AsyncMock(return_value=True)
        mock_hoagie_service.decrement_comment_count = AsyncMock(
            side_effect=RuntimeError("connection lost")
        )

        result = await comment_service.remove(comment.id)

        assert result == comment
        mock_probe.comment_count_drift.assert_called_once_with(
            hoagie_id=hoagie_id.value,
            comment_id=comment.id.value,
            operation="decrement",
            error="connection lost",
        )
