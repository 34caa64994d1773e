"""Domain probes for catalog repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to hoagie and comment persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class HoagieRepositoryProbe(Protocol):
    """Domain probe for hoagie repository operations."""

    def hoagie_saved(self, hoagie_id: str, creator_id: str) -> None:
        """Record that a hoagie was saved."""
        ...

    def hoagie_deleted(self, hoagie_id: str, comments_deleted: int) -> None:
        """Record that a hoagie and its comments were deleted."""
        ...

    def hoagie_not_found(self, hoagie_id: str) -> None:
        """Record that a hoagie was not found."""
        ...

    def collaborator_inserted(
        self, hoagie_id: str, user_id: str, inserted: bool
    ) -> None:
        """Record an insert-if-absent on the collaborator set."""
        ...

    def collaborator_deleted(self, hoagie_id: str, user_id: str, deleted: bool) -> None:
        """Record a delete-if-present on the collaborator set."""
        ...

    def comment_count_recounted(self, hoagie_id: str, comment_count: int) -> None:
        """Record that a comment count was recomputed from the comments table."""
        ...

    def with_context(self, context: ObservationContext) -> HoagieRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultHoagieRepositoryProbe:
    """Default implementation of HoagieRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultHoagieRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultHoagieRepositoryProbe(logger=self._logger, context=context)

    def hoagie_saved(self, hoagie_id: str, creator_id: str) -> None:
        """Record that a hoagie was saved."""
        self._logger.info(
            "hoagie_saved",
            hoagie_id=hoagie_id,
            creator_id=creator_id,
            **self._get_context_kwargs(),
        )

    def hoagie_deleted(self, hoagie_id: str, comments_deleted: int) -> None:
        """Record that a hoagie and its comments were deleted."""
        self._logger.info(
            "hoagie_deleted",
            hoagie_id=hoagie_id,
            comments_deleted=comments_deleted,
            **self._get_context_kwargs(),
        )

    def hoagie_not_found(self, hoagie_id: str) -> None:
        """Record that a hoagie was not found."""
        self._logger.debug(
            "hoagie_not_found",
            hoagie_id=hoagie_id,
            **self._get_context_kwargs(),
        )

    def collaborator_inserted(
        self, hoagie_id: str, user_id: str, inserted: bool
    ) -> None:
        """Record an insert-if-absent on the collaborator set."""
        self._logger.debug(
            "collaborator_inserted",
            hoagie_id=hoagie_id,
            collaborator_id=user_id,
            inserted=inserted,
            **self._get_context_kwargs(),
        )

    def collaborator_deleted(self, hoagie_id: str, user_id: str, deleted: bool) -> None:
        """Record a delete-if-present on the collaborator set."""
        self._logger.debug(
            "collaborator_deleted",
            hoagie_id=hoagie_id,
            collaborator_id=user_id,
            deleted=deleted,
            **self._get_context_kwargs(),
        )

    def comment_count_recounted(self, hoagie_id: str, comment_count: int) -> None:
        """Record that a comment count was recomputed from the comments table."""
        self._logger.info(
            "comment_count_recounted",
            hoagie_id=hoagie_id,
            comment_count=comment_count,
            **self._get_context_kwargs(),
        )


class CommentRepositoryProbe(Protocol):
    """Domain probe for comment repository operations."""

    def comment_saved(self, comment_id: str, hoagie_id: str) -> None:
        """Record that a comment was saved."""
        ...

    def comment_deleted(self, comment_id: str) -> None:
        """Record that a comment was deleted."""
        ...

    def comment_not_found(self, comment_id: str) -> None:
        """Record that a comment was not found."""
        ...

    def with_context(self, context: ObservationContext) -> CommentRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCommentRepositoryProbe:
    """Default implementation of CommentRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultCommentRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultCommentRepositoryProbe(logger=self._logger, context=context)

    def comment_saved(self, comment_id: str, hoagie_id: str) -> None:
        """Record that a comment was saved."""
        self._logger.info(
            "comment_saved",
            comment_id=comment_id,
            hoagie_id=hoagie_id,
            **self._get_context_kwargs(),
        )

    def comment_deleted(self, comment_id: str) -> None:
        """Record that a comment was deleted."""
        self._logger.info(
            "comment_deleted",
            comment_id=comment_id,
            **self._get_context_kwargs(),
        )

    def comment_not_found(self, comment_id: str) -> None:
        """Record that a comment was not found."""
        self._logger.debug(
            "comment_not_found",
            comment_id=comment_id,
            **self._get_context_kwargs(),
        )
