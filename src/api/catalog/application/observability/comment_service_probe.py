"""Protocol for comment application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CommentServiceProbe(Protocol):
    """Domain probe for comment application service operations."""

    def comment_created(self, comment_id: str, hoagie_id: str, author_id: str) -> None:
        """Record that a comment was created."""
        ...

    def comment_updated(self, comment_id: str) -> None:
        """Record that a comment's text was edited."""
        ...

    def comment_removed(self, comment_id: str, hoagie_id: str) -> None:
        """Record that a comment was removed."""
        ...

    def comment_count_drift(
        self, hoagie_id: str, comment_id: str, operation: str, error: str
    ) -> None:
        """Record a counter command that failed after its comment write committed.

        The hoagie's comment count no longer matches its comments until it
        is reconciled.
        """
        ...

    def with_context(self, context: ObservationContext) -> CommentServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCommentServiceProbe:
    """Default implementation of CommentServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCommentServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultCommentServiceProbe(logger=self._logger, context=context)

    def comment_created(self, comment_id: str, hoagie_id: str, author_id: str) -> None:
        """Record that a comment was created."""
        self._logger.info(
            "comment_created",
            comment_id=comment_id,
            hoagie_id=hoagie_id,
            author_id=author_id,
            **self._get_context_kwargs(),
        )

    def comment_updated(self, comment_id: str) -> None:
        """Record that a comment's text was edited."""
        self._logger.info(
            "comment_updated",
            comment_id=comment_id,
            **self._get_context_kwargs(),
        )

    def comment_removed(self, comment_id: str, hoagie_id: str) -> None:
        """Record that a comment was removed."""
        self._logger.info(
            "comment_removed",
            comment_id=comment_id,
            hoagie_id=hoagie_id,
            **self._get_context_kwargs(),
        )

    def comment_count_drift(
        self, hoagie_id: str, comment_id: str, operation: str, error: str
    ) -> None:
        """Record a counter command that failed after its comment write committed."""
        self._logger.error(
            "comment_count_drift",
            hoagie_id=hoagie_id,
            comment_id=comment_id,
            operation=operation,
            error=error,
            reconciliation_required=True,
            **self._get_context_kwargs(),
        )
