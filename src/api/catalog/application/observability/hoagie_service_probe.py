"""Protocol for hoagie application service observability.

Captures lifecycle events, collaborator changes and comment-count anomalies.
An underflow means a decrement arrived while the count was already zero;
the count stays at zero and the event is kept for reconciliation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class HoagieServiceProbe(Protocol):
    """Domain probe for hoagie application service operations."""

    def hoagie_created(self, hoagie_id: str, creator_id: str) -> None:
        """Record that a hoagie was created."""
        ...

    def hoagie_updated(self, hoagie_id: str) -> None:
        """Record that a hoagie's mutable fields were updated."""
        ...

    def hoagie_removed(self, hoagie_id: str) -> None:
        """Record that a hoagie was removed."""
        ...

    def collaborator_added(
        self, hoagie_id: str, collaborator_id: str, requester_id: str, changed: bool
    ) -> None:
        """Record an add-collaborator command. ``changed`` is False for no-ops."""
        ...

    def collaborator_removed(
        self, hoagie_id: str, collaborator_id: str, requester_id: str, changed: bool
    ) -> None:
        """Record a remove-collaborator command. ``changed`` is False for no-ops."""
        ...

    def collaborator_change_forbidden(
        self, hoagie_id: str, requester_id: str, action: str
    ) -> None:
        """Record that a non-creator tried to change the collaborator set."""
        ...

    def comment_count_underflow(self, hoagie_id: str) -> None:
        """Record a decrement that would have taken the count below zero."""
        ...

    def comment_count_reconciled(self, hoagie_id: str, comment_count: int) -> None:
        """Record that a comment count was recomputed."""
        ...

    def with_context(self, context: ObservationContext) -> HoagieServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultHoagieServiceProbe:
    """Default implementation of HoagieServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultHoagieServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultHoagieServiceProbe(logger=self._logger, context=context)

    def hoagie_created(self, hoagie_id: str, creator_id: str) -> None:
        """Record that a hoagie was created."""
        self._logger.info(
            "hoagie_created",
            hoagie_id=hoagie_id,
            creator_id=creator_id,
            **self._get_context_kwargs(),
        )

    def hoagie_updated(self, hoagie_id: str) -> None:
        """Record that a hoagie's mutable fields were updated."""
        self._logger.info(
            "hoagie_updated",
            hoagie_id=hoagie_id,
            **self._get_context_kwargs(),
        )

    def hoagie_removed(self, hoagie_id: str) -> None:
        """Record that a hoagie was removed."""
        self._logger.info(
            "hoagie_removed",
            hoagie_id=hoagie_id,
            **self._get_context_kwargs(),
        )

    def collaborator_added(
        self, hoagie_id: str, collaborator_id: str, requester_id: str, changed: bool
    ) -> None:
        """Record an add-collaborator command."""
        self._logger.info(
            "collaborator_added",
            hoagie_id=hoagie_id,
            collaborator_id=collaborator_id,
            requester_id=requester_id,
            changed=changed,
            **self._get_context_kwargs(),
        )

    def collaborator_removed(
        self, hoagie_id: str, collaborator_id: str, requester_id: str, changed: bool
    ) -> None:
        """Record a remove-collaborator command."""
        self._logger.info(
            "collaborator_removed",
            hoagie_id=hoagie_id,
            collaborator_id=collaborator_id,
            requester_id=requester_id,
            changed=changed,
            **self._get_context_kwargs(),
        )

    def collaborator_change_forbidden(
        self, hoagie_id: str, requester_id: str, action: str
    ) -> None:
        """Record that a non-creator tried to change the collaborator set."""
        self._logger.warning(
            "collaborator_change_forbidden",
            hoagie_id=hoagie_id,
            requester_id=requester_id,
            action=action,
            **self._get_context_kwargs(),
        )

    def comment_count_underflow(self, hoagie_id: str) -> None:
        """Record a decrement that would have taken the count below zero."""
        self._logger.warning(
            "comment_count_underflow",
            hoagie_id=hoagie_id,
            reconciliation_required=True,
            **self._get_context_kwargs(),
        )

    def comment_count_reconciled(self, hoagie_id: str, comment_count: int) -> None:
        """Record that a comment count was recomputed."""
        self._logger.info(
            "comment_count_reconciled",
            hoagie_id=hoagie_id,
            comment_count=comment_count,
            **self._get_context_kwargs(),
        )
