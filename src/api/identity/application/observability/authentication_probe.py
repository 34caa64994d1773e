"""Protocol for authentication observability.

Defines the interface for domain probes that capture login events.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(self, user_id: str, email: str) -> None:
        """Record a successful password login."""
        ...

    def test_account_bypass_used(self, user_id: str, email: str) -> None:
        """Record that the test account logged in without a password check."""
        ...

    def authentication_failed(self, email: str) -> None:
        """Record a rejected login."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_authenticated(self, user_id: str, email: str) -> None:
        """Record a successful password login."""
        self._logger.info(
            "user_authenticated",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def test_account_bypass_used(self, user_id: str, email: str) -> None:
        """Record that the test account logged in without a password check."""
        self._logger.warning(
            "test_account_bypass_used",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, email: str) -> None:
        """Record a rejected login."""
        self._logger.info(
            "authentication_failed",
            email=email,
            **self._get_context_kwargs(),
        )
