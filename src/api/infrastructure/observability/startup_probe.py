"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def test_mode_enabled(self, test_user_email: str) -> None:
        """Record that the passwordless test account is active."""
        ...

    def test_user_seeded(self, user_id: str, email: str) -> None:
        """Record that the test account is ready for passwordless login."""
        ...

    def test_user_seed_failed(self, error: str) -> None:
        """Record that seeding the test account failed."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def test_mode_enabled(self, test_user_email: str) -> None:
        """Record that the passwordless test account is active."""
        self._logger.warning(
            "auth_test_mode_enabled",
            test_user_email=test_user_email,
            **self._get_context_kwargs(),
        )

    def test_user_seeded(self, user_id: str, email: str) -> None:
        """Record that the test account is ready for passwordless login."""
        self._logger.info(
            "test_user_seeded",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def test_user_seed_failed(self, error: str) -> None:
        """Record that seeding the test account failed."""
        self._logger.error(
            "test_user_seed_failed",
            error=error,
            **self._get_context_kwargs(),
        )
