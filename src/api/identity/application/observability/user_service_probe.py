"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations. Probes never receive passwords
or password hashes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_registered(self, user_id: str, email: str) -> None:
        """Record that a new user registered."""
        ...

    def duplicate_registration(self, email: str) -> None:
        """Record that registration was rejected for an existing email."""
        ...

    def registration_failed(self, email: str, error: str) -> None:
        """Record that registration failed unexpectedly."""
        ...

    def credentials_rejected(self, email: str) -> None:
        """Record that a credential check did not match."""
        ...

    def credential_check_failed(self, email: str, error: str) -> None:
        """Record that a credential check hit a store failure."""
        ...

    def users_searched(self, query: str, result_count: int) -> None:
        """Record a user name search."""
        ...

    def test_user_ensured(self, user_id: str, was_created: bool) -> None:
        """Record that the designated test user was created or reset."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_registered(self, user_id: str, email: str) -> None:
        """Record that a new user registered."""
        self._logger.info(
            "user_registered",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def duplicate_registration(self, email: str) -> None:
        """Record that registration was rejected for an existing email."""
        self._logger.info(
            "duplicate_registration",
            email=email,
            **self._get_context_kwargs(),
        )

    def registration_failed(self, email: str, error: str) -> None:
        """Record that registration failed unexpectedly."""
        self._logger.error(
            "registration_failed",
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )

    def credentials_rejected(self, email: str) -> None:
        """Record that a credential check did not match."""
        self._logger.info(
            "credentials_rejected",
            email=email,
            **self._get_context_kwargs(),
        )

    def credential_check_failed(self, email: str, error: str) -> None:
        """Record that a credential check hit a store failure."""
        self._logger.error(
            "credential_check_failed",
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )

    def users_searched(self, query: str, result_count: int) -> None:
        """Record a user name search."""
        self._logger.debug(
            "users_searched",
            query=query,
            result_count=result_count,
            **self._get_context_kwargs(),
        )

    def test_user_ensured(self, user_id: str, was_created: bool) -> None:
        """Record that the designated test user was created or reset."""
        self._logger.info(
            "test_user_ensured",
            user_id=user_id,
            was_created=was_created,
            **self._get_context_kwargs(),
        )
