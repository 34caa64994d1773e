"""Application-layer value objects for the identity bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from identity.domain.aggregates import normalize_email
from infrastructure.settings import AuthSettings


@dataclass(frozen=True)
class AuthenticationPolicy:
    """Login policy resolved once at process start.

    When ``test_mode`` is enabled, the account registered under
    ``test_user_email`` logs in without a password check. This is a
    development convenience only and is off by default. The general
    credential check never consults this policy; ``AuthenticationService``
    applies it explicitly before falling back to that check.
    """

    test_mode: bool = False
    test_user_email: str | None = None

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> AuthenticationPolicy:
        """Build the policy from authentication settings."""
        if not settings.test_mode:
            return cls()
        return cls(
            test_mode=True, test_user_email=normalize_email(settings.test_user_email)
        )

    def bypasses_password_check(self, email: str) -> bool:
        """Whether ``email`` is the test account and test mode is on."""
        return self.test_mode and normalize_email(email) == self.test_user_email
