"""Authentication service for the identity bounded context.

Login returns the user record; there is no token layer.
"""

from __future__ import annotations

from identity.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from identity.application.services.user_service import UserService
from identity.application.value_objects import AuthenticationPolicy
from identity.domain.aggregates import User


class AuthenticationService:
    """Applies the login policy on top of the credential check."""

    def __init__(
        self,
        user_service: UserService,
        policy: AuthenticationPolicy,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize AuthenticationService.

        Args:
            user_service: Service providing lookup and credential checks
            policy: Login policy resolved at process start
            probe: Optional domain probe for observability
        """
        self._user_service = user_service
        self._policy = policy
        self._probe = probe or DefaultAuthenticationProbe()

    async def login(self, email: str, password: str) -> User | None:
        """Authenticate an email/password pair.

        Args:
            email: Email as stored
            password: Plaintext password

        Returns:
            The User on success, None on rejection
        """
        if self._policy.bypasses_password_check(email):
            user = await self._user_service.find_by_email(email)
            if user is not None:
                self._probe.test_account_bypass_used(
                    user_id=user.id.value, email=email
                )
                return user

        user = await self._user_service.verify_credentials(email, password)
        if user is None:
            self._probe.authentication_failed(email=email)
            return None

        self._probe.user_authenticated(user_id=user.id.value, email=email)
        return user
