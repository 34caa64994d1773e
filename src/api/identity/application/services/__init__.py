"""Application services for the identity bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases.
"""

from identity.application.services.authentication_service import (
    AuthenticationService,
)
from identity.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "UserService",
]
