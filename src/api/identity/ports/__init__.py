"""Ports (interfaces) for the identity bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the domain independent of infrastructure.
"""

from identity.ports.exceptions import DuplicateIdentityError
from identity.ports.repositories import IUserRepository

__all__ = [
    "DuplicateIdentityError",
    "IUserRepository",
]
