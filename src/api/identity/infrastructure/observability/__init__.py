"""Domain-Oriented Observability for identity infrastructure."""

from identity.infrastructure.observability.repository_probe import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "DefaultUserRepositoryProbe",
    "UserRepositoryProbe",
]
