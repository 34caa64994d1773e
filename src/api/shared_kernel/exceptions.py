"""Error kinds shared across bounded contexts.

Each kind maps to one user-actionable failure at the HTTP boundary. They
subclass the closest builtin so callers that only know the builtin
(``ValueError``, ``PermissionError``, ``LookupError``) keep working.
"""


class DomainError(Exception):
    """Base class for all domain-level failures."""

    pass


class NotFoundError(DomainError, LookupError):
    """Raised when a referenced entity does not exist.

    Attributes:
        entity: Kind of the missing entity (e.g. "hoagie", "user")
        entity_id: Identifier that failed to resolve
    """

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity.capitalize()} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ForbiddenError(DomainError, PermissionError):
    """Raised when an authorization rule rejects the requester.

    The application layer should return HTTP 403 without exposing
    internal details.
    """

    pass


class InvalidInputError(DomainError, ValueError):
    """Raised for empty or missing required fields, malformed identifiers,
    and queries that are too short."""

    pass


class InconsistencyError(DomainError):
    """Raised when a denormalized value could not be updated after its
    triggering write already succeeded.

    Never surfaced to end users; callers record it for reconciliation.
    """

    pass
