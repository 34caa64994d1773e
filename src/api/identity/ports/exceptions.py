"""Domain exceptions for the identity bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""

from shared_kernel.exceptions import DomainError


class DuplicateIdentityError(DomainError):
    """Raised when registering an email that already belongs to a user.

    Email uniqueness is enforced by a unique index in the store, so two
    concurrent registrations with the same email cannot both succeed. An
    existing record is never overwritten.
    """

    def __init__(self, email: str):
        super().__init__(f"A user with email {email} already exists")
        self.email = email
