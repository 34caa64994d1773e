"""User aggregate for the identity context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId, UserSummary


def normalize_email(email: str) -> str:
    """Trim surrounding whitespace; case is kept."""
    return email.strip()


@dataclass(frozen=True)
class User:
    """User aggregate representing a registered person.

    Identity is immutable once created. The aggregate deliberately carries no
    password material: hashes live only in the identity store and are read
    solely by the credential check.

    Business rules:
    - Name must be non-blank
    - Email must be non-blank and contain "@"; it is stored as given
      (case-sensitive, surrounding whitespace removed) and must be unique
      across users
    """

    id: UserId
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def register(cls, name: str, email: str) -> User:
        """Factory method for a newly registered user.

        Args:
            name: Display name
            email: Email address (uniqueness is enforced by the store)

        Returns:
            A new User with a generated ID

        Raises:
            InvalidInputError: If name or email is missing or malformed
        """
        if not name or not name.strip():
            raise InvalidInputError("Name is required")
        if not email or not email.strip():
            raise InvalidInputError("Email is required")
        if "@" not in email:
            raise InvalidInputError(f"Invalid email address: {email}")

        return cls(id=UserId.generate(), name=name.strip(), email=normalize_email(email))

    def summary(self) -> UserSummary:
        """Project to the public fields embedded in other read responses."""
        return UserSummary(id=self.id, name=self.name, email=self.email)

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
