"""Value objects for the catalog domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and update commands.
"""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID

from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId


@dataclass(frozen=True)
class HoagieId:
    """Identifier for a Hoagie aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> HoagieId:
        """Generate a new HoagieId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> HoagieId:
        """Create HoagieId from string value.

        Args:
            value: ULID string

        Returns:
            HoagieId instance

        Raises:
            InvalidInputError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise InvalidInputError(f"Invalid HoagieId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class CommentId:
    """Identifier for a Comment aggregate."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> CommentId:
        """Generate a new CommentId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> CommentId:
        """Create CommentId from string value.

        Raises:
            InvalidInputError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise InvalidInputError(f"Invalid CommentId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class HoagieUpdate:
    """Partial update of a hoagie's mutable fields.

    ``None`` leaves a field unchanged. An empty ``picture`` clears the
    picture. Creator and comment count have no field here and so can
    never be changed through an update.
    """

    name: str | None = None
    ingredients: tuple[str, ...] | None = None
    picture: str | None = None
    collaborator_ids: frozenset[UserId] | None = None

    @property
    def is_empty(self) -> bool:
        """Whether the update changes nothing."""
        return (
            self.name is None
            and self.ingredients is None
            and self.picture is None
            and self.collaborator_ids is None
        )


@dataclass(frozen=True)
class HoagieSummary:
    """Public projection of a hoagie embedded in comment read responses."""

    id: HoagieId
    name: str
