"""User reference types shared between the identity and catalog contexts.

The catalog only ever refers to users by ``UserId`` and, on read paths,
embeds the public ``UserSummary`` projection. It resolves those through the
``UserSummaryLookup`` port, which the identity context implements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, runtime_checkable

from ulid import ULID

from shared_kernel.exceptions import InvalidInputError


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: ULID string

        Returns:
            UserId instance

        Raises:
            InvalidInputError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise InvalidInputError(f"Invalid UserId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserSummary:
    """Public projection of a user: the only fields ever embedded in other
    aggregates' read responses or returned by search."""

    id: UserId
    name: str
    email: str


@runtime_checkable
class UserSummaryLookup(Protocol):
    """Port for resolving user references into public summaries."""

    async def get_summaries(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, UserSummary]:
        """Batch-resolve user ids.

        Args:
            user_ids: Users to resolve (duplicates allowed)

        Returns:
            Mapping of id to summary; ids with no matching user are absent
        """
        ...
