"""Repository protocols (ports) for the identity bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. The user repository is also the catalog context's source of
embedded user summaries.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from identity.domain.aggregates import User
from shared_kernel.identity import UserId, UserSummary


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Owns password hashes: they are written by ``add``/``set_password_hash``
    and read back only through ``get_credentials``.
    """

    async def add(self, user: User, password_hash: str) -> User:
        """Persist a newly registered user.

        Args:
            user: The User aggregate to persist
            password_hash: Salted one-way hash of the user's password

        Returns:
            The stored User, with timestamps populated

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        ...

    async def set_password_hash(self, user_id: UserId, password_hash: str) -> None:
        """Replace a user's password hash.

        Args:
            user_id: The user whose credential changes
            password_hash: New salted hash
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by exact (case-sensitive) email.

        Args:
            email: The email to search for

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_credentials(self, email: str) -> tuple[User, str] | None:
        """Retrieve a user together with their stored password hash.

        This is the only read path that exposes password material.

        Args:
            email: The email to search for

        Returns:
            (User, password_hash), or None if not found
        """
        ...

    async def search_by_name(self, query: str, limit: int) -> list[UserSummary]:
        """Case-insensitive literal substring search over user names.

        Args:
            query: Text that must appear in the name; matched literally
            limit: Maximum number of results

        Returns:
            Matching user summaries ordered by name
        """
        ...

    async def get_summaries(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, UserSummary]:
        """Batch-resolve user ids into public summaries.

        Args:
            user_ids: Users to resolve

        Returns:
            Mapping of id to summary; unknown ids are absent
        """
        ...
