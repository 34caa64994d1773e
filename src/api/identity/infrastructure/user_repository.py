"""SQLAlchemy implementation of IUserRepository.

Stores user identity and password hashes. Password hashes are only ever
selected by ``get_credentials``; every other query projects them away.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import User
from identity.infrastructure.models import UserModel
from identity.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from identity.ports.exceptions import DuplicateIdentityError
from identity.ports.repositories import IUserRepository
from shared_kernel.identity import UserId, UserSummary

LIKE_ESCAPE = "\\"


def escape_like(value: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so ``value`` matches literally.

    Args:
        value: Untrusted search text
        escape: Escape character declared in the LIKE clause

    Returns:
        ``value`` with the escape character, ``%`` and ``_`` escaped
    """
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class UserRepository(IUserRepository):
    """SQLAlchemy-backed repository for User aggregates.

    Runs inside the caller's transaction; services own ``session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def add(self, user: User, password_hash: str) -> User:
        """Insert a new user.

        Args:
            user: The User aggregate to persist
            password_hash: Salted one-way hash of the password

        Returns:
            The stored User with timestamps

        Raises:
            DuplicateIdentityError: If the email is already registered
        """
        model = UserModel(
            id=user.id.value,
            name=user.name,
            email=user.email,
            password_hash=password_hash,
        )
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_email(user.email)
            raise DuplicateIdentityError(user.email) from e

        self._probe.user_saved(user.id.value, user.email)
        return self._to_domain(model)

    async def set_password_hash(self, user_id: UserId, password_hash: str) -> None:
        """Replace a user's password hash.

        Args:
            user_id: The user whose credential changes
            password_hash: New salted hash
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id.value)
            .values(password_hash=password_hash)
        )
        await self._session.execute(stmt)
        self._probe.password_hash_replaced(user_id.value)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by exact email.

        Args:
            email: The email to search for

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.email_not_found(email)
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def get_credentials(self, email: str) -> tuple[User, str] | None:
        """Retrieve a user and their password hash.

        Args:
            email: The email to search for

        Returns:
            (User, password_hash), or None if not found
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.email_not_found(email)
            return None

        return self._to_domain(model), model.password_hash

    async def search_by_name(self, query: str, limit: int) -> list[UserSummary]:
        """Case-insensitive literal substring search over names.

        Args:
            query: Text that must appear in the name
            limit: Maximum number of results

        Returns:
            Matching user summaries ordered by name
        """
        pattern = f"%{escape_like(query)}%"
        stmt = (
            select(UserModel.id, UserModel.name, UserModel.email)
            .where(UserModel.name.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(UserModel.name, UserModel.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)

        return [
            UserSummary(id=UserId(value=row.id), name=row.name, email=row.email)
            for row in result
        ]

    async def get_summaries(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, UserSummary]:
        """Batch-resolve user ids into public summaries.

        Args:
            user_ids: Users to resolve

        Returns:
            Mapping of id to summary; unknown ids are absent
        """
        ids = {user_id.value for user_id in user_ids}
        if not ids:
            return {}

        stmt = select(UserModel.id, UserModel.name, UserModel.email).where(
            UserModel.id.in_(ids)
        )
        result = await self._session.execute(stmt)

        summaries: dict[UserId, UserSummary] = {}
        for row in result:
            user_id = UserId(value=row.id)
            summaries[user_id] = UserSummary(id=user_id, name=row.name, email=row.email)
        return summaries

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        """Map an ORM row to the User aggregate (without password material)."""
        return User(
            id=UserId(value=model.id),
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
