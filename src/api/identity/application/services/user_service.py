"""User application service for the identity bounded context.

Handles registration, credential verification and user search. Owns
password hashing: plaintext passwords never leave this module and are
never logged.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from identity.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from identity.application.security import (
    DEFAULT_ROUNDS,
    MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
)
from identity.domain.aggregates import User, normalize_email
from identity.ports.exceptions import DuplicateIdentityError
from identity.ports.repositories import IUserRepository
from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId, UserSummary

MIN_SEARCH_QUERY_LENGTH = 2


class UserService:
    """Application service for user management.

    Manages database transactions for each use case.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
        search_max_limit: int = 25,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
            bcrypt_rounds: bcrypt work factor for new hashes
            search_max_limit: Upper bound on search result size
        """
        self._user_repository = user_repository
        self._session = session
        self._probe = probe or DefaultUserServiceProbe()
        self._bcrypt_rounds = bcrypt_rounds
        self._search_max_limit = search_max_limit

    async def register(self, name: str, email: str, password: str) -> User:
        """Register a new user.

        Args:
            name: Display name
            email: Email address, unique across users
            password: Plaintext password, hashed before persistence

        Returns:
            The registered User

        Raises:
            InvalidInputError: If a field is missing or malformed
            DuplicateIdentityError: If the email is already registered
        """
        if not password:
            raise InvalidInputError("Password is required")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise InvalidInputError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

        user = User.register(name=name, email=email)
        password_hash = hash_password(password, rounds=self._bcrypt_rounds)

        try:
            async with self._session.begin():
                stored = await self._user_repository.add(user, password_hash)
        except DuplicateIdentityError:
            self._probe.duplicate_registration(email=user.email)
            raise
        except Exception as e:
            self._probe.registration_failed(email=user.email, error=str(e))
            raise

        self._probe.user_registered(user_id=stored.id.value, email=stored.email)
        return stored

    async def get_user(self, user_id: UserId) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user to retrieve

        Returns:
            The User, or None if not found
        """
        async with self._session.begin():
            return await self._user_repository.get_by_id(user_id)

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by exact email.

        Args:
            email: Email as stored (case-sensitive)

        Returns:
            The User, or None if not found
        """
        async with self._session.begin():
            return await self._user_repository.get_by_email(normalize_email(email))

    async def verify_credentials(self, email: str, password: str) -> User | None:
        """Check an email/password pair against the stored hash.

        Never raises for a wrong password. Store failures are recorded and
        treated as a non-match.

        Args:
            email: Email as stored
            password: Candidate plaintext password

        Returns:
            The User on match, otherwise None
        """
        email = normalize_email(email)
        try:
            async with self._session.begin():
                record = await self._user_repository.get_credentials(email)
        except Exception as e:
            self._probe.credential_check_failed(email=email, error=str(e))
            return None

        if record is None:
            self._probe.credentials_rejected(email=email)
            return None

        user, password_hash = record
        if not verify_password(password, password_hash):
            self._probe.credentials_rejected(email=email)
            return None

        return user

    async def search_by_name(self, query: str, limit: int = 10) -> list[UserSummary]:
        """Search users whose name contains ``query`` (case-insensitive).

        The query is matched literally: wildcard and pattern characters in it
        carry no special meaning.

        Args:
            query: Substring to look for, at least 2 characters
            limit: Maximum results, bounded by the configured search maximum

        Returns:
            Matching user summaries (id, name, email only)

        Raises:
            InvalidInputError: If the query is too short or limit is below 1
        """
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            raise InvalidInputError(
                f"Search query must be at least {MIN_SEARCH_QUERY_LENGTH} characters"
            )
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1, got {limit}")

        async with self._session.begin():
            results = await self._user_repository.search_by_name(
                query, min(limit, self._search_max_limit)
            )

        self._probe.users_searched(query=query, result_count=len(results))
        return results

    async def ensure_test_user(self, name: str, email: str, password: str) -> User:
        """Create the designated test user, or reset its password if present.

        Only called at startup when test mode is enabled.

        Args:
            name: Display name for a newly created test user
            email: Test account email
            password: Password to (re)set

        Returns:
            The test User
        """
        password_hash = hash_password(password, rounds=self._bcrypt_rounds)

        async with self._session.begin():
            existing = await self._user_repository.get_by_email(email)
            if existing is not None:
                await self._user_repository.set_password_hash(
                    existing.id, password_hash
                )
                user, was_created = existing, False
            else:
                user = await self._user_repository.add(
                    User.register(name=name, email=email), password_hash
                )
                was_created = True

        self._probe.test_user_ensured(user_id=user.id.value, was_created=was_created)
        return user
