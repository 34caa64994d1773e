"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        HOAGIE_DB_HOST: Database host (default: localhost)
        HOAGIE_DB_PORT: Database port (default: 5432)
        HOAGIE_DB_DATABASE: Database name (default: hoagies)
        HOAGIE_DB_USERNAME: Database user (default: hoagies)
        HOAGIE_DB_PASSWORD: Database password (required in production)
        HOAGIE_DB_URL: Full SQLAlchemy async URL, overrides the fields above
            (e.g. sqlite+aiosqlite:///hoagies.db for local development)
        HOAGIE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        HOAGIE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        HOAGIE_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOAGIE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="hoagies", description="Database name")
    username: str = Field(default="hoagies", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    url: str | None = Field(
        default=None,
        description="Full async database URL, takes precedence over host/port/etc.",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.url is not None:
            return self.url.split("@")[-1]
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Authentication settings.

    Test mode lets a single designated account log in without a password
    check. It is resolved once at startup into an explicit
    ``AuthenticationPolicy`` and must stay disabled in production.

    Environment variables:
        HOAGIE_AUTH_TEST_MODE: Enable the test account (default: false)
        HOAGIE_AUTH_TEST_USER_EMAIL: Test account email
        HOAGIE_AUTH_TEST_USER_PASSWORD: Test account password (seeded at startup)
        HOAGIE_AUTH_TEST_USER_NAME: Test account display name
        HOAGIE_AUTH_BCRYPT_ROUNDS: bcrypt work factor (default: 12)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOAGIE_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    test_mode: bool = Field(default=False, description="Enable the test account")
    test_user_email: str = Field(
        default="test@example.com", description="Email of the test account"
    )
    test_user_password: SecretStr = Field(
        default=SecretStr("test123"), description="Password of the test account"
    )
    test_user_name: str = Field(
        default="Test User", description="Display name of the test account"
    )
    bcrypt_rounds: int = Field(
        default=12, description="bcrypt work factor", ge=4, le=31
    )


class PaginationSettings(BaseSettings):
    """Server-side bounds for listing and search endpoints.

    Environment variables:
        HOAGIE_PAGINATION_DEFAULT_LIMIT: Page size when none is given (default: 10)
        HOAGIE_PAGINATION_MAX_LIMIT: Largest page size honored (default: 100)
        HOAGIE_PAGINATION_SEARCH_MAX_LIMIT: Largest user search result (default: 25)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOAGIE_PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)
    search_max_limit: int = Field(default=25, ge=1)

    @model_validator(mode="after")
    def validate_limits(self) -> "PaginationSettings":
        """Validate default_limit <= max_limit."""
        if self.default_limit > self.max_limit:
            raise ValueError(
                f"default_limit ({self.default_limit}) must be <= "
                f"max_limit ({self.max_limit})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Hoagie Hub API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def log_level(self) -> int:
        """Minimum log level; debug mode also emits debug events."""
        return logging.DEBUG if self.debug else logging.INFO

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get authentication settings."""
        return get_auth_settings()

    @property
    def pagination(self) -> PaginationSettings:
        """Get pagination settings."""
        return get_pagination_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings."""
    return AuthSettings()


@lru_cache
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings."""
    return PaginationSettings()
