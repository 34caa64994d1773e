"""Pydantic models for identity API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import User
from shared_kernel.identity import UserSummary


class RegisterUserRequest(BaseModel):
    """Request model for registering a user."""

    name: str = Field(..., description="Display name", min_length=1, max_length=255)
    email: str = Field(..., description="Email address", min_length=3, max_length=320)
    password: str = Field(..., description="Plaintext password", min_length=1)


class LoginRequest(BaseModel):
    """Request model for logging in."""

    email: str = Field(..., description="Email address", min_length=1)
    password: str = Field(default="", description="Plaintext password")


class UserResponse(BaseModel):
    """Response model for a user. Never carries password material."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse
        """
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSummaryResponse(BaseModel):
    """Public user projection embedded in other responses and search results."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")

    @classmethod
    def from_summary(cls, summary: UserSummary) -> UserSummaryResponse:
        """Convert a UserSummary to API response."""
        return cls(id=summary.id.value, name=summary.name, email=summary.email)


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    user: UserResponse
    message: str = Field(default="Login successful")
