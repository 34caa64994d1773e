"""Pydantic models shared by the catalog routers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from catalog.domain.value_objects import HoagieSummary
from shared_kernel.identity import UserSummary


class UserSummaryResponse(BaseModel):
    """Public fields of a referenced user."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")

    @classmethod
    def from_summary(cls, summary: UserSummary) -> UserSummaryResponse:
        """Convert a UserSummary to API response."""
        return cls(id=summary.id.value, name=summary.name, email=summary.email)


class HoagieSummaryResponse(BaseModel):
    """Public fields of a referenced hoagie."""

    id: str = Field(..., description="Hoagie ID (ULID format)")
    name: str = Field(..., description="Hoagie name")

    @classmethod
    def from_summary(cls, summary: HoagieSummary) -> HoagieSummaryResponse:
        """Convert a HoagieSummary to API response."""
        return cls(id=summary.id.value, name=summary.name)
