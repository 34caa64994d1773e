"""SQLAlchemy ORM models for hoagies and their collaborator sets."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin, _utc_now


class HoagieModel(Base, TimestampMixin):
    """ORM model for hoagies table.

    ``comment_count`` is written only by single-statement UPDATEs in
    HoagieRepository. The check constraint keeps it non-negative.
    """

    __tablename__ = "hoagies"
    __table_args__ = (
        CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    ingredients: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    picture: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    creator_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    comment_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<HoagieModel(id={self.id}, name={self.name})>"


class HoagieCollaboratorModel(Base):
    """ORM model for hoagie_collaborators table.

    The composite primary key gives the collaborator set its set semantics.
    """

    __tablename__ = "hoagie_collaborators"

    hoagie_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("hoagies.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<HoagieCollaboratorModel(hoagie_id={self.hoagie_id}, "
            f"user_id={self.user_id})>"
        )
