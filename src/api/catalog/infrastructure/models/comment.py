"""SQLAlchemy ORM model for the comments table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class CommentModel(Base, TimestampMixin):
    """ORM model for comments table.

    Comments are removed with their hoagie (ON DELETE CASCADE).
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_hoagie_id_created_at", "hoagie_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    hoagie_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("hoagies.id", ondelete="CASCADE"),
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<CommentModel(id={self.id}, hoagie_id={self.hoagie_id})>"
