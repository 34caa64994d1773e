"""Comment aggregate for the catalog context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from catalog.domain.value_objects import CommentId, HoagieId
from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId


def _validate_text(text: str | None) -> str:
    if text is None or not text.strip():
        raise InvalidInputError("Comment text is required")
    return text


@dataclass
class Comment:
    """A comment left by a user on a hoagie.

    Author and owning hoagie are fixed at creation. Only the text can be
    edited. A comment never outlives its hoagie.
    """

    id: CommentId
    text: str
    author_id: UserId
    hoagie_id: HoagieId
    timestamp: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(cls, text: str, author_id: UserId, hoagie_id: HoagieId) -> Comment:
        """Factory method for a new comment.

        Raises:
            InvalidInputError: If text is empty or blank
        """
        return cls(
            id=CommentId.generate(),
            text=_validate_text(text),
            author_id=author_id,
            hoagie_id=hoagie_id,
            timestamp=datetime.now(UTC),
        )

    def edit(self, text: str) -> None:
        """Replace the comment text.

        Raises:
            InvalidInputError: If text is empty or blank
        """
        self.text = _validate_text(text)

    def __eq__(self, other: object) -> bool:
        """Comments are equal if they have the same ID."""
        if not isinstance(other, Comment):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
