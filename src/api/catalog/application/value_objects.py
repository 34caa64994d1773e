"""Read models for the catalog bounded context.

Views pair an aggregate with the public summaries of the entities it
references. A reference that no longer resolves is ``None`` (single
references) or left out (collaborators).
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.aggregates import Comment, Hoagie
from catalog.domain.value_objects import HoagieSummary
from shared_kernel.identity import UserSummary


@dataclass(frozen=True)
class HoagieView:
    """A hoagie with its creator and collaborators resolved."""

    hoagie: Hoagie
    creator: UserSummary | None
    collaborators: tuple[UserSummary, ...] = ()


@dataclass(frozen=True)
class CommentView:
    """A comment with its author and hoagie resolved."""

    comment: Comment
    author: UserSummary | None
    hoagie: HoagieSummary | None
