"""SQLAlchemy ORM models for the catalog bounded context."""

from catalog.infrastructure.models.comment import CommentModel
from catalog.infrastructure.models.hoagie import (
    HoagieCollaboratorModel,
    HoagieModel,
)

__all__ = [
    "CommentModel",
    "HoagieCollaboratorModel",
    "HoagieModel",
]
