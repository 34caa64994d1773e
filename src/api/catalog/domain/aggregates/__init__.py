"""Aggregates for the catalog bounded context."""

from catalog.domain.aggregates.comment import Comment
from catalog.domain.aggregates.hoagie import Hoagie

__all__ = [
    "Comment",
    "Hoagie",
]
