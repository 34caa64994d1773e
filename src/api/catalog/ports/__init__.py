"""Ports (interfaces) for the catalog bounded context."""

from catalog.ports.exceptions import (
    CommentNotFoundError,
    HoagieNotFoundError,
    UserNotFoundError,
)
from catalog.ports.repositories import ICommentRepository, IHoagieRepository

__all__ = [
    "CommentNotFoundError",
    "HoagieNotFoundError",
    "ICommentRepository",
    "IHoagieRepository",
    "UserNotFoundError",
]
