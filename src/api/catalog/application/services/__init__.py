"""Application services for the catalog bounded context."""

from catalog.application.services.comment_service import CommentService
from catalog.application.services.hoagie_service import HoagieService
from catalog.application.services.reference_resolver import ReferenceResolver

__all__ = [
    "CommentService",
    "HoagieService",
    "ReferenceResolver",
]
