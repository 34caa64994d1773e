"""Domain-Oriented Observability for the catalog application layer."""

from catalog.application.observability.comment_service_probe import (
    CommentServiceProbe,
    DefaultCommentServiceProbe,
)
from catalog.application.observability.hoagie_service_probe import (
    DefaultHoagieServiceProbe,
    HoagieServiceProbe,
)

__all__ = [
    "CommentServiceProbe",
    "DefaultCommentServiceProbe",
    "DefaultHoagieServiceProbe",
    "HoagieServiceProbe",
]
