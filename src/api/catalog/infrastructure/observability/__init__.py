"""Domain-Oriented Observability for catalog infrastructure."""

from catalog.infrastructure.observability.repository_probe import (
    CommentRepositoryProbe,
    DefaultCommentRepositoryProbe,
    DefaultHoagieRepositoryProbe,
    HoagieRepositoryProbe,
)

__all__ = [
    "CommentRepositoryProbe",
    "DefaultCommentRepositoryProbe",
    "DefaultHoagieRepositoryProbe",
    "HoagieRepositoryProbe",
]
