"""Database infrastructure - shared engine, session and ORM primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    UnsupportedDialectError,
)

__all__ = [
    "DatabaseError",
    "UnsupportedDialectError",
]
