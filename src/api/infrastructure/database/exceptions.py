"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class UnsupportedDialectError(DatabaseError):
    """Raised when a store-level operation has no implementation for a dialect."""

    def __init__(self, dialect: str, operation: str):
        super().__init__(f"{operation} is not supported on dialect '{dialect}'")
        self.dialect = dialect
        self.operation = operation
