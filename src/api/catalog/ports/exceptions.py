"""Domain exceptions for the catalog bounded context.

Specializations of the shared error kinds naming the entity that failed
to resolve.
"""

from shared_kernel.exceptions import NotFoundError


class HoagieNotFoundError(NotFoundError):
    """Raised when a hoagie referenced by a command does not exist."""

    def __init__(self, hoagie_id: str):
        super().__init__("hoagie", hoagie_id)


class CommentNotFoundError(NotFoundError):
    """Raised when a comment referenced by a command does not exist."""

    def __init__(self, comment_id: str):
        super().__init__("comment", comment_id)


class UserNotFoundError(NotFoundError):
    """Raised when a user referenced by a catalog command does not exist."""

    def __init__(self, user_id: str):
        super().__init__("user", user_id)
