"""Identity presentation layer."""

from identity.presentation.routes import auth_router, users_router

__all__ = ["auth_router", "users_router"]
