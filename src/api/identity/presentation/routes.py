"""HTTP routes for the identity bounded context.

Registration and login live under ``/auth``; lookup and search under
``/users``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from identity.application.services import AuthenticationService, UserService
from identity.dependencies import get_authentication_service, get_user_service
from identity.ports.exceptions import DuplicateIdentityError
from identity.presentation.models import (
    LoginRequest,
    LoginResponse,
    RegisterUserRequest,
    UserResponse,
    UserSummaryResponse,
)
from shared_kernel.exceptions import InvalidInputError
from shared_kernel.identity import UserId

auth_router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

users_router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@auth_router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User registered"},
        400: {"description": "Missing or malformed field"},
        409: {"description": "Email already registered"},
        500: {"description": "Internal server error"},
    },
)
async def register(
    request: RegisterUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Register a new user.

    Args:
        request: Name, email and password
        service: User service

    Returns:
        UserResponse for the created user (no password material)

    Raises:
        HTTPException: 400 if a field is invalid
        HTTPException: 409 if the email is already registered
        HTTPException: 500 for unexpected errors
    """
    try:
        user = await service.register(
            name=request.name,
            email=request.email,
            password=request.password,
        )
        return UserResponse.from_domain(user)

    except DuplicateIdentityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        )


@auth_router.post("/login")
async def login(
    request: LoginRequest,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> LoginResponse:
    """Log in with email and password.

    Raises:
        HTTPException: 401 if the credentials are rejected
    """
    try:
        user = await service.login(email=request.email, password=request.password)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in",
        )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return LoginResponse(user=UserResponse.from_domain(user))


@users_router.get(
    "/search",
    response_model=list[UserSummaryResponse],
    summary="Search users by name",
    description="Case-insensitive literal substring match over user names",
)
async def search_users(
    service: Annotated[UserService, Depends(get_user_service)],
    q: Annotated[str, Query(description="Text contained in the name")] = "",
    limit: Annotated[int, Query(description="Maximum results")] = 10,
) -> list[UserSummaryResponse]:
    """Search users by name.

    Raises:
        HTTPException: 400 if the query is shorter than 2 characters
    """
    try:
        results = await service.search_by_name(q, limit=limit)
        return [UserSummaryResponse.from_summary(summary) for summary in results]

    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search users",
        )


@users_router.get("/{user_id}")
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a user by ID.

    Args:
        user_id: User ID (ULID format)
        service: User service

    Raises:
        HTTPException: 400 if the ID is malformed
        HTTPException: 404 if no such user exists
    """
    try:
        user_id_obj = UserId.from_string(user_id)
    except InvalidInputError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user ID format",
        )

    try:
        user = await service.get_user(user_id_obj)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve user",
        )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.from_domain(user)
