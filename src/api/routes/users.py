"""Registration and authentication routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_user_service
from api.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

users_router = APIRouter(prefix="/users", tags=["users"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@users_router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered, session token issued"},
        400: {"description": "Validation failed or email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Create an account and return a session token."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)


@auth_router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={401: {"description": "Missing or invalid token"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_authenticated_user(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user the session token belongs to."""
    current = await service.get_current(user.id)
    return UserResponse.model_validate(current)


@auth_router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={400: {"description": "Invalid credentials"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for a session token."""
    token = await service.login(email=body.email, password=body.password)
    return TokenResponse(token=token)
