"""API router configuration."""

from fastapi import APIRouter

from api.routes.posts import router as posts_router
from api.routes.profile import router as profile_router
from api.routes.users import auth_router, users_router
from api.schemas.common import ErrorResponse, ValidationErrorResponse

router = APIRouter(
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
router.include_router(users_router)
router.include_router(auth_router)
router.include_router(profile_router)
router.include_router(posts_router)
