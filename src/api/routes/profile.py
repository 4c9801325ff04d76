"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.schemas.common import MessageResponse
from api.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={400: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    item = await service.get_by_owner(user.id)
    return ProfileResponse.from_entity(item)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update my profile",
    responses={400: {"description": "Status and skills are required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the profile, or update only the fields supplied."""
    item = await service.upsert(
        user_id=user.id,
        status=body.status,
        skills=body.skills,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        github_username=body.github_username,
        social=body.social_links(),
    )
    return ProfileResponse.from_entity(item)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every developer profile."""
    items = await service.get_all()
    return [ProfileResponse.from_entity(item) for item in items]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a user's profile",
    responses={400: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the profile owned by ``user_id``."""
    item = await service.get_by_user_id(user_id)
    return ProfileResponse.from_entity(item)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the authenticated user's posts, profile and account."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add experience",
    responses={400: {"description": "Validation failed or no profile"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry at the top of the profile."""
    item = await service.add_experience(user.id, body.to_entity())
    return ProfileResponse.from_entity(item)


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileResponse,
    summary="Delete experience",
    responses={404: {"description": "Experience does not exist"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_experience(
    request: Request,
    experience_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry from the profile."""
    item = await service.delete_experience(user.id, experience_id)
    return ProfileResponse.from_entity(item)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add education",
    responses={400: {"description": "Validation failed or no profile"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry at the top of the profile."""
    item = await service.add_education(user.id, body.to_entity())
    return ProfileResponse.from_entity(item)


@router.delete(
    "/education/{education_id}",
    response_model=ProfileResponse,
    summary="Delete education",
    responses={404: {"description": "Education does not exist"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_education(
    request: Request,
    education_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry from the profile."""
    item = await service.delete_education(user.id, education_id)
    return ProfileResponse.from_entity(item)
