"""Profile service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from core.ids import parse_id
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileWithOwner,
    split_skills,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

_TEXT_FIELDS = ("company", "website", "location", "bio", "github_username")


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_by_owner(self, user_id: UUID) -> ProfileWithOwner:
        """Get the requester's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            owner = await uow.users.get(user_id)
            return ProfileWithOwner(profile=profile, owner=owner)

    async def get_by_user_id(self, raw_user_id: str | UUID) -> ProfileWithOwner:
        """Get a profile by its owner's id. Malformed ids count as missing."""
        user_id = parse_id(raw_user_id)
        if not user_id:
            raise ProfileNotFoundError(str(raw_user_id))
        return await self.get_by_owner(user_id)

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get every profile with its owner's public data."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=profile, owner=owners.get(profile.user_id))
                for profile in profiles
            ]

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        skills: str,
        company: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
        bio: Optional[str] = None,
        github_username: Optional[str] = None,
        social: Optional[dict[str, Optional[str]]] = None,
    ) -> ProfileWithOwner:
        """Create the user's profile or update the fields that were supplied.

        Fields passed as None (or empty) leave the stored value untouched.
        Social links are merged network by network.
        """
        supplied = {
            "company": company,
            "website": website,
            "location": location,
            "bio": bio,
            "github_username": github_username,
        }
        social_links = {
            network: link
            for network, link in (social or {}).items()
            if network in SOCIAL_NETWORKS and link
        }

        async with self._uow_factory() as uow:
            owner = await self._require_owner(uow, user_id)
            profile = await uow.profiles.get_by_user(user_id)

            if profile:
                profile.status = status
                profile.skills = split_skills(skills)
                for name in _TEXT_FIELDS:
                    if supplied[name]:
                        setattr(profile, name, supplied[name])
                profile.social = {**profile.social, **social_links}
                profile.updated_at = datetime.utcnow()
                saved = await uow.profiles.update(profile)
                event = "profile_updated"
            else:
                profile = Profile(
                    user_id=user_id,
                    status=status,
                    skills=split_skills(skills),
                    social=social_links,
                    **{name: value for name, value in supplied.items() if value},
                )
                saved = await uow.profiles.create(profile)
                event = "profile_created"

            await uow.commit()
            logger.info(event, user_id=str(user_id))
            return ProfileWithOwner(profile=saved, owner=owner)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, profile and user record.

        Comments and likes the user left on other people's posts are kept.
        """
        async with self._uow_factory() as uow:
            deleted_posts = await uow.posts.delete_all_for_user(user_id)
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()
            logger.info(
                "account_deleted",
                user_id=str(user_id),
                deleted_posts=deleted_posts,
            )

    async def add_experience(self, user_id: UUID, entry: ExperienceEntry) -> ProfileWithOwner:
        """Prepend an experience entry to the user's profile."""
        async with self._uow_factory() as uow:
            owner = await self._require_owner(uow, user_id)
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            return await self._save(uow, profile, owner)

    async def delete_experience(
        self, user_id: UUID, experience_id: str | UUID
    ) -> ProfileWithOwner:
        """Remove an experience entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            parsed = parse_id(experience_id)
            if not parsed or not profile.remove_experience(parsed):
                raise ExperienceNotFoundError(str(experience_id))
            return await self._save(uow, profile, await uow.users.get(user_id))

    async def add_education(self, user_id: UUID, entry: EducationEntry) -> ProfileWithOwner:
        """Prepend an education entry to the user's profile."""
        async with self._uow_factory() as uow:
            owner = await self._require_owner(uow, user_id)
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            return await self._save(uow, profile, owner)

    async def delete_education(
        self, user_id: UUID, education_id: str | UUID
    ) -> ProfileWithOwner:
        """Remove an education entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            parsed = parse_id(education_id)
            if not parsed or not profile.remove_education(parsed):
                raise EducationNotFoundError(str(education_id))
            return await self._save(uow, profile, await uow.users.get(user_id))

    async def _require_owner(self, uow: IUnitOfWork, user_id: UUID) -> User:
        owner = await uow.users.get(user_id)
        if not owner:
            raise UserNotFoundError(str(user_id))
        return owner

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _save(
        self, uow: IUnitOfWork, profile: Profile, owner: Optional[User]
    ) -> ProfileWithOwner:
        saved = await uow.profiles.update(profile)
        await uow.commit()
        return ProfileWithOwner(profile=saved, owner=owner)
