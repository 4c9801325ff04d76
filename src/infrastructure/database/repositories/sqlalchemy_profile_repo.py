"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from core.exceptions import ConcurrentModificationError, ProfileNotFoundError
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Replace the stored profile document."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ProfileNotFoundError(str(profile.user_id))
        if model.version != profile.version:
            raise ConcurrentModificationError(str(profile.id))

        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.status = profile.status
        model.github_username = profile.github_username
        model.skills = list(profile.skills)
        model.social = dict(profile.social)
        model.experience = [self._experience_to_doc(e) for e in profile.experience]
        model.education = [self._education_to_doc(e) for e in profile.education]

        try:
            await self._session.flush()
        except StaleDataError as e:
            raise ConcurrentModificationError(str(profile.id)) from e
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user, if any."""
        model = await self._get_model(user_id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _experience_to_doc(entry: ExperienceEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_doc(doc: dict[str, Any]) -> ExperienceEntry:
        return ExperienceEntry(
            id=UUID(doc["id"]),
            title=doc["title"],
            company=doc["company"],
            location=doc.get("location"),
            from_date=date.fromisoformat(doc["from"]),
            to_date=_date_or_none(doc.get("to")),
            current=doc.get("current", False),
            description=doc.get("description"),
        )

    @staticmethod
    def _education_to_doc(entry: EducationEntry) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_doc(doc: dict[str, Any]) -> EducationEntry:
        return EducationEntry(
            id=UUID(doc["id"]),
            school=doc["school"],
            degree=doc["degree"],
            field_of_study=doc["field_of_study"],
            from_date=date.fromisoformat(doc["from"]),
            to_date=_date_or_none(doc.get("to")),
            current=doc.get("current", False),
            description=doc.get("description"),
        )

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            status=model.status,
            github_username=model.github_username,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=[self._experience_from_doc(d) for d in model.experience or []],
            education=[self._education_from_doc(d) for d in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            bio=entity.bio,
            status=entity.status,
            github_username=entity.github_username,
            skills=list(entity.skills),
            social=dict(entity.social),
            experience=[self._experience_to_doc(e) for e in entity.experience],
            education=[self._education_to_doc(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
