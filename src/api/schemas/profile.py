"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from api.schemas.common import require_text
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    ProfileWithOwner,
    split_skills,
)
from domain.entities.user import User


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the current user's profile.

    ``skills`` is a comma-separated list, e.g. ``"python, sql, go"``.
    """

    status: str = Field(..., max_length=255)
    skills: str = Field(..., max_length=1000)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    github_username: str | None = Field(None, max_length=100)
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return require_text(v, "Status")

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str) -> str:
        v = require_text(v, "Skills")
        if not split_skills(v):
            raise PydanticCustomError("required", "Skills is required")
        return v

    def social_links(self) -> dict[str, str | None]:
        return {
            "youtube": self.youtube,
            "twitter": self.twitter,
            "facebook": self.facebook,
            "linkedin": self.linkedin,
            "instagram": self.instagram,
        }


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    title: str = Field(..., max_length=255)
    company: str = Field(..., max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return require_text(v, "Title")

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        return require_text(v, "Company")

    def to_entity(self) -> ExperienceEntry:
        return ExperienceEntry(
            title=self.title,
            company=self.company,
            location=self.location,
            from_date=self.from_date,
            to_date=None if self.current else self.to_date,
            current=self.current,
            description=self.description,
        )


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str = Field(..., max_length=255)
    degree: str = Field(..., max_length=255)
    field_of_study: str = Field(..., max_length=255)
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("school")
    @classmethod
    def validate_school(cls, v: str) -> str:
        return require_text(v, "School")

    @field_validator("degree")
    @classmethod
    def validate_degree(cls, v: str) -> str:
        return require_text(v, "Degree")

    @field_validator("field_of_study")
    @classmethod
    def validate_field_of_study(cls, v: str) -> str:
        return require_text(v, "Field of study")

    def to_entity(self) -> EducationEntry:
        return EducationEntry(
            school=self.school,
            degree=self.degree,
            field_of_study=self.field_of_study,
            from_date=self.from_date,
            to_date=None if self.current else self.to_date,
            current=self.current,
            description=self.description,
        )


class OwnerSummary(BaseModel):
    """Minimal user representation embedded in a profile."""

    id: UUID
    name: str
    avatar: str | None = None

    @classmethod
    def from_entity(cls, user: User) -> "OwnerSummary":
        return cls(id=user.id, name=user.name, avatar=user.avatar)


class ExperienceResponse(BaseModel):
    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user: OwnerSummary | None
    status: str
    skills: list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: ProfileWithOwner) -> "ProfileResponse":
        profile = item.profile
        return cls(
            id=profile.id,
            user=OwnerSummary.from_entity(item.owner) if item.owner else None,
            status=profile.status,
            skills=profile.skills,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            github_username=profile.github_username,
            social=profile.social,
            experience=[
                ExperienceResponse(
                    id=e.id,
                    title=e.title,
                    company=e.company,
                    location=e.location,
                    from_date=e.from_date,
                    to_date=e.to_date,
                    current=e.current,
                    description=e.description,
                )
                for e in profile.experience
            ],
            education=[
                EducationResponse(
                    id=e.id,
                    school=e.school,
                    degree=e.degree,
                    field_of_study=e.field_of_study,
                    from_date=e.from_date,
                    to_date=e.to_date,
                    current=e.current,
                    description=e.description,
                )
                for e in profile.education
            ],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
