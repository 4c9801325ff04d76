"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.entities.user import User

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def split_skills(raw: str) -> list[str]:
    """Turn ``"python, sql,go"`` into ``["python", "sql", "go"]``."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = field(default_factory=dict)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 1

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def add_experience(self, entry: ExperienceEntry) -> None:
        self.experience.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_experience(self, entry_id: UUID) -> bool:
        remaining = [e for e in self.experience if e.id != entry_id]
        if len(remaining) == len(self.experience):
            return False
        self.experience = remaining
        self.updated_at = datetime.utcnow()
        return True

    def add_education(self, entry: EducationEntry) -> None:
        self.education.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_education(self, entry_id: UUID) -> bool:
        remaining = [e for e in self.education if e.id != entry_id]
        if len(remaining) == len(self.education):
            return False
        self.education = remaining
        self.updated_at = datetime.utcnow()
        return True


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's public data."""

    profile: Profile
    owner: Optional[User]
