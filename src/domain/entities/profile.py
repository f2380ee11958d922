"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty entries."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: datetime
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: datetime | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime
    id: UUID = field(default_factory=uuid4)
    to_date: datetime | None = None
    current: bool = False
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ProfileOwner:
    """Read-only view of the owning user, joined in at read time."""

    id: UUID
    name: str
    avatar: str


@dataclass
class Profile:
    """Domain entity for a user's professional profile.

    Experience and education are kept newest first: entries are
    prepended when added.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 1
    owner: ProfileOwner | None = None

    def add_experience(self, entry: ExperienceEntry) -> None:
        self.experience.insert(0, entry)

    def remove_experience(self, entry_id: UUID) -> bool:
        """Remove the experience entry with ``entry_id``; False if absent."""
        for index, entry in enumerate(self.experience):
            if entry.id == entry_id:
                del self.experience[index]
                return True
        return False

    def add_education(self, entry: EducationEntry) -> None:
        self.education.insert(0, entry)

    def remove_education(self, entry_id: UUID) -> bool:
        """Remove the education entry with ``entry_id``; False if absent."""
        for index, entry in enumerate(self.education):
            if entry.id == entry_id:
                del self.education[index]
                return True
        return False


@dataclass
class ProfileFields:
    """Sparse set of profile fields submitted by the owner.

    Only truthy values are applied, so omitted or empty fields leave the
    stored profile untouched.
    """

    status: str | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    _SCALARS = ("status", "company", "website", "location", "bio", "githubusername")

    def apply_to(self, profile: Profile) -> None:
        for name in self._SCALARS:
            value = getattr(self, name)
            if value:
                setattr(profile, name, value)

        if self.skills:
            profile.skills = parse_skills(self.skills)

        for network in SOCIAL_NETWORKS:
            link = getattr(self, network)
            if link:
                profile.social[network] = link
