"""Pydantic schemas and validation rules for profiles."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.validation import Rule, not_empty

PROFILE_RULES = (
    Rule("status", "Status is required", not_empty),
    Rule("skills", "Skills is required", not_empty),
)

EXPERIENCE_RULES = (
    Rule("title", "Title is required", not_empty),
    Rule("company", "Company is required", not_empty),
    Rule("from", "From date is required", not_empty),
)

EDUCATION_RULES = (
    Rule("school", "School is required", not_empty),
    Rule("degree", "Degree is required", not_empty),
    Rule("fieldofstudy", "Field of study is required", not_empty),
    Rule("from", "From date is required", not_empty),
)


class ProfileRequest(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated string; social links are flat fields.
    """

    status: str | None = None
    skills: str | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceRequest(BaseModel):
    """Schema for adding an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    company: str
    location: str | None = None
    from_date: datetime = Field(alias="from")
    to: datetime | None = None
    current: bool = False
    description: str | None = None


class EducationRequest(BaseModel):
    """Schema for adding an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(alias="from")
    to: datetime | None = None
    current: bool = False
    description: str | None = None


class ProfileUserResponse(BaseModel):
    """Owner fields joined into a profile."""

    id: UUID
    name: str
    avatar: str


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: datetime = Field(alias="from")
    to: datetime | None = None
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(alias="from")
    to: datetime | None = None
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for a profile document."""

    id: UUID
    user: ProfileUserResponse | None = None
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    date: datetime
