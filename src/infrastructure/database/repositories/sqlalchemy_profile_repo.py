"""SQLAlchemy implementation of Profile repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import ConcurrentModificationError
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileOwner,
)
from infrastructure.database.models import ProfileModel
from infrastructure.database.repositories._serialization import (
    dump_datetime,
    dump_uuid,
    load_datetime,
    load_uuid,
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user, with owner name and avatar."""
        stmt = (
            select(ProfileModel)
            .options(selectinload(ProfileModel.user))
            .where(ProfileModel.user_id == user_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = (
            select(ProfileModel)
            .options(selectinload(ProfileModel.user))
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(
            id=profile.id,
            user_id=profile.user_id,
            created_at=profile.created_at,
            version=profile.version,
            **self._document_fields(profile),
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model, attribute_names=["user"])
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Compare-and-swap the profile document on its version."""
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == profile.id,
                ProfileModel.version == profile.version,
            )
            .values(version=profile.version + 1, **self._document_fields(profile))
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("Profile", str(profile.id))

        await self._session.flush()
        profile.version += 1
        return profile

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _document_fields(self, profile: Profile) -> dict[str, Any]:
        """Column values for everything except identity and bookkeeping."""
        return {
            "company": profile.company,
            "website": profile.website,
            "location": profile.location,
            "status": profile.status,
            "skills": list(profile.skills),
            "bio": profile.bio,
            "githubusername": profile.githubusername,
            "social": dict(profile.social),
            "experience": [self._dump_experience(e) for e in profile.experience],
            "education": [self._dump_education(e) for e in profile.education],
        }

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        owner = None
        if model.user is not None:
            owner = ProfileOwner(
                id=model.user.id,
                name=model.user.name,
                avatar=model.user.avatar,
            )
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            status=model.status,
            skills=list(model.skills or []),
            bio=model.bio,
            githubusername=model.githubusername,
            social=dict(model.social or {}),
            experience=[self._load_experience(e) for e in model.experience or []],
            education=[self._load_education(e) for e in model.education or []],
            created_at=model.created_at,
            version=model.version,
            owner=owner,
        )

    @staticmethod
    def _dump_experience(entry: ExperienceEntry) -> dict[str, Any]:
        return {
            "id": dump_uuid(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": dump_datetime(entry.from_date),
            "to": dump_datetime(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _load_experience(data: dict[str, Any]) -> ExperienceEntry:
        return ExperienceEntry(
            id=load_uuid(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=load_datetime(data["from"]),  # type: ignore[arg-type]
            to_date=load_datetime(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _dump_education(entry: EducationEntry) -> dict[str, Any]:
        return {
            "id": dump_uuid(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "fieldofstudy": entry.fieldofstudy,
            "from": dump_datetime(entry.from_date),
            "to": dump_datetime(entry.to_date),
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _load_education(data: dict[str, Any]) -> EducationEntry:
        return EducationEntry(
            id=load_uuid(data["id"]),
            school=data["school"],
            degree=data["degree"],
            fieldofstudy=data["fieldofstudy"],
            from_date=load_datetime(data["from"]),  # type: ignore[arg-type]
            to_date=load_datetime(data.get("to")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
