"""Profile service layer with business logic."""

from typing import Any, Callable, List, Optional, Protocol
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    ConcurrentModificationError,
    GithubProfileNotFoundError,
    NoProfileError,
    ProfileNotFoundError,
)
from core.ids import parse_id
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileFields,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class IGitHubClient(Protocol):
    """Source of a user's public repositories."""

    async def get_user_repos(self, username: str) -> Optional[Any]:
        ...


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: IGitHubClient,
    ) -> None:
        self._uow_factory = uow_factory
        self._github = github_client

    async def get_own_profile(self, user_id: UUID) -> Profile:
        """Get the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise NoProfileError()
            return profile

    async def upsert_profile(self, user_id: UUID, fields: ProfileFields) -> Profile:
        """Create the caller's profile, or merge ``fields`` into the existing one."""
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get_by_user(user_id)
            if existing:
                fields.apply_to(existing)
                updated = await uow.profiles.update(existing)
                await uow.commit()
                logger.info("profile_updated", user_id=str(user_id))
                return updated

            profile = Profile(user_id=user_id, status=fields.status or "")
            fields.apply_to(profile)

            try:
                created = await uow.profiles.create(profile)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # Another request created the profile first.
                raise ConcurrentModificationError("Profile", str(user_id)) from exc

            logger.info("profile_created", user_id=str(user_id))
            return created

    async def list_profiles(self) -> List[Profile]:
        """Get all profiles."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def get_profile_by_user(self, user_id: str) -> Profile:
        """Get any user's profile by their id (public)."""
        parsed = parse_id(user_id)
        if parsed is None:
            raise ProfileNotFoundError(user_id)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(parsed)
            if not profile:
                raise ProfileNotFoundError(user_id)
            return profile

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the caller's posts, profile and user record."""
        async with self._uow_factory() as uow:
            deleted_posts = await uow.posts.delete_all_for_user(user_id)
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id), deleted_posts=deleted_posts)

    async def add_experience(self, user_id: UUID, entry: ExperienceEntry) -> Profile:
        """Prepend an experience entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_experience(self, user_id: UUID, entry_id: str) -> Profile:
        """Remove an experience entry; an unknown id leaves the profile as is."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            parsed = parse_id(entry_id)
            if parsed is None or not profile.remove_experience(parsed):
                logger.debug("experience_not_found", entry_id=entry_id)
                return profile

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def add_education(self, user_id: UUID, entry: EducationEntry) -> Profile:
        """Prepend an education entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_education(self, user_id: UUID, entry_id: str) -> Profile:
        """Remove an education entry; an unknown id leaves the profile as is."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            parsed = parse_id(entry_id)
            if parsed is None or not profile.remove_education(parsed):
                logger.debug("education_not_found", entry_id=entry_id)
                return profile

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def fetch_github_repos(self, username: str) -> Any:
        """Get a GitHub user's latest repositories, passed through untouched."""
        repos = await self._github.get_user_repos(username)
        if repos is None:
            raise GithubProfileNotFoundError(username)
        return repos

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise NoProfileError()
        return profile
