"""Profile API routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    EDUCATION_RULES,
    EXPERIENCE_RULES,
    PROFILE_RULES,
    EducationRequest,
    EducationResponse,
    ExperienceRequest,
    ExperienceResponse,
    ProfileRequest,
    ProfileResponse,
    ProfileUserResponse,
)
from api.validation import ValidatedBody
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileFields,
)
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={400: {"model": ErrorResponse, "description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile with their name and avatar."""
    profile = await service.get_own_profile(user.id)
    return _build_profile_response(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
    responses={400: {"model": ErrorResponse, "description": "Validation failed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    user: CurrentUser,
    body: Annotated[ProfileRequest, Depends(ValidatedBody(ProfileRequest, PROFILE_RULES))],
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the profile, or overwrite only the fields present in the body."""
    profile = await service.upsert_profile(user.id, ProfileFields(**body.model_dump()))
    return _build_profile_response(profile)


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
    """Get every profile (public)."""
    profiles = await service.list_profiles()
    return [_build_profile_response(p) for p in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={400: {"model": ErrorResponse, "description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get any user's profile (public)."""
    profile = await service.get_profile_by_user(user_id)
    return _build_profile_response(profile)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, profile and user record."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={400: {"model": ErrorResponse, "description": "Validation failed or no profile"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    user: CurrentUser,
    body: Annotated[ExperienceRequest, Depends(ValidatedBody(ExperienceRequest, EXPERIENCE_RULES))],
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend an experience entry to the caller's profile."""
    entry = ExperienceEntry(
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to,
        current=body.current,
        description=body.description,
    )
    profile = await service.add_experience(user.id, entry)
    return _build_profile_response(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry by ID; unknown IDs are ignored."""
    profile = await service.remove_experience(user.id, exp_id)
    return _build_profile_response(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={400: {"model": ErrorResponse, "description": "Validation failed or no profile"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    user: CurrentUser,
    body: Annotated[EducationRequest, Depends(ValidatedBody(EducationRequest, EDUCATION_RULES))],
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend an education entry to the caller's profile."""
    entry = EducationEntry(
        school=body.school,
        degree=body.degree,
        fieldofstudy=body.fieldofstudy,
        from_date=body.from_date,
        to_date=body.to,
        current=body.current,
        description=body.description,
    )
    profile = await service.add_education(user.id, entry)
    return _build_profile_response(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry by ID; unknown IDs are ignored."""
    profile = await service.remove_education(user.id, edu_id)
    return _build_profile_response(profile)


@router.get(
    "/github/{username}",
    summary="Get a user's GitHub repositories",
    responses={404: {"model": ErrorResponse, "description": "No Github profile found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> Any:
    """Proxy the five oldest-created repositories from the GitHub API."""
    return await service.fetch_github_repos(username)


def _build_profile_response(profile: Profile) -> ProfileResponse:
    """Convert a Profile entity into its API representation."""
    owner = None
    if profile.owner is not None:
        owner = ProfileUserResponse(
            id=profile.owner.id,
            name=profile.owner.name,
            avatar=profile.owner.avatar,
        )
    return ProfileResponse(
        id=profile.id,
        user=owner,
        status=profile.status,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=profile.skills,
        social=profile.social,
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to=e.to_date,
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
                fieldofstudy=e.fieldofstudy,
                from_date=e.from_date,
                to=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        date=profile.created_at,
    )
