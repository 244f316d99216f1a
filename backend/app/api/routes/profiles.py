"""Profile Routes - upsert, read and delete profiles, manage experience/education.

Invariants:
    - GET /profile and GET /profile/user/{user_id} are public; everything else
      acts on the authenticated caller's own profile
    - Entry removal by unknown id returns the unchanged profile (200)
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_identity, get_profile_service
from app.core.aggregates import Identity
from app.core.domain_types import EntryId, UserId
from app.schemas.profile import (
    EducationCreate, ExperienceCreate, ProfileResponse, ProfileUpsert,
)
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    return ProfileResponse.from_domain(await service.get_own(identity.user_id))


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    body: ProfileUpsert,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Create the caller's profile or merge the provided fields into it."""
    profile = await service.upsert(identity.user_id, body.to_fields())
    return ProfileResponse.from_domain(profile)


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(
    service: ProfileService = Depends(get_profile_service),
):
    return [ProfileResponse.from_domain(p) for p in await service.list_all()]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
):
    return ProfileResponse.from_domain(
        await service.get_by_user_id(UserId(user_id)),
    )


@router.delete("")
async def delete_profile(
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete the caller's profile (and posts, when cascade is enabled)."""
    await service.delete(identity.user_id)
    return {"message": "Profile deleted"}


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    body: ExperienceCreate,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.add_experience(identity.user_id, body.to_entry())
    return ProfileResponse.from_domain(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def remove_experience(
    exp_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.remove_experience(identity.user_id, EntryId(exp_id))
    return ProfileResponse.from_domain(profile)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    body: EducationCreate,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.add_education(identity.user_id, body.to_entry())
    return ProfileResponse.from_domain(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def remove_education(
    edu_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.remove_education(identity.user_id, EntryId(edu_id))
    return ProfileResponse.from_domain(profile)
