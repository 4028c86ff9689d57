"""
User endpoints: own profile, public profiles, search, held skills and
availability slots.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, UserProfileServiceDep
from app.core.config import settings
from app.db.models.enums import SkillTypeEnum
from app.models.common import Pagination, api_response, dump
from app.models.user import (
    AvailabilityCreate,
    AvailabilityOut,
    ProfileUpdate,
    PublicUserOut,
    UserProfileOut,
    UserSearchOut,
    UserSkillCreate,
    UserSkillOut,
)

router = APIRouter()


@router.get("/profile")
async def get_profile(user: CurrentUser, service: UserProfileServiceDep):
    profile = service.get_own_profile(user.id)
    return api_response({"user": dump(UserProfileOut.model_validate(profile))})


@router.put("/profile")
async def update_profile(payload: ProfileUpdate, user: CurrentUser, service: UserProfileServiceDep):
    profile = service.update_profile(user, payload.model_dump(exclude_unset=True))
    return api_response({"user": dump(UserProfileOut.model_validate(profile))}, "Profile updated successfully")


@router.get("/search")
async def search_users(
    user: CurrentUser,
    service: UserProfileServiceDep,
    skill: Optional[str] = Query(None, max_length=100),
    skill_type: Optional[SkillTypeEnum] = Query(None, alias="skillType"),
    location: Optional[str] = Query(None, max_length=100),
    available: Optional[bool] = None,
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
):
    users, total = service.search_users(
        skill=skill,
        skill_type=skill_type,
        location=location,
        available_only=bool(available),
        limit=limit,
        offset=offset,
    )
    results = []
    for found in users:
        out = UserSearchOut.model_validate(found)
        if skill_type:
            out.user_skills = [us for us in out.user_skills if us.skill_type == skill_type]
        results.append(dump(out))
    return api_response({
        "users": results,
        "pagination": dump(Pagination.build(total, limit, offset, len(results))),
    })


@router.post("/skills", status_code=status.HTTP_201_CREATED)
async def add_user_skill(payload: UserSkillCreate, user: CurrentUser, service: UserProfileServiceDep):
    user_skill = service.add_user_skill(user, payload.skill_id, payload.skill_type, payload.level)
    return api_response({"userSkill": dump(UserSkillOut.model_validate(user_skill))}, "Skill added successfully")


@router.delete("/skills/{user_skill_id}")
async def remove_user_skill(user_skill_id: str, user: CurrentUser, service: UserProfileServiceDep):
    service.remove_user_skill(user, user_skill_id)
    return api_response(message="Skill removed successfully")


@router.post("/availability", status_code=status.HTTP_201_CREATED)
async def add_availability(payload: AvailabilityCreate, user: CurrentUser, service: UserProfileServiceDep):
    availability = service.add_availability(
        user,
        payload.availability_type,
        start_time=payload.start_time,
        end_time=payload.end_time,
        days_of_week=payload.days_of_week,
    )
    return api_response(
        {"availability": dump(AvailabilityOut.model_validate(availability))},
        "Availability added successfully",
    )


@router.delete("/availability/{availability_id}")
async def remove_availability(availability_id: str, user: CurrentUser, service: UserProfileServiceDep):
    service.remove_availability(user, availability_id)
    return api_response(message="Availability removed successfully")


@router.get("/{user_id}")
async def get_user(user_id: str, user: CurrentUser, service: UserProfileServiceDep):
    profile = service.get_public_profile(user.id, user_id)
    return api_response({"user": dump(PublicUserOut.model_validate(profile))})
