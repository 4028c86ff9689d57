from pydantic import Field
from typing import Optional, List, Literal
from datetime import datetime

from app.db.models.enums import ProfileVisibilityEnum, SkillTypeEnum, AvailabilityTypeEnum
from app.models.common import CamelModel, RequestModel
from app.models.skill import SkillBrief

HH_MM_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class UserBrief(CamelModel):
    id: str
    first_name: str
    last_name: str
    location: Optional[str] = None
    profile_photo: Optional[str] = None

class UserSkillOut(CamelModel):
    id: str
    skill_type: SkillTypeEnum
    level: int
    skill: SkillBrief

class AvailabilityOut(CamelModel):
    id: str
    availability_type: AvailabilityTypeEnum
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    days_of_week: List[str] = []

class PublicUserOut(UserBrief):
    bio: Optional[str] = None
    profile_visibility: ProfileVisibilityEnum
    is_available: bool
    created_at: Optional[datetime] = None
    user_skills: List[UserSkillOut] = []
    availabilities: List[AvailabilityOut] = []

class UserProfileOut(PublicUserOut):
    email: str
    updated_at: Optional[datetime] = None

class UserSearchOut(UserBrief):
    bio: Optional[str] = None
    is_available: bool
    created_at: Optional[datetime] = None
    user_skills: List[UserSkillOut] = []


class ProfileUpdate(RequestModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    location: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    profile_visibility: Optional[ProfileVisibilityEnum] = None
    is_available: Optional[bool] = None

class UserSkillCreate(RequestModel):
    skill_id: str
    skill_type: SkillTypeEnum
    level: int = Field(1, ge=1, le=5)

class AvailabilityCreate(RequestModel):
    availability_type: AvailabilityTypeEnum
    start_time: Optional[str] = Field(None, pattern=HH_MM_PATTERN)
    end_time: Optional[str] = Field(None, pattern=HH_MM_PATTERN)
    days_of_week: Optional[List[Weekday]] = None
