from .user import User
from .skill import Skill, UserSkill
from .user_availability import UserAvailability
from .swap_request import SwapRequest
from .feedback import Feedback
from .enums import (
    ProfileVisibilityEnum,
    SkillTypeEnum,
    SwapStatusEnum,
    AvailabilityTypeEnum,
    NotificationTypeEnum,
)
