"""
Enum types shared by the ORM models and the request/response schemas.
"""

import enum

class ProfileVisibilityEnum(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"

class SkillTypeEnum(str, enum.Enum):
    OFFERED = "OFFERED"
    WANTED = "WANTED"

class SwapStatusEnum(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

class AvailabilityTypeEnum(str, enum.Enum):
    WEEKDAYS = "WEEKDAYS"
    WEEKENDS = "WEEKENDS"
    EVENINGS = "EVENINGS"
    MORNINGS = "MORNINGS"
    FLEXIBLE = "FLEXIBLE"

class NotificationTypeEnum(str, enum.Enum):
    NEW_SWAP_REQUEST = "NEW_SWAP_REQUEST"
    SWAP_ACCEPTED = "SWAP_ACCEPTED"
    SWAP_REJECTED = "SWAP_REJECTED"
    SWAP_CANCELLED = "SWAP_CANCELLED"
    SWAP_COMPLETED = "SWAP_COMPLETED"


# Statuses a swap request can be hard-deleted from
TERMINAL_SWAP_STATUSES = (
    SwapStatusEnum.COMPLETED,
    SwapStatusEnum.CANCELLED,
    SwapStatusEnum.REJECTED,
)
