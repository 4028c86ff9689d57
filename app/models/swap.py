from pydantic import Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime

from app.db.models.enums import SwapStatusEnum
from app.models.common import CamelModel, RequestModel
from app.models.skill import SkillBrief
from app.models.user import UserBrief
from app.utils.clock import to_naive_utc


class GiverBrief(CamelModel):
    id: str
    first_name: str
    last_name: str

class SwapFeedbackBrief(CamelModel):
    id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    giver: GiverBrief

class SwapRequestOut(CamelModel):
    id: str
    sender_id: str
    receiver_id: str
    offered_skill_id: str
    requested_skill_id: str
    sender: UserBrief
    receiver: UserBrief
    offered_skill: SkillBrief
    requested_skill: SkillBrief
    message: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    status: SwapStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    feedback: List[SwapFeedbackBrief] = []


class SwapRequestCreate(RequestModel):
    receiver_id: str
    offered_skill_id: str
    requested_skill_id: str
    message: Optional[str] = Field(None, max_length=500)
    scheduled_date: Optional[datetime] = None

    @field_validator("scheduled_date")
    @classmethod
    def _naive_utc(cls, value):
        return to_naive_utc(value) if value is not None else value

class SwapStatusUpdate(RequestModel):
    status: Literal["ACCEPTED", "REJECTED", "CANCELLED", "COMPLETED"]
    scheduled_date: Optional[datetime] = None
    cancel_reason: Optional[str] = Field(None, max_length=500)

    @field_validator("scheduled_date")
    @classmethod
    def _naive_utc(cls, value):
        return to_naive_utc(value) if value is not None else value
