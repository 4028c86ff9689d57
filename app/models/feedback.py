from pydantic import Field
from typing import Optional
from datetime import datetime

from app.models.common import CamelModel, RequestModel
from app.models.skill import SkillBrief
from app.models.user import UserBrief


class FeedbackSwapBrief(CamelModel):
    id: str
    offered_skill: SkillBrief
    requested_skill: SkillBrief

class FeedbackOut(CamelModel):
    id: str
    swap_request_id: str
    giver_id: str
    receiver_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    giver: UserBrief
    receiver: UserBrief
    swap_request: Optional[FeedbackSwapBrief] = None

class RatingStats(CamelModel):
    average_rating: float
    total_reviews: int


class FeedbackCreate(RequestModel):
    swap_request_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)

class FeedbackUpdate(RequestModel):
    # Accepted for clients that resend the create body; the swap never changes
    swap_request_id: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)
