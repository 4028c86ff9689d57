from pydantic import Field
from typing import Optional
from datetime import datetime

from app.models.common import CamelModel, RequestModel

class SkillBrief(CamelModel):
    id: str
    name: str
    category: str
    description: Optional[str] = None

class SkillOut(SkillBrief):
    is_custom: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    user_count: int = 0

class SkillCreate(RequestModel):
    name: str = Field(..., min_length=2, max_length=50)
    category: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
