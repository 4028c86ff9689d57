"""
SQLAlchemy model for the time slots a user is usually free for swaps.
Purely descriptive; nothing in the swap lifecycle reads it.
"""

from uuid import uuid4
from sqlalchemy import Column, String, Enum, ForeignKey, ARRAY, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import AvailabilityTypeEnum


class UserAvailability(Base):
    __tablename__ = "user_availabilities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    availability_type = Column(Enum(AvailabilityTypeEnum), nullable=False)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)  # HH:MM
    # SQLite (used by tests) has no ARRAY; store as JSON there
    days_of_week = Column(ARRAY(String).with_variant(JSON, "sqlite"), default=list)

    user = relationship("User", back_populates="availabilities")
