"""
SQLAlchemy model for the User entity.

A user holds profile details, visibility and availability flags, and owns
skills, availability slots, sent/received swap requests and feedback.
Credentials are issued and verified upstream; only the opaque hash is kept.
"""

from uuid import uuid4
from sqlalchemy import Column, String, Boolean, Enum, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import ProfileVisibilityEnum
from app.utils.clock import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    location = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    profile_visibility = Column(Enum(ProfileVisibilityEnum), default=ProfileVisibilityEnum.PUBLIC, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    # URL returned by the upload sink, or None
    profile_photo = Column(String(500), nullable=True)

    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    user_skills = relationship("UserSkill", back_populates="user", cascade="all, delete-orphan")
    availabilities = relationship("UserAvailability", back_populates="user", cascade="all, delete-orphan")
    sent_requests = relationship("SwapRequest", foreign_keys="SwapRequest.sender_id", back_populates="sender")
    received_requests = relationship("SwapRequest", foreign_keys="SwapRequest.receiver_id", back_populates="receiver")
