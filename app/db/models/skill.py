"""
SQLAlchemy models for the skill catalog and the skills each user holds.

Skill names are unique regardless of case; a user may hold the same skill
once as OFFERED and once as WANTED.
"""

from uuid import uuid4
from sqlalchemy import (
    Column, String, Boolean, Integer, Enum, ForeignKey, TIMESTAMP,
    Index, UniqueConstraint, CheckConstraint, func
)
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import SkillTypeEnum
from app.utils.clock import utcnow


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(50), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    description = Column(String(200), nullable=True)
    # True when submitted by a user rather than seeded
    is_custom = Column(Boolean, default=False, nullable=False)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    user_skills = relationship("UserSkill", back_populates="skill", cascade="all, delete-orphan")


Index("uq_skills_name_lower", func.lower(Skill.__table__.c.name), unique=True)


class UserSkill(Base):
    __tablename__ = "user_skills"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", "skill_type", name="uq_user_skill_type"),
        CheckConstraint("level BETWEEN 1 AND 5", name="level_range"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_type = Column(Enum(SkillTypeEnum), nullable=False)
    level = Column(Integer, default=1, nullable=False)
    created_at = Column(TIMESTAMP, default=utcnow)

    user = relationship("User", back_populates="user_skills")
    skill = relationship("Skill", back_populates="user_skills")
