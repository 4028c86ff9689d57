"""
SQLAlchemy model for swap requests.

A swap request proposes trading the sender's offered skill for the receiver's
requested skill. Status changes are written only by the swap lifecycle engine.

`pending_pair_key` holds the sorted pair of participant ids while the request
is PENDING and is NULL otherwise; its unique constraint is the storage-level
backstop for "one pending request per pair of users".
"""

from uuid import uuid4
from sqlalchemy import Column, String, Enum, ForeignKey, TIMESTAMP, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.db.models.enums import SwapStatusEnum
from app.utils.clock import utcnow


def pending_pair_key(user_a: str, user_b: str) -> str:
    first, second = sorted([str(user_a), str(user_b)])
    return f"{first}:{second}"


class SwapRequest(Base):
    __tablename__ = "swap_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    offered_skill_id = Column(String(36), ForeignKey("skills.id"), nullable=False)
    requested_skill_id = Column(String(36), ForeignKey("skills.id"), nullable=False)
    message = Column(String(500), nullable=True)
    scheduled_date = Column(DateTime, nullable=True)
    status = Column(Enum(SwapStatusEnum), default=SwapStatusEnum.PENDING, nullable=False, index=True)
    pending_pair_key = Column(String(80), unique=True, nullable=True)

    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow)

    sender = relationship("User", foreign_keys=[sender_id], back_populates="sent_requests")
    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_requests")
    offered_skill = relationship("Skill", foreign_keys=[offered_skill_id])
    requested_skill = relationship("Skill", foreign_keys=[requested_skill_id])
    feedback = relationship(
        "Feedback", back_populates="swap_request",
        cascade="all, delete-orphan", order_by="Feedback.created_at.desc()"
    )

    def is_participant(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def other_participant(self, user_id: str) -> str:
        return self.receiver_id if user_id == self.sender_id else self.sender_id
