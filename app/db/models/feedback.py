"""
SQLAlchemy model for feedback left after a completed swap.

The giver rates the other participant of the swap (the receiver). Each giver
may leave one feedback per swap.
"""

from uuid import uuid4
from sqlalchemy import (
    Column, String, Integer, ForeignKey, TIMESTAMP, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.utils.clock import utcnow


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("swap_request_id", "giver_id", name="uq_feedback_swap_giver"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    swap_request_id = Column(String(36), ForeignKey("swap_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    giver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=True)

    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    swap_request = relationship("SwapRequest", back_populates="feedback")
    giver = relationship("User", foreign_keys=[giver_id])
    receiver = relationship("User", foreign_keys=[receiver_id])
