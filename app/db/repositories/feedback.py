from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload

from app.db.models import Feedback, SwapRequest
from app.db.repositories.base import BaseRepository


def _with_relations(query):
    return query.options(
        selectinload(Feedback.giver),
        selectinload(Feedback.receiver),
        selectinload(Feedback.swap_request).selectinload(SwapRequest.offered_skill),
        selectinload(Feedback.swap_request).selectinload(SwapRequest.requested_skill),
    )


class FeedbackRepository(BaseRepository):
    model = Feedback

    def find_by_giver(self, swap_request_id: str, giver_id: str) -> Optional[Feedback]:
        return (
            self.db.query(Feedback)
            .filter(Feedback.swap_request_id == swap_request_id, Feedback.giver_id == giver_id)
            .first()
        )

    def list_received(self, user_id: str, limit: int = 10, offset: int = 0) -> Tuple[List[Feedback], int]:
        query = self.db.query(Feedback).filter(Feedback.receiver_id == user_id)
        total = query.count()
        rows = (
            _with_relations(query)
            .order_by(Feedback.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def list_for_swap(self, swap_request_id: str) -> List[Feedback]:
        return (
            _with_relations(self.db.query(Feedback))
            .filter(Feedback.swap_request_id == swap_request_id)
            .order_by(Feedback.created_at.desc())
            .all()
        )

    def list_for_user(
        self, user_id: str, direction: str = "all", limit: int = 10, offset: int = 0
    ) -> Tuple[List[Feedback], int]:
        query = self.db.query(Feedback)
        if direction == "given":
            query = query.filter(Feedback.giver_id == user_id)
        elif direction == "received":
            query = query.filter(Feedback.receiver_id == user_id)
        else:
            query = query.filter(or_(Feedback.giver_id == user_id, Feedback.receiver_id == user_id))
        total = query.count()
        rows = (
            _with_relations(query)
            .order_by(Feedback.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def rating_stats(self, user_id: str) -> Tuple[Optional[float], int]:
        average, count = (
            self.db.query(func.avg(Feedback.rating), func.count(Feedback.id))
            .filter(Feedback.receiver_id == user_id)
            .one()
        )
        return average, count
