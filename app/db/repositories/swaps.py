from typing import List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import selectinload

from app.db.models import SwapRequest, Feedback
from app.db.models.enums import SwapStatusEnum
from app.db.repositories.base import BaseRepository


def _with_relations(query):
    return query.options(
        selectinload(SwapRequest.sender),
        selectinload(SwapRequest.receiver),
        selectinload(SwapRequest.offered_skill),
        selectinload(SwapRequest.requested_skill),
        selectinload(SwapRequest.feedback).selectinload(Feedback.giver),
    )


class SwapRepository(BaseRepository):
    model = SwapRequest

    def get_for_participant(self, swap_id: str, user_id: str) -> Optional[SwapRequest]:
        """Fetch a swap only if `user_id` is its sender or receiver."""
        return (
            _with_relations(self.db.query(SwapRequest))
            .filter(
                SwapRequest.id == swap_id,
                or_(SwapRequest.sender_id == user_id, SwapRequest.receiver_id == user_id),
            )
            .first()
        )

    def find_pending_between(self, user_a: str, user_b: str) -> Optional[SwapRequest]:
        return (
            self.db.query(SwapRequest)
            .filter(
                SwapRequest.status == SwapStatusEnum.PENDING,
                or_(
                    and_(SwapRequest.sender_id == user_a, SwapRequest.receiver_id == user_b),
                    and_(SwapRequest.sender_id == user_b, SwapRequest.receiver_id == user_a),
                ),
            )
            .first()
        )

    def list_for_user(
        self,
        user_id: str,
        status: Optional[SwapStatusEnum] = None,
        direction: str = "all",
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[SwapRequest], int]:
        query = self.db.query(SwapRequest)
        if direction == "sent":
            query = query.filter(SwapRequest.sender_id == user_id)
        elif direction == "received":
            query = query.filter(SwapRequest.receiver_id == user_id)
        else:
            query = query.filter(or_(SwapRequest.sender_id == user_id, SwapRequest.receiver_id == user_id))
        if status:
            query = query.filter(SwapRequest.status == status)

        total = query.count()
        swaps = (
            _with_relations(query)
            .order_by(SwapRequest.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return swaps, total
