"""
Feedback left by swap participants once a swap is COMPLETED.

Each participant may rate the other once per swap. The giver can edit or
remove their feedback for a limited window after posting it.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.exceptions import (
    DuplicateFeedback,
    FeedbackWindowExpired,
    Forbidden,
    NotFound,
    SwapNotCompleted,
    ValidationError,
)
from app.db.models import Feedback, User
from app.db.models.enums import ProfileVisibilityEnum, SwapStatusEnum
from app.db.repositories import FeedbackRepository, SwapRepository, UserRepository
from app.utils.clock import utcnow

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _check_rating(rating: int) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


class FeedbackService:
    def __init__(
        self,
        feedback: FeedbackRepository,
        swaps: SwapRepository,
        users: UserRepository,
        clock: Callable[[], datetime] = utcnow,
        edit_window_hours: Optional[int] = None,
    ):
        self.feedback = feedback
        self.swaps = swaps
        self.users = users
        self.clock = clock
        self.edit_window_hours = (
            edit_window_hours if edit_window_hours is not None else settings.FEEDBACK_EDIT_WINDOW_HOURS
        )

    def create(self, giver: User, swap_request_id: str, rating: int, comment: Optional[str] = None) -> Feedback:
        _check_rating(rating)
        swap = self.swaps.get_for_participant(swap_request_id, giver.id)
        if swap is None:
            raise NotFound("Swap request not found")
        if swap.status != SwapStatusEnum.COMPLETED:
            raise SwapNotCompleted()
        if self.feedback.find_by_giver(swap.id, giver.id) is not None:
            raise DuplicateFeedback()

        now = self.clock()
        record = Feedback(
            swap_request_id=swap.id,
            giver_id=giver.id,
            receiver_id=swap.other_participant(giver.id),
            rating=rating,
            comment=comment,
            created_at=now,
            updated_at=now,
        )
        try:
            self.feedback.save(record)
        except IntegrityError:
            self.feedback.rollback()
            if self.feedback.find_by_giver(swap.id, giver.id) is not None:
                raise DuplicateFeedback()
            raise

        logger.info("Feedback %s left on swap %s by %s", record.id, swap.id, giver.id)
        return record

    def _owned_and_editable(self, feedback_id: str, actor_id: str, action: str) -> Feedback:
        record = self.feedback.get(feedback_id)
        if record is None:
            raise NotFound("Feedback not found")
        if record.giver_id != actor_id:
            raise Forbidden("Only the author can change this feedback")
        if self.clock() - record.created_at > timedelta(hours=self.edit_window_hours):
            raise FeedbackWindowExpired(action, self.edit_window_hours)
        return record

    def update(self, feedback_id: str, actor_id: str, rating: int, comment: Optional[str] = None) -> Feedback:
        _check_rating(rating)
        record = self._owned_and_editable(feedback_id, actor_id, "updated")
        record.rating = rating
        record.comment = comment
        record.updated_at = self.clock()
        self.feedback.commit()
        return record

    def delete(self, feedback_id: str, actor_id: str) -> None:
        record = self._owned_and_editable(feedback_id, actor_id, "deleted")
        self.feedback.delete(record)
        self.feedback.commit()
        logger.info("Feedback %s deleted by %s", feedback_id, actor_id)

    def aggregate(self, user_id: str) -> Tuple[float, int]:
        """Average rating and count of feedback received; (0, 0) when none."""
        average, count = self.feedback.rating_stats(user_id)
        if not count:
            return 0.0, 0
        return round(float(average), 2), count

    def list_for_user(
        self, viewer_id: str, user_id: str, limit: int = 10, offset: int = 0
    ) -> Tuple[List[Feedback], int, Tuple[float, int]]:
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        if user.profile_visibility == ProfileVisibilityEnum.PRIVATE and user.id != viewer_id:
            raise Forbidden("This profile is private")
        rows, total = self.feedback.list_received(user.id, limit=limit, offset=offset)
        return rows, total, self.aggregate(user.id)

    def list_for_swap(self, viewer_id: str, swap_request_id: str) -> List[Feedback]:
        swap = self.swaps.get_for_participant(swap_request_id, viewer_id)
        if swap is None:
            raise NotFound("Swap request not found")
        return self.feedback.list_for_swap(swap.id)

    def list_mine(
        self, user_id: str, direction: str = "all", limit: int = 10, offset: int = 0
    ) -> Tuple[List[Feedback], int]:
        return self.feedback.list_for_user(user_id, direction=direction, limit=limit, offset=offset)
