"""
Swap request lifecycle.

Owns creation of swap requests, every status change, hard deletion and the
notifications each of those triggers.

    PENDING ──accept (receiver)──▶ ACCEPTED ──complete (either)──▶ COMPLETED
       │                              │
       ├──reject (receiver)──▶ REJECTED
       └──cancel (sender)────▶ CANCELLED ◀──cancel (sender)──┘

Guards are checked before anything is written. The status change is
committed before the notification is queued, and a failure to notify never
undoes or fails the change.

Two creates racing for the same pair of users can both pass the
duplicate-pending check; the unique `pending_pair_key` column rejects the
second commit, which is reported as DuplicatePendingRequest.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    DuplicatePendingRequest,
    Forbidden,
    InvalidScheduledDate,
    InvalidTransition,
    NotFound,
    ReceiverNotFound,
    ReceiverPrivate,
    ReceiverUnavailable,
    SelfSwap,
    SkillNotOffered,
)
from app.db.models import SwapRequest, User
from app.db.models.enums import (
    NotificationTypeEnum,
    ProfileVisibilityEnum,
    SwapStatusEnum,
    TERMINAL_SWAP_STATUSES,
)
from app.db.models.swap_request import pending_pair_key
from app.db.repositories import SwapRepository, UserRepository
from app.models.common import dump
from app.models.swap import SwapRequestOut
from app.services.notifications import Notifier
from app.utils.clock import utcnow
from app.utils.error_handler import safe_call

logger = logging.getLogger(__name__)

SENDER = "sender"
RECEIVER = "receiver"
PARTICIPANT = "participant"
OTHER = "other"


@dataclass(frozen=True)
class Transition:
    sources: Tuple[SwapStatusEnum, ...]
    actor: str
    notify: str
    notification_type: NotificationTypeEnum
    notification_message: str
    forbidden_message: str


TRANSITIONS: Dict[SwapStatusEnum, Transition] = {
    SwapStatusEnum.ACCEPTED: Transition(
        sources=(SwapStatusEnum.PENDING,),
        actor=RECEIVER,
        notify=SENDER,
        notification_type=NotificationTypeEnum.SWAP_ACCEPTED,
        notification_message="Your swap request was accepted!",
        forbidden_message="Only the receiver can accept or reject a swap request",
    ),
    SwapStatusEnum.REJECTED: Transition(
        sources=(SwapStatusEnum.PENDING,),
        actor=RECEIVER,
        notify=SENDER,
        notification_type=NotificationTypeEnum.SWAP_REJECTED,
        notification_message="Your swap request was rejected",
        forbidden_message="Only the receiver can accept or reject a swap request",
    ),
    SwapStatusEnum.CANCELLED: Transition(
        sources=(SwapStatusEnum.PENDING, SwapStatusEnum.ACCEPTED),
        actor=SENDER,
        notify=RECEIVER,
        notification_type=NotificationTypeEnum.SWAP_CANCELLED,
        notification_message="A swap request was cancelled",
        forbidden_message="Only the sender can cancel a swap request",
    ),
    SwapStatusEnum.COMPLETED: Transition(
        sources=(SwapStatusEnum.ACCEPTED,),
        actor=PARTICIPANT,
        notify=OTHER,
        notification_type=NotificationTypeEnum.SWAP_COMPLETED,
        notification_message="A swap has been marked as completed",
        forbidden_message="Only participants can mark a swap as completed",
    ),
}


def _actor_allowed(swap: SwapRequest, actor_id: str, role: str) -> bool:
    if role == SENDER:
        return actor_id == swap.sender_id
    if role == RECEIVER:
        return actor_id == swap.receiver_id
    return swap.is_participant(actor_id)


def check_transition(
    swap: SwapRequest,
    actor_id: str,
    target: SwapStatusEnum,
    scheduled_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Transition:
    """Validate a status change against the guard table.

    Raises:
        InvalidTransition: `target` is not reachable from the current status.
        Forbidden: the actor does not hold the role the transition requires.
        InvalidScheduledDate: accepting with a date that is not in the future.
    """
    rule = TRANSITIONS.get(target)
    if rule is None:
        raise InvalidTransition(swap.status.value, target.value)
    if not _actor_allowed(swap, actor_id, rule.actor):
        raise Forbidden(rule.forbidden_message)
    if swap.status not in rule.sources:
        raise InvalidTransition(swap.status.value, target.value)
    if target == SwapStatusEnum.ACCEPTED and scheduled_date is not None:
        if scheduled_date <= (now or utcnow()):
            raise InvalidScheduledDate()
    return rule


class SwapLifecycleEngine:
    """Sole writer of SwapRequest status."""

    def __init__(
        self,
        swaps: SwapRepository,
        users: UserRepository,
        notifier: Notifier,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.swaps = swaps
        self.users = users
        self.notifier = notifier
        self.clock = clock

    # --- creation ---

    def create(
        self,
        sender: User,
        receiver_id: str,
        offered_skill_id: str,
        requested_skill_id: str,
        message: Optional[str] = None,
        scheduled_date: Optional[datetime] = None,
    ) -> SwapRequest:
        if sender.id == receiver_id:
            raise SelfSwap()

        receiver = self.users.get(receiver_id)
        if receiver is None:
            raise ReceiverNotFound()
        if not receiver.is_available:
            raise ReceiverUnavailable()
        if receiver.profile_visibility == ProfileVisibilityEnum.PRIVATE:
            raise ReceiverPrivate()

        if not self.users.offers_skill(sender.id, offered_skill_id):
            raise SkillNotOffered("sender")
        if not self.users.offers_skill(receiver.id, requested_skill_id):
            raise SkillNotOffered("receiver")

        if self.swaps.find_pending_between(sender.id, receiver.id) is not None:
            raise DuplicatePendingRequest()

        now = self.clock()
        swap = SwapRequest(
            sender_id=sender.id,
            receiver_id=receiver.id,
            offered_skill_id=offered_skill_id,
            requested_skill_id=requested_skill_id,
            message=message,
            scheduled_date=scheduled_date,
            status=SwapStatusEnum.PENDING,
            pending_pair_key=pending_pair_key(sender.id, receiver.id),
            created_at=now,
            updated_at=now,
        )
        try:
            self.swaps.save(swap)
        except IntegrityError:
            self.swaps.rollback()
            if self.swaps.find_pending_between(sender.id, receiver.id) is not None:
                raise DuplicatePendingRequest()
            raise

        logger.info("Swap request %s created: %s -> %s", swap.id, sender.id, receiver.id)
        created = self.swaps.get_for_participant(swap.id, sender.id)
        self._notify(
            receiver.id,
            "New swap request received",
            NotificationTypeEnum.NEW_SWAP_REQUEST,
            created,
        )
        return created

    # --- reads ---

    def get_for_participant(self, swap_id: str, user_id: str) -> SwapRequest:
        swap = self.swaps.get_for_participant(swap_id, user_id)
        if swap is None:
            raise NotFound("Swap request not found")
        return swap

    def list_for_user(
        self,
        user_id: str,
        status: Optional[SwapStatusEnum] = None,
        direction: str = "all",
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[SwapRequest], int]:
        return self.swaps.list_for_user(user_id, status=status, direction=direction, limit=limit, offset=offset)

    # --- status changes ---

    def transition(
        self,
        swap_id: str,
        actor_id: str,
        target: SwapStatusEnum,
        scheduled_date: Optional[datetime] = None,
        reason: Optional[str] = None,
    ) -> SwapRequest:
        swap = self.get_for_participant(swap_id, actor_id)
        now = self.clock()
        rule = check_transition(swap, actor_id, target, scheduled_date=scheduled_date, now=now)

        previous = swap.status
        swap.status = target
        swap.updated_at = now
        swap.pending_pair_key = None
        if target == SwapStatusEnum.ACCEPTED and scheduled_date is not None:
            swap.scheduled_date = scheduled_date
        self.swaps.commit()

        logger.info(
            "Swap request %s: %s -> %s by %s%s",
            swap.id, previous.value, target.value, actor_id,
            f" (reason: {reason})" if reason else "",
        )

        self._notify(
            self._notification_target(swap, actor_id, rule.notify),
            rule.notification_message,
            rule.notification_type,
            swap,
        )
        return swap

    def cancel(self, swap_id: str, sender_id: str, reason: Optional[str] = None) -> SwapRequest:
        """Sender-initiated cancellation; same rule as the CANCELLED transition."""
        return self.transition(swap_id, sender_id, SwapStatusEnum.CANCELLED, reason=reason)

    def delete(self, swap_id: str, actor_id: str) -> None:
        """Permanently remove a finished swap request and its feedback."""
        swap = self.swaps.get_for_participant(swap_id, actor_id)
        if swap is None or swap.status not in TERMINAL_SWAP_STATUSES:
            raise NotFound("Swap request not found or cannot be deleted")
        self.swaps.delete(swap)
        self.swaps.commit()
        logger.info("Swap request %s deleted by %s", swap_id, actor_id)

    # --- notifications ---

    @staticmethod
    def _notification_target(swap: SwapRequest, actor_id: str, notify: str) -> str:
        if notify == SENDER:
            return swap.sender_id
        if notify == RECEIVER:
            return swap.receiver_id
        return swap.other_participant(actor_id)

    @safe_call()
    def _notify(
        self,
        user_id: str,
        message: str,
        notification_type: NotificationTypeEnum,
        swap: SwapRequest,
    ) -> None:
        self.notifier.publish(
            user_id,
            message,
            {
                "type": notification_type.value,
                "swapRequest": dump(SwapRequestOut.model_validate(swap)),
            },
        )
