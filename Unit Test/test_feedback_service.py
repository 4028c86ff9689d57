from datetime import datetime, timedelta

import pytest

from app.core.exceptions import (
    DuplicateFeedback,
    FeedbackWindowExpired,
    Forbidden,
    NotFound,
    SwapNotCompleted,
    ValidationError,
)
from app.db.models import Feedback
from app.db.models.enums import ProfileVisibilityEnum, SwapStatusEnum
from app.db.repositories import FeedbackRepository, SwapRepository, UserRepository
from app.services.feedback_service import FeedbackService

POSTED_AT = datetime(2026, 3, 1, 12, 0, 0)


class FrozenClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def completed_swap(swap_engine, barter_pair):
    swap = swap_engine.create(
        barter_pair["sender"],
        barter_pair["receiver"].id,
        barter_pair["offered"].id,
        barter_pair["requested"].id,
    )
    swap_engine.transition(swap.id, barter_pair["receiver"].id, SwapStatusEnum.ACCEPTED)
    swap_engine.transition(swap.id, barter_pair["sender"].id, SwapStatusEnum.COMPLETED)
    return swap


@pytest.fixture
def clock():
    return FrozenClock(POSTED_AT)


@pytest.fixture
def frozen_feedback_service(db, clock):
    return FeedbackService(
        FeedbackRepository(db), SwapRepository(db), UserRepository(db), clock=clock, edit_window_hours=24
    )


def test_both_participants_rate_each_other_once(feedback_service, completed_swap, barter_pair):
    sender, receiver = barter_pair["sender"], barter_pair["receiver"]

    given = feedback_service.create(sender, completed_swap.id, 5, "Great mentor")
    returned = feedback_service.create(receiver, completed_swap.id, 4)

    assert given.receiver_id == receiver.id
    assert returned.receiver_id == sender.id

    with pytest.raises(DuplicateFeedback):
        feedback_service.create(sender, completed_swap.id, 3)

    assert feedback_service.aggregate(receiver.id) == (5.0, 1)
    assert len(feedback_service.list_for_swap(sender.id, completed_swap.id)) == 2


def test_feedback_requires_completed_swap(feedback_service, swap_engine, barter_pair):
    swap = swap_engine.create(
        barter_pair["sender"],
        barter_pair["receiver"].id,
        barter_pair["offered"].id,
        barter_pair["requested"].id,
    )
    swap_engine.transition(swap.id, barter_pair["receiver"].id, SwapStatusEnum.ACCEPTED)

    with pytest.raises(SwapNotCompleted):
        feedback_service.create(barter_pair["sender"], swap.id, 5)


def test_outsider_cannot_leave_feedback(feedback_service, completed_swap, make_user):
    with pytest.raises(NotFound):
        feedback_service.create(make_user("Outsider"), completed_swap.id, 1)


def test_database_rejects_second_feedback_from_same_giver(db, completed_swap, barter_pair):
    FeedbackService(FeedbackRepository(db), SwapRepository(db), UserRepository(db)).create(
        barter_pair["sender"], completed_swap.id, 5
    )

    class BlindFeedbackRepository(FeedbackRepository):
        """Misses the existing row on the first lookup only."""

        calls = 0

        def find_by_giver(self, swap_request_id, giver_id):
            self.calls += 1
            if self.calls == 1:
                return None
            return super().find_by_giver(swap_request_id, giver_id)

    service = FeedbackService(BlindFeedbackRepository(db), SwapRepository(db), UserRepository(db))
    with pytest.raises(DuplicateFeedback):
        service.create(barter_pair["sender"], completed_swap.id, 2)
    assert db.query(Feedback).count() == 1


@pytest.mark.parametrize(
    "elapsed, allowed",
    [
        (timedelta(hours=1), True),
        (timedelta(hours=24), True),
        (timedelta(hours=24, seconds=1), False),
    ],
)
def test_edit_window(frozen_feedback_service, clock, completed_swap, barter_pair, elapsed, allowed):
    record = frozen_feedback_service.create(barter_pair["sender"], completed_swap.id, 2, "meh")
    clock.now = POSTED_AT + elapsed

    if allowed:
        updated = frozen_feedback_service.update(record.id, barter_pair["sender"].id, 4, "better on reflection")
        assert updated.rating == 4
        assert updated.updated_at == POSTED_AT + elapsed
    else:
        with pytest.raises(FeedbackWindowExpired):
            frozen_feedback_service.update(record.id, barter_pair["sender"].id, 4)
        with pytest.raises(FeedbackWindowExpired):
            frozen_feedback_service.delete(record.id, barter_pair["sender"].id)


def test_delete_within_window(frozen_feedback_service, clock, completed_swap, barter_pair, db):
    record = frozen_feedback_service.create(barter_pair["sender"], completed_swap.id, 2)
    clock.now = POSTED_AT + timedelta(hours=3)

    frozen_feedback_service.delete(record.id, barter_pair["sender"].id)
    assert db.query(Feedback).count() == 0


def test_only_author_changes_feedback(frozen_feedback_service, completed_swap, barter_pair):
    record = frozen_feedback_service.create(barter_pair["sender"], completed_swap.id, 2)

    with pytest.raises(Forbidden):
        frozen_feedback_service.update(record.id, barter_pair["receiver"].id, 1)
    with pytest.raises(Forbidden):
        frozen_feedback_service.delete(record.id, barter_pair["receiver"].id)
    with pytest.raises(NotFound):
        frozen_feedback_service.delete("no-such-feedback", barter_pair["sender"].id)


def test_aggregate_without_feedback(feedback_service, make_user):
    assert feedback_service.aggregate(make_user("Newcomer").id) == (0.0, 0)


def test_aggregate_averages_ratings(db, feedback_service, make_user, completed_swap, barter_pair):
    receiver = barter_pair["receiver"]
    other = make_user("Second")
    db.add(Feedback(
        swap_request_id=completed_swap.id,
        giver_id=other.id,
        receiver_id=receiver.id,
        rating=4,
    ))
    db.commit()
    feedback_service.create(barter_pair["sender"], completed_swap.id, 5)

    assert feedback_service.aggregate(receiver.id) == (4.5, 2)


def test_private_profile_feedback_is_hidden_from_others(db, feedback_service, completed_swap, barter_pair):
    receiver = barter_pair["receiver"]
    feedback_service.create(barter_pair["sender"], completed_swap.id, 5)
    receiver.profile_visibility = ProfileVisibilityEnum.PRIVATE
    db.commit()

    with pytest.raises(Forbidden):
        feedback_service.list_for_user(barter_pair["sender"].id, receiver.id)

    rows, total, stats = feedback_service.list_for_user(receiver.id, receiver.id)
    assert total == 1
    assert rows[0].rating == 5
    assert stats == (5.0, 1)


def test_my_feedback_by_direction(feedback_service, completed_swap, barter_pair):
    sender, receiver = barter_pair["sender"], barter_pair["receiver"]
    feedback_service.create(sender, completed_swap.id, 5)
    feedback_service.create(receiver, completed_swap.id, 3)

    given, _ = feedback_service.list_mine(sender.id, direction="given")
    received, _ = feedback_service.list_mine(sender.id, direction="received")
    everything, total = feedback_service.list_mine(sender.id)

    assert [f.rating for f in given] == [5]
    assert [f.rating for f in received] == [3]
    assert total == 2 and len(everything) == 2


@pytest.mark.parametrize("rating", [0, 6, 9])
def test_rating_outside_range_is_a_validation_error(feedback_service, completed_swap, barter_pair, db, rating):
    with pytest.raises(ValidationError) as excinfo:
        feedback_service.create(barter_pair["sender"], completed_swap.id, rating)

    assert not isinstance(excinfo.value, DuplicateFeedback)
    assert excinfo.value.status_code == 400
    assert db.query(Feedback).count() == 0


def test_update_rejects_rating_outside_range(frozen_feedback_service, completed_swap, barter_pair):
    record = frozen_feedback_service.create(barter_pair["sender"], completed_swap.id, 3)

    with pytest.raises(ValidationError):
        frozen_feedback_service.update(record.id, barter_pair["sender"].id, 7)
    assert record.rating == 3
