"""
Feedback endpoints: rate the other participant of a completed swap, browse
ratings, and edit or remove your own feedback while the edit window is open.
"""

from typing import Literal

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, FeedbackServiceDep
from app.models.common import Pagination, api_response, dump
from app.models.feedback import FeedbackCreate, FeedbackOut, FeedbackUpdate, RatingStats

router = APIRouter()


def _feedback_list(rows):
    return [dump(FeedbackOut.model_validate(row)) for row in rows]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_feedback(payload: FeedbackCreate, user: CurrentUser, service: FeedbackServiceDep):
    feedback = service.create(user, payload.swap_request_id, payload.rating, payload.comment)
    return api_response(
        {"feedback": dump(FeedbackOut.model_validate(feedback))},
        "Feedback submitted successfully",
    )


@router.get("/user/{user_id}")
async def get_user_feedback(
    user_id: str,
    user: CurrentUser,
    service: FeedbackServiceDep,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    rows, total, (average, count) = service.list_for_user(user.id, user_id, limit=limit, offset=offset)
    return api_response({
        "feedback": _feedback_list(rows),
        "pagination": dump(Pagination.build(total, limit, offset, len(rows))),
        "stats": dump(RatingStats(average_rating=average, total_reviews=count)),
    })


@router.get("/swap/{swap_request_id}")
async def get_swap_feedback(swap_request_id: str, user: CurrentUser, service: FeedbackServiceDep):
    rows = service.list_for_swap(user.id, swap_request_id)
    return api_response({"feedback": _feedback_list(rows)})


@router.get("/my")
async def get_my_feedback(
    user: CurrentUser,
    service: FeedbackServiceDep,
    type: Literal["all", "given", "received"] = "all",
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    rows, total = service.list_mine(user.id, direction=type, limit=limit, offset=offset)
    return api_response({
        "feedback": _feedback_list(rows),
        "pagination": dump(Pagination.build(total, limit, offset, len(rows))),
    })


@router.put("/{feedback_id}")
async def update_feedback(feedback_id: str, payload: FeedbackUpdate, user: CurrentUser, service: FeedbackServiceDep):
    feedback = service.update(feedback_id, user.id, payload.rating, payload.comment)
    return api_response(
        {"feedback": dump(FeedbackOut.model_validate(feedback))},
        "Feedback updated successfully",
    )


@router.delete("/{feedback_id}")
async def delete_feedback(feedback_id: str, user: CurrentUser, service: FeedbackServiceDep):
    service.delete(feedback_id, user.id)
    return api_response(message="Feedback deleted successfully")
