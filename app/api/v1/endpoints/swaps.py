"""
Swap request endpoints: create, list, read, change status, cancel and delete.
Every route acts on behalf of the caller identified by X-User-ID.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, SwapEngineDep
from app.core.config import settings
from app.db.models.enums import SwapStatusEnum
from app.models.common import Pagination, api_response, dump
from app.models.swap import SwapRequestCreate, SwapRequestOut, SwapStatusUpdate

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_swap_request(payload: SwapRequestCreate, user: CurrentUser, engine: SwapEngineDep):
    swap = engine.create(
        sender=user,
        receiver_id=payload.receiver_id,
        offered_skill_id=payload.offered_skill_id,
        requested_skill_id=payload.requested_skill_id,
        message=payload.message,
        scheduled_date=payload.scheduled_date,
    )
    return api_response(
        {"swapRequest": dump(SwapRequestOut.model_validate(swap))},
        "Swap request sent successfully",
    )


@router.get("")
async def list_swap_requests(
    user: CurrentUser,
    engine: SwapEngineDep,
    status_filter: Optional[SwapStatusEnum] = Query(None, alias="status"),
    type: Literal["all", "sent", "received"] = "all",
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
):
    swaps, total = engine.list_for_user(user.id, status=status_filter, direction=type, limit=limit, offset=offset)
    return api_response({
        "swapRequests": [dump(SwapRequestOut.model_validate(swap)) for swap in swaps],
        "pagination": dump(Pagination.build(total, limit, offset, len(swaps))),
    })


@router.get("/{swap_id}")
async def get_swap_request(swap_id: str, user: CurrentUser, engine: SwapEngineDep):
    swap = engine.get_for_participant(swap_id, user.id)
    return api_response({"swapRequest": dump(SwapRequestOut.model_validate(swap))})


@router.put("/{swap_id}/status")
async def update_swap_status(swap_id: str, payload: SwapStatusUpdate, user: CurrentUser, engine: SwapEngineDep):
    target = SwapStatusEnum(payload.status)
    swap = engine.transition(
        swap_id,
        user.id,
        target,
        scheduled_date=payload.scheduled_date,
        reason=payload.cancel_reason,
    )
    return api_response(
        {"swapRequest": dump(SwapRequestOut.model_validate(swap))},
        f"Swap request {target.value.lower()} successfully",
    )


@router.delete("/{swap_id}")
async def cancel_swap_request(swap_id: str, user: CurrentUser, engine: SwapEngineDep):
    engine.cancel(swap_id, user.id)
    return api_response(message="Swap request cancelled successfully")


@router.delete("/{swap_id}/delete")
async def delete_swap_request(swap_id: str, user: CurrentUser, engine: SwapEngineDep):
    engine.delete(swap_id, user.id)
    return api_response(message="Swap request deleted successfully")
