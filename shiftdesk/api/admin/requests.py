"""관리자 요청 검토 라우터 — 휴가/교대 요청 검토 API.

Admin Request Router — Review queues for time-off and shift swap
requests. A second review of the same request returns 404
``request_not_found``.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_now, require_manager
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.request import ReviewRequest, SwapResponse, TimeOffResponse
from shiftdesk.services.swap_service import swap_service
from shiftdesk.services.time_off_service import time_off_service

router: APIRouter = APIRouter()


@router.get("/time-off", response_model=list[TimeOffResponse])
async def list_time_off_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    status: Annotated[str | None, Query()] = "pending",
) -> list[dict]:
    """휴가 요청 목록 (기본: 대기 중) — Time-off requests, pending by default."""
    requests = await time_off_service.list_requests(db, status=status)
    return [time_off_service.build_response(r) for r in requests]


@router.post("/time-off/{request_id}/review", response_model=TimeOffResponse)
async def review_time_off_request(
    request_id: UUID,
    data: ReviewRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    now: Annotated[datetime, Depends(get_now)],
) -> dict:
    """휴가 요청 승인/거절 — Approve or deny a pending time-off request."""
    request = await time_off_service.review(db, request_id, data.decision, current_user.id, now)
    await db.commit()
    return time_off_service.build_response(request)


@router.get("/swaps", response_model=list[SwapResponse])
async def list_swap_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    status: Annotated[str | None, Query()] = "pending",
) -> list[dict]:
    """교대 요청 목록 (기본: 대기 중) — Swap requests, pending by default."""
    swaps = await swap_service.list_requests(db, status=status)
    return [swap_service.build_response(s) for s in swaps]


@router.post("/swaps/{request_id}/review", response_model=SwapResponse)
async def review_swap_request(
    request_id: UUID,
    data: ReviewRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """교대 요청 승인/거절.

    Approve or deny a pending swap request. Approval moves the assignment to
    the requested coworker, or fails with ``assignment_gone`` /
    ``swap_conflict`` when the shift changed since the request was filed.
    """
    swap = await swap_service.review_swap(db, request_id, data.decision, reviewer_id=current_user.id)
    await db.commit()
    return swap_service.build_response(swap)
