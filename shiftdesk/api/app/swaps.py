"""앱 교대 라우터 — 내 교대 요청 제출/조회.

App Swap Router — File and list my shift swap requests.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_user, get_now
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.request import SwapCreate, SwapResponse
from shiftdesk.services.swap_service import swap_service

router: APIRouter = APIRouter()


@router.post("", response_model=SwapResponse, status_code=201)
async def submit_swap(
    data: SwapCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    now: Annotated[datetime, Depends(get_now)],
) -> dict:
    """교대 요청 제출.

    File a swap request for one of my upcoming assignments.

    Args:
        data: 배정 UUID와 대상 동료 UUID (Assignment and target coworker)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)
        now: 요청 시각 (Request time)

    Returns:
        dict: 생성된 교대 요청 (Created swap request)
    """
    swap = await swap_service.submit_swap(
        db, current_user.id, data.assignment_id, data.requested_user_id, now
    )
    await db.commit()
    return swap_service.build_response(swap)


@router.get("", response_model=list[SwapResponse])
async def list_my_swaps(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[dict]:
    swaps = await swap_service.list_requests(db, requested_by_id=current_user.id)
    return [swap_service.build_response(s) for s in swaps]
