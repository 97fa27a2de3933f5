"""앱 휴가 라우터 — 내 휴가 요청 제출/조회.

App Time-off Router — Submit and list my time-off requests.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_user
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.request import TimeOffCreate, TimeOffResponse
from shiftdesk.services.time_off_service import time_off_service

router: APIRouter = APIRouter()


@router.post("", response_model=TimeOffResponse, status_code=201)
async def submit_time_off(
    data: TimeOffCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """휴가 요청 제출 — end_date가 start_date보다 이르면 400 invalid_time_off_dates."""
    request = await time_off_service.submit(db, current_user.id, data)
    await db.commit()
    return time_off_service.build_response(request)


@router.get("", response_model=list[TimeOffResponse])
async def list_my_time_off(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[dict]:
    requests = await time_off_service.list_requests(db, user_id=current_user.id)
    return [time_off_service.build_response(r) for r in requests]
