"""앱 스케줄 라우터 — 내 시프트, 주간 요약, 교대 가능 배정, 동료 목록.

App Schedule Router — The employee's own schedule views.
"""

from datetime import date, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_user, get_now
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.shift import MyShiftResponse, ScheduleSummaryResponse, SwapEligibleResponse
from shiftdesk.schemas.staff import CoworkerResponse
from shiftdesk.services.schedule_service import schedule_service
from shiftdesk.services.staff_service import staff_service

router: APIRouter = APIRouter()


@router.get("/schedule", response_model=list[MyShiftResponse])
async def get_my_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    now: Annotated[datetime, Depends(get_now)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> list[dict]:
    """내 시프트 목록 (기본: 오늘부터 4주).

    My assigned, non-cancelled shifts between two dates (inclusive).
    Defaults to today through four weeks out.
    """
    start: date = date_from or now.date()
    end: date = date_to or start + timedelta(days=27)
    shifts = await schedule_service.my_shifts(db, current_user.id, start, end)
    return [schedule_service.build_shift(s) for s in shifts]


@router.get("/schedule/summary", response_model=ScheduleSummaryResponse)
async def get_my_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    now: Annotated[datetime, Depends(get_now)],
) -> dict:
    """이번 주 근무 시간과 다음 7일 시프트 — Week hours and the next seven days."""
    summary: dict = await schedule_service.summary(db, current_user.id, now)
    summary["upcoming"] = [schedule_service.build_shift(s) for s in summary["upcoming"]]
    if summary["next_shift"] is not None:
        summary["next_shift"] = schedule_service.build_shift(summary["next_shift"])
    return summary


@router.get("/schedule/swap-eligible", response_model=list[SwapEligibleResponse])
async def get_swap_eligible(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    now: Annotated[datetime, Depends(get_now)],
) -> list[dict]:
    """교대 요청 가능한 내 배정 — My upcoming assignments that can be offered."""
    assignments = await schedule_service.swap_eligible(db, current_user.id, now)
    return [schedule_service.build_eligible(a) for a in assignments]


@router.get("/coworkers", response_model=list[CoworkerResponse])
async def list_coworkers(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[CoworkerResponse]:
    """교대 대상 후보 — Active coworkers other than me."""
    users = await staff_service.list_coworkers(db, current_user.id)
    return [staff_service.to_coworker(u) for u in users]
