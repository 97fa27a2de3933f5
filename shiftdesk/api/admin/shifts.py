"""관리자 시프트 라우터 — 시프트 관리 API.

Admin Shift Router — Create, edit, cancel and restore shifts, plus the
upcoming list and the week summary. Manager or admin only.
"""

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_now, require_manager
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate, WeekSummaryResponse
from shiftdesk.services.shift_service import ShiftStatusAction, shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
) -> list[dict]:
    """시프트 목록을 기간/상태로 조회합니다.

    List shifts starting between ``date_from`` and ``date_to`` (inclusive)
    with their current assignee.
    """
    shifts = await shift_service.list_shifts(db, date_from=date_from, date_to=date_to, status=status)
    return [shift_service.build_response(s) for s in shifts]


@router.get("/upcoming", response_model=list[ShiftResponse])
async def list_upcoming_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    now: Annotated[datetime, Depends(get_now)],
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[dict]:
    """다가오는 시프트 — Upcoming non-cancelled shifts with assignees."""
    shifts = await shift_service.list_upcoming(db, now, limit)
    return [shift_service.build_response(s) for s in shifts]


@router.get("/week-summary", response_model=WeekSummaryResponse)
async def get_week_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    now: Annotated[datetime, Depends(get_now)],
    day: Annotated[date | None, Query()] = None,
) -> dict:
    """주간 요약 — Week summary for the Monday-start week containing ``day`` (default today)."""
    return await shift_service.week_summary(db, day or now.date())


@router.post("", response_model=ShiftResponse, status_code=201)
async def create_shift(
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """새 시프트를 생성하고 선택적으로 담당자를 배정합니다.

    Create a shift and optionally assign it in the same transaction.

    Args:
        data: 시프트 생성 데이터 (Shift creation data)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 매니저 이상 사용자 (Authenticated manager or admin)

    Returns:
        dict: 생성된 시프트 (Created shift with assignee)
    """
    shift = await shift_service.create_shift(db, data, created_by=current_user.id)
    await db.commit()
    return shift_service.build_response(shift)


@router.put("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """시프트를 수정하고 담당자를 재조정합니다.

    Edit a shift. ``assigned_user_id: null`` clears the assignee.
    """
    shift = await shift_service.update_shift(db, shift_id, data, actor_id=current_user.id)
    await db.commit()
    return shift_service.build_response(shift)


@router.post("/{shift_id}/cancel", response_model=ShiftResponse)
async def cancel_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """시프트 취소 — Cancel a shift (assignments are kept)."""
    shift = await shift_service.set_shift_status(db, shift_id, ShiftStatusAction.CANCEL, actor_id=current_user.id)
    await db.commit()
    return shift_service.build_response(shift)


@router.post("/{shift_id}/restore", response_model=ShiftResponse)
async def restore_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """시프트 복원 — Restore a cancelled shift as published."""
    shift = await shift_service.set_shift_status(db, shift_id, ShiftStatusAction.RESTORE, actor_id=current_user.id)
    await db.commit()
    return shift_service.build_response(shift)
