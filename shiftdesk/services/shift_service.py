"""시프트 서비스 — 시프트 생성/수정/취소 비즈니스 로직.

Shift Service — Business logic for creating, editing, cancelling and
restoring shifts, plus the manager-facing read models.

Every input check runs before the first write, so a rejected request
leaves no partial shift behind. Assignee changes go through the
assignment reconciler.
"""

import logging
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.config import settings
from shiftdesk.models.shift import (
    ASSIGNMENT_ASSIGNED,
    SHIFT_CANCELLED,
    SHIFT_DRAFT,
    SHIFT_PUBLISHED,
    Shift,
)
from shiftdesk.models.user import User
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.schemas.shift import ShiftCreate, ShiftUpdate
from shiftdesk.services.assignment_service import assignment_service
from shiftdesk.utils.exceptions import NotFoundError
from shiftdesk.utils.validation import validate_required, validate_shift_window

logger = logging.getLogger(__name__)


class ShiftStatusAction(str, Enum):
    """시프트 상태 전환 — cancel → cancelled, restore → published."""

    CANCEL = "cancel"
    RESTORE = "restore"


def week_bounds(day: date) -> tuple[date, date]:
    """월요일 시작 주의 (시작일, 종료일) — Monday-start week containing ``day``."""
    start: date = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def current_assignee(shift: Shift) -> User | None:
    """로드된 배정 중 assigned 담당자 — Assignee among eagerly loaded assignments."""
    for assignment in shift.assignments:
        if assignment.status == ASSIGNMENT_ASSIGNED:
            return assignment.user
    return None


class ShiftService:
    """시프트 서비스.

    Shift service handling creation, edits, cancellation and listings.
    """

    @staticmethod
    def _create_status(value: str | None) -> str:
        # 생성 시 draft 외에는 모두 published
        return SHIFT_DRAFT if value == SHIFT_DRAFT else SHIFT_PUBLISHED

    @staticmethod
    def _edit_status(value: str | None) -> str:
        if value in (SHIFT_DRAFT, SHIFT_CANCELLED):
            return value
        return SHIFT_PUBLISHED

    async def _validated_fields(
        self,
        db: AsyncSession,
        data: ShiftCreate,
    ) -> dict[str, Any]:
        """입력 전체를 검증하고 저장할 값을 반환합니다.

        Validate every input and return the column values to write.
        Order: required text, time window, business hours, assignee.
        """
        required: dict[str, str] = validate_required(title=data.title)
        start_dt, end_dt = validate_shift_window(
            data.shift_date, data.start_time, data.end_time, settings.CLOSING_TIME_MINUTES
        )
        await assignment_service.resolve_assignee(db, data.assigned_user_id)
        return {
            "title": required["title"],
            "location": (data.location or "").strip() or None,
            "notes": (data.notes or "").strip() or None,
            "start_time": start_dt,
            "end_time": end_dt,
        }

    async def create_shift(
        self,
        db: AsyncSession,
        data: ShiftCreate,
        created_by: UUID,
    ) -> Shift:
        """새 시프트를 생성하고 담당자를 배정합니다.

        Create a shift and, when an assignee is given, reconcile its
        assignment in the same transaction.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 시프트 생성 데이터 (Shift creation data)
            created_by: 작성자 UUID (Creating manager)

        Returns:
            Shift: 담당자가 로드된 시프트 (Shift with assignments loaded)

        Raises:
            MissingFieldsError: 제목이 비었을 때 (Blank title)
            InvalidTimeError: 종료 <= 시작 (end <= start)
            AfterHoursError: 영업 시간 외 (Outside business hours)
            InvalidAssigneeError: 담당자가 비활성/없음 (Inactive or unknown assignee)
        """
        values: dict[str, Any] = await self._validated_fields(db, data)
        shift: Shift = await shift_repository.create(
            db,
            {**values, "status": self._create_status(data.status), "created_by": created_by},
        )

        if data.assigned_user_id is not None:
            await assignment_service.reconcile(db, shift.id, data.assigned_user_id, actor_id=created_by)

        await audit_repository.record(
            db, "shift_created", created_by, {"shift_id": shift.id, "assigned_user_id": data.assigned_user_id}
        )
        return await self.get_shift(db, shift.id)

    async def update_shift(
        self,
        db: AsyncSession,
        shift_id: UUID,
        data: ShiftUpdate,
        actor_id: UUID | None = None,
    ) -> Shift:
        """시프트를 수정하고 담당자를 재조정합니다.

        Edit a shift (full replacement) and reconcile its assignee.

        Raises:
            NotFoundError: 시프트가 없을 때 (When the shift does not exist)
            InvalidAssigneeError: 담당자가 비활성/없음 (Inactive or unknown assignee)
        """
        shift: Shift | None = await shift_repository.lock(db, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")

        values: dict[str, Any] = await self._validated_fields(db, data)
        for column, value in values.items():
            setattr(shift, column, value)
        shift.status = self._edit_status(data.status)
        await db.flush()

        await assignment_service.reconcile(db, shift.id, data.assigned_user_id, actor_id=actor_id)
        await audit_repository.record(db, "shift_updated", actor_id, {"shift_id": shift.id})
        return await self.get_shift(db, shift.id)

    async def set_shift_status(
        self,
        db: AsyncSession,
        shift_id: UUID,
        action: ShiftStatusAction,
        actor_id: UUID | None = None,
    ) -> Shift:
        """시프트를 취소하거나 복원합니다.

        Cancel or restore a shift. Assignments are kept either way, so a
        restored shift returns with its previous assignee.
        """
        shift: Shift | None = await shift_repository.lock(db, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")

        shift.status = SHIFT_CANCELLED if action == ShiftStatusAction.CANCEL else SHIFT_PUBLISHED
        await db.flush()
        await audit_repository.record(
            db, f"shift_{shift.status}", actor_id, {"shift_id": shift.id}
        )
        logger.info("Shift %s is now %s", shift.id, shift.status)
        return await self.get_shift(db, shift.id)

    async def get_shift(self, db: AsyncSession, shift_id: UUID) -> Shift:
        shift: Shift | None = await shift_repository.get_with_assignments(db, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        return shift

    async def list_shifts(
        self,
        db: AsyncSession,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
    ) -> Sequence[Shift]:
        """기간(date_to 포함) 내 시프트 — Shifts starting between two dates, inclusive."""
        start: datetime | None = datetime.combine(date_from, datetime.min.time()) if date_from else None
        end: datetime | None = (
            datetime.combine(date_to + timedelta(days=1), datetime.min.time()) if date_to else None
        )
        return await shift_repository.list_in_range(db, start, end, status=status)

    async def list_upcoming(self, db: AsyncSession, now: datetime, limit: int = 50) -> Sequence[Shift]:
        return await shift_repository.list_upcoming(db, now, limit)

    async def week_summary(self, db: AsyncSession, day: date) -> dict[str, Any]:
        """주간 요약 — 배정/미배정 시프트 수와 배정된 근무 시간.

        Week summary for the Monday-start week containing ``day``: counts of
        assigned and open non-cancelled shifts and the hours across assigned
        ones.
        """
        week_start, week_end = week_bounds(day)
        shifts: Sequence[Shift] = await shift_repository.list_in_range(
            db,
            datetime.combine(week_start, datetime.min.time()),
            datetime.combine(week_end + timedelta(days=1), datetime.min.time()),
            include_cancelled=False,
        )
        assigned: list[Shift] = [s for s in shifts if current_assignee(s) is not None]
        hours: float = sum((s.end_time - s.start_time).total_seconds() for s in assigned) / 3600
        return {
            "week_start": week_start,
            "week_end": week_end,
            "shift_count": len(shifts),
            "assigned_count": len(assigned),
            "open_count": len(shifts) - len(assigned),
            "scheduled_hours": round(hours, 2),
        }

    def build_response(self, shift: Shift) -> dict[str, Any]:
        """시프트 응답 딕셔너리 — Build a response dict; assignments must be loaded."""
        assignee: User | None = current_assignee(shift)
        return {
            "id": str(shift.id),
            "title": shift.title,
            "location": shift.location,
            "notes": shift.notes,
            "start_time": shift.start_time,
            "end_time": shift.end_time,
            "status": shift.status,
            "created_by": str(shift.created_by) if shift.created_by else None,
            "assignee": (
                {"id": str(assignee.id), "name": assignee.name, "email": assignee.email}
                if assignee is not None
                else None
            ),
            "created_at": shift.created_at,
        }


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()
