"""직원 스케줄 서비스 — 직원용 조회 모델.

Schedule Service — Employee-facing read models: own shifts in a range,
the weekly summary (hours this Monday-start week, next seven days) and the
assignments eligible for a swap request.
"""

from datetime import date, datetime, timedelta
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.shift import Assignment, Shift
from shiftdesk.repositories.assignment_repository import assignment_repository
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.services.shift_service import week_bounds


def _day_start(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def shift_hours(shifts: Sequence[Shift]) -> float:
    """시프트 목록의 총 시간 — Total hours across shifts."""
    return round(sum((s.end_time - s.start_time).total_seconds() for s in shifts) / 3600, 2)


class ScheduleService:
    """직원 스케줄 서비스 — Employee schedule read models."""

    async def my_shifts(
        self,
        db: AsyncSession,
        user_id: UUID,
        date_from: date,
        date_to: date,
    ) -> Sequence[Shift]:
        """기간(date_to 포함) 내 본인 배정 시프트 — Own assigned shifts, inclusive range."""
        return await shift_repository.list_for_user(
            db, user_id, _day_start(date_from), _day_start(date_to + timedelta(days=1))
        )

    async def summary(self, db: AsyncSession, user_id: UUID, now: datetime) -> dict[str, Any]:
        """직원 대시보드 요약.

        Employee dashboard summary.

        Returns:
            dict: week_start, week_end, week_hours, upcoming (다음 7일 시프트),
                  next_shift (가장 가까운 시프트 또는 None)
        """
        week_start, week_end = week_bounds(now.date())
        week: Sequence[Shift] = await shift_repository.list_for_user(
            db, user_id, _day_start(week_start), _day_start(week_end + timedelta(days=1))
        )
        upcoming: Sequence[Shift] = await shift_repository.list_for_user(
            db, user_id, now, now + timedelta(days=7)
        )
        return {
            "week_start": week_start,
            "week_end": week_end,
            "week_hours": shift_hours(week),
            "upcoming": upcoming,
            "next_shift": upcoming[0] if upcoming else None,
        }

    async def swap_eligible(self, db: AsyncSession, user_id: UUID, now: datetime) -> Sequence[Assignment]:
        return await assignment_repository.list_swap_eligible(db, user_id, now)

    @staticmethod
    def build_shift(shift: Shift) -> dict[str, Any]:
        return {
            "id": str(shift.id),
            "title": shift.title,
            "location": shift.location,
            "notes": shift.notes,
            "start_time": shift.start_time,
            "end_time": shift.end_time,
            "status": shift.status,
        }

    def build_eligible(self, assignment: Assignment) -> dict[str, Any]:
        """교대 가능 배정 응답 — shift must be loaded on the assignment."""
        return {"assignment_id": str(assignment.id), "shift": self.build_shift(assignment.shift)}


# 싱글턴 인스턴스 — Singleton instance
schedule_service: ScheduleService = ScheduleService()
