"""시프트 관련 Pydantic 요청/응답 스키마 정의.

Shift Pydantic request/response schema definitions.
Shift times arrive as a date plus start/end times of day; the service
combines and validates them against business hours.
"""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, Field


class ShiftCreate(BaseModel):
    """시프트 생성 요청 스키마.

    Shift creation request schema.

    Attributes:
        title: 시프트 이름 (Shift title)
        location: 근무 장소 (Location, optional)
        notes: 메모 (Notes, optional)
        shift_date: 근무일 (Shift date)
        start_time: 시작 시각 (Start time of day)
        end_time: 종료 시각 (End time of day)
        status: "draft" 이외의 값은 published로 저장 (Anything but "draft" is stored as published)
        assigned_user_id: 담당자 UUID, 없으면 미배정 (Assignee, None leaves the shift open)
    """

    title: str
    location: str | None = None
    notes: str | None = None
    shift_date: date
    start_time: time
    end_time: time
    status: str = "published"
    assigned_user_id: UUID | None = None


class ShiftUpdate(ShiftCreate):
    """시프트 수정 요청 스키마 (전체 교체).

    Shift edit request schema. The edit form posts every field, so this is a
    full replacement: an empty ``assigned_user_id`` clears the assignee.
    """


class AssigneeResponse(BaseModel):
    """담당자 요약 — Assignee summary."""

    id: str
    name: str
    email: str


class ShiftResponse(BaseModel):
    """시프트 응답 스키마 — Shift with its current assignee."""

    id: str
    title: str
    location: str | None
    notes: str | None
    start_time: datetime
    end_time: datetime
    status: str
    created_by: str | None
    assignee: AssigneeResponse | None = None
    created_at: datetime | None = None


class WeekSummaryResponse(BaseModel):
    """주간 요약 응답 — Week summary (Monday-start).

    Attributes:
        week_start: 주 시작일, 월요일 (Monday)
        week_end: 주 종료일, 일요일 (Sunday)
        shift_count: 미취소 시프트 수 (Non-cancelled shifts)
        assigned_count: 담당자가 있는 시프트 수 (Shifts with an assignee)
        open_count: 담당자가 없는 시프트 수 (Shifts without an assignee)
        scheduled_hours: 배정된 시프트의 총 시간 (Hours across assigned shifts)
    """

    week_start: date
    week_end: date
    shift_count: int = 0
    assigned_count: int = 0
    open_count: int = 0
    scheduled_hours: float = Field(default=0.0)


# === 직원 스케줄 (Employee schedule) ===

class MyShiftResponse(BaseModel):
    """직원 본인 시프트 — Shift as seen by its assignee."""

    id: str
    title: str
    location: str | None
    notes: str | None
    start_time: datetime
    end_time: datetime
    status: str


class ScheduleSummaryResponse(BaseModel):
    """직원 대시보드 요약.

    Attributes:
        week_start: 이번 주 월요일 (Monday of this week)
        week_end: 이번 주 일요일 (Sunday of this week)
        week_hours: 이번 주 배정 시간 (Assigned hours this week)
        upcoming: 다음 7일 시프트 (Shifts in the next seven days)
        next_shift: 가장 가까운 시프트 (Nearest upcoming shift)
    """

    week_start: date
    week_end: date
    week_hours: float
    upcoming: list[MyShiftResponse]
    next_shift: MyShiftResponse | None = None


class SwapEligibleResponse(BaseModel):
    """교대 요청 가능 배정 — Assignment that can be offered for a swap."""

    assignment_id: str
    shift: MyShiftResponse
