"""휴가 및 교대 요청 관련 Pydantic 스키마 정의.

Time-off and shift swap request Pydantic schema definitions.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel


class TimeOffCreate(BaseModel):
    """휴가 요청 생성 스키마.

    Attributes:
        start_date: 시작일 (First day off)
        end_date: 종료일, 시작일 이후 (Last day off, on or after start_date)
        reason: 사유 (Reason, optional)
    """

    start_date: date
    end_date: date
    reason: str | None = None


class TimeOffResponse(BaseModel):
    id: str
    user_id: str
    user_name: str | None = None
    start_date: date
    end_date: date
    reason: str | None
    status: str
    reviewed_by: str | None
    reviewed_at: datetime | None
    created_at: datetime | None = None


class SwapCreate(BaseModel):
    """교대 요청 생성 스키마.

    Attributes:
        assignment_id: 넘겨줄 본인 배정 UUID (Own assignment to hand over)
        requested_user_id: 교대 대상 직원 UUID (Coworker who would take it)
    """

    assignment_id: UUID
    requested_user_id: UUID


class SwapResponse(BaseModel):
    id: str
    original_assignment_id: str | None
    requested_user_id: str
    requested_by_id: str
    status: str
    created_at: datetime | None = None


class ReviewRequest(BaseModel):
    """검토 요청 — decision은 "approve" 또는 "deny" (Review decision)."""

    decision: str
