"""직원 요청 관련 SQLAlchemy ORM 모델 정의.

Employee request SQLAlchemy ORM model definitions.
Both request kinds share the same lifecycle: created ``pending`` by an
employee, then moved exactly once to ``approved`` or ``denied`` by a
manager or admin.

Tables:
    - time_off_requests: 휴가 요청 (Time-off requests)
    - shift_swap_requests: 근무 교대 요청 (Shift swap requests)
"""

import uuid
from datetime import date, datetime, timezone
from sqlalchemy import String, DateTime, Date, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from shiftdesk.database import Base

REQUEST_PENDING: str = "pending"
REQUEST_APPROVED: str = "approved"
REQUEST_DENIED: str = "denied"


class TimeOffRequest(Base):
    """휴가 요청 모델.

    Time-off request model.

    Status Flow:
        pending → approved | denied (한 번만, exactly once)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 요청 직원 FK (Requesting employee)
        start_date: 시작일 (First day off)
        end_date: 종료일, start_date 이후 (Last day off, >= start_date)
        reason: 사유, 선택 (Reason, optional)
        status: 상태 (pending / approved / denied)
        reviewed_by: 검토자 FK (Reviewing manager)
        reviewed_at: 검토 일시 (Review timestamp)
    """

    __tablename__ = "time_off_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=REQUEST_PENDING)
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    # 검토 일시 — 시프트와 같은 naive 현지 시각 (naive business-local, like shift times)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_time_off_requests_status", "status"),
        Index("ix_time_off_requests_user", "user_id"),
    )


class ShiftSwapRequest(Base):
    """근무 교대 요청 모델.

    Shift swap request model — an employee proposes handing their own
    assignment to a named coworker, subject to manager approval.

    The request references, but does not own, its assignment. If the
    assignment row is deleted the reference is nulled and the request stays
    as a historical entry.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        original_assignment_id: 원래 배정 FK (Assignment being handed over)
        requested_user_id: 교대 대상 직원 FK (Coworker who would take the shift)
        requested_by_id: 요청 직원 FK (Employee who filed the request)
        status: 상태 (pending / approved / denied)
    """

    __tablename__ = "shift_swap_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    original_assignment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("assignments.id", ondelete="SET NULL"), nullable=True
    )
    requested_user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    requested_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=REQUEST_PENDING)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_shift_swap_requests_assignment_status", "original_assignment_id", "status"),
    )
