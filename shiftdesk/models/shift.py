"""근무 시프트 및 배정 관련 SQLAlchemy ORM 모델 정의.

Shift and Assignment SQLAlchemy ORM model definitions.
A shift is a time slot created by a manager; an assignment binds one user
to one shift. At most one ``assigned`` assignment may exist per shift —
the assignment service is the only writer that enforces this.

Tables:
    - shifts: 근무 시간대 (Shifts, cancellation is a status, not a delete)
    - assignments: 근무 배정 (Assignments, cascade-deleted with the shift)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftdesk.database import Base

SHIFT_DRAFT: str = "draft"
SHIFT_PUBLISHED: str = "published"
SHIFT_CANCELLED: str = "cancelled"
SHIFT_STATUSES: tuple[str, ...] = (SHIFT_DRAFT, SHIFT_PUBLISHED, SHIFT_CANCELLED)

ASSIGNMENT_ASSIGNED: str = "assigned"
ASSIGNMENT_REQUESTED: str = "requested"
ASSIGNMENT_SWAP_PENDING: str = "swap_pending"


class Shift(Base):
    """근무 시프트 모델 — 매니저가 생성하는 근무 시간대.

    Shift model — A time slot created by a manager.

    Status Flow:
        draft ⇄ published ⇄ cancelled
        - 취소는 삭제가 아닌 상태값 (Cancellation is a status; rows are retained)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 시프트 이름 (Title, e.g. "Morning Wash")
        location: 근무 장소, 선택 (Location, optional)
        notes: 메모, 선택 (Notes, optional)
        start_time: 시작 일시, 영업장 현지 시각 (Start, business-local wall clock)
        end_time: 종료 일시, 영업장 현지 시각 (End, business-local wall clock)
        status: 상태 (draft / published / cancelled)
        created_by: 작성자 FK (Creating manager)
    """

    __tablename__ = "shifts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 시작/종료 일시 — naive 현지 시각 (naive local wall-clock timestamps)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=SHIFT_PUBLISHED)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_shifts_start_time", "start_time"),
    )

    # 관계 — Relationships (CASCADE: 시프트 삭제 시 배정도 삭제)
    assignments = relationship(
        "Assignment",
        back_populates="shift",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Assignment(Base):
    """근무 배정 모델 — 사용자 한 명을 시프트 하나에 연결.

    Assignment model — Binds one user to one shift with a lifecycle status.
    Rows are created when a shift is first assigned, re-pointed to another
    user on reassignment or swap approval, and deleted when cleared. They
    never move to a different shift.

    Constraints:
        uq_assignment_shift_user: 동일 시프트+사용자 중복 방지
            (One row per shift+user combination)
    """

    __tablename__ = "assignments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    shift_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 상태 — "assigned" / "requested" / "swap_pending"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ASSIGNMENT_ASSIGNED)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("shift_id", "user_id", name="uq_assignment_shift_user"),
        Index("ix_assignments_shift_status", "shift_id", "status"),
        Index("ix_assignments_user_status", "user_id", "status"),
    )

    shift = relationship("Shift", back_populates="assignments")
    user = relationship("User", back_populates="assignments")
