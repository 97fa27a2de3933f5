"""시프트 레포지토리 — 시프트 조회 및 잠금 쿼리.

Shift Repository — Shift listings and the per-shift row lock.
The shift row is the serialization point for everything that changes who
works a shift: the reconciler and swap approval both lock it first.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shiftdesk.models.shift import ASSIGNMENT_ASSIGNED, Assignment, Shift, SHIFT_CANCELLED
from shiftdesk.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """시프트 레포지토리.

    Shift repository with range listings and eager-loaded assignees.

    Extends:
        BaseRepository[Shift]
    """

    def __init__(self) -> None:
        super().__init__(Shift)

    async def lock(self, db: AsyncSession, shift_id: UUID) -> Shift | None:
        """시프트 행을 잠급니다 — Lock a shift row until the transaction ends."""
        return await self.get_by_id(db, shift_id, for_update=True)

    async def get_with_assignments(self, db: AsyncSession, shift_id: UUID) -> Shift | None:
        """배정과 담당자를 함께 로드합니다.

        Load a shift with its assignments and their users, bypassing the
        identity map so freshly flushed changes are reflected.
        """
        result = await db.execute(
            select(Shift)
            .where(Shift.id == shift_id)
            .options(selectinload(Shift.assignments).selectinload(Assignment.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_in_range(
        self,
        db: AsyncSession,
        start: datetime | None = None,
        end: datetime | None = None,
        status: str | None = None,
        include_cancelled: bool = True,
    ) -> Sequence[Shift]:
        """기간 내 시프트를 시작 시각 순으로 조회합니다.

        List shifts starting within ``[start, end)`` ordered by start time,
        with assignments and assignees eagerly loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            start: 시작 하한, 포함 (Inclusive lower bound on start_time)
            end: 시작 상한, 미포함 (Exclusive upper bound on start_time)
            status: 상태 필터 (Optional status filter)
            include_cancelled: 취소된 시프트 포함 여부 (Include cancelled shifts)

        Returns:
            Sequence[Shift]: 시프트 목록 (List of shifts)
        """
        query: Select = select(Shift).options(
            selectinload(Shift.assignments).selectinload(Assignment.user)
        )
        if start is not None:
            query = query.where(Shift.start_time >= start)
        if end is not None:
            query = query.where(Shift.start_time < end)
        if status is not None:
            query = query.where(Shift.status == status)
        elif not include_cancelled:
            query = query.where(Shift.status != SHIFT_CANCELLED)

        result = await db.execute(
            query.order_by(Shift.start_time, Shift.id).execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def list_upcoming(
        self,
        db: AsyncSession,
        now: datetime,
        limit: int = 50,
    ) -> Sequence[Shift]:
        """다가오는 미취소 시프트 — Non-cancelled shifts starting at or after now."""
        result = await db.execute(
            select(Shift)
            .where(Shift.start_time >= now, Shift.status != SHIFT_CANCELLED)
            .options(selectinload(Shift.assignments).selectinload(Assignment.user))
            .order_by(Shift.start_time, Shift.id)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: datetime,
        end: datetime,
    ) -> Sequence[Shift]:
        """사용자가 배정된 미취소 시프트를 기간 내에서 조회합니다.

        Non-cancelled shifts in ``[start, end)`` on which the user holds an
        ``assigned`` row.
        """
        result = await db.execute(
            select(Shift)
            .join(Assignment, Assignment.shift_id == Shift.id)
            .where(
                Assignment.user_id == user_id,
                Assignment.status == ASSIGNMENT_ASSIGNED,
                Shift.status != SHIFT_CANCELLED,
                Shift.start_time >= start,
                Shift.start_time < end,
            )
            .order_by(Shift.start_time, Shift.id)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
