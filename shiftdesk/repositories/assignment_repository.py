"""배정 레포지토리 — 시프트 배정 관련 DB 쿼리 담당.

Assignment Repository — Locking reads and bulk deletes over shift
assignments, plus the employee-facing swap-eligibility query.
"""

from datetime import datetime
from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shiftdesk.models.shift import ASSIGNMENT_ASSIGNED, Assignment, Shift, SHIFT_CANCELLED
from shiftdesk.repositories.base import BaseRepository


class AssignmentRepository(BaseRepository[Assignment]):
    """배정 레포지토리.

    Assignment repository.

    Extends:
        BaseRepository[Assignment]
    """

    def __init__(self) -> None:
        super().__init__(Assignment)

    async def lock_assigned_for_shift(
        self,
        db: AsyncSession,
        shift_id: UUID,
    ) -> Sequence[Assignment]:
        """시프트의 assigned 행을 생성 순으로 잠그고 반환합니다.

        Lock and return the shift's ``assigned`` rows, oldest first. Ties on
        ``created_at`` fall back to the id so "first" is stable.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            shift_id: 시프트 UUID (Shift UUID)

        Returns:
            Sequence[Assignment]: 잠긴 배정 목록 (Locked assignment rows)
        """
        result = await db.execute(
            select(Assignment)
            .where(Assignment.shift_id == shift_id, Assignment.status == ASSIGNMENT_ASSIGNED)
            .order_by(Assignment.created_at, Assignment.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def get_for_shift_user(
        self,
        db: AsyncSession,
        shift_id: UUID,
        user_id: UUID,
        for_update: bool = False,
    ) -> Assignment | None:
        """시프트+사용자 조합의 배정 행 (상태 무관) — Row for a (shift, user) pair, any status."""
        query = select(Assignment).where(
            Assignment.shift_id == shift_id,
            Assignment.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def delete_ids(self, db: AsyncSession, assignment_ids: Iterable[UUID]) -> int:
        """여러 배정을 한 번에 삭제합니다 — Delete assignments by id, returns the count."""
        ids: list[UUID] = list(assignment_ids)
        if not ids:
            return 0
        result = await db.execute(
            delete(Assignment)
            .where(Assignment.id.in_(ids))
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def list_swap_eligible(
        self,
        db: AsyncSession,
        user_id: UUID,
        now: datetime,
    ) -> Sequence[Assignment]:
        """교대 요청 가능한 배정 — The user's assigned rows on future, non-cancelled shifts."""
        result = await db.execute(
            select(Assignment)
            .join(Shift, Shift.id == Assignment.shift_id)
            .where(
                Assignment.user_id == user_id,
                Assignment.status == ASSIGNMENT_ASSIGNED,
                Shift.status != SHIFT_CANCELLED,
                Shift.start_time > now,
            )
            .options(selectinload(Assignment.shift))
            .order_by(Shift.start_time)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
assignment_repository: AssignmentRepository = AssignmentRepository()
