"""직원 요청 레포지토리 — 휴가 및 교대 요청 쿼리.

Request Repositories — Time-off and shift swap request queries.
Reviews go through ``BaseRepository.update_where`` guarded on
``status = 'pending'``; the listings here feed the review queues.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.request import REQUEST_PENDING, ShiftSwapRequest, TimeOffRequest
from shiftdesk.repositories.base import BaseRepository


class TimeOffRepository(BaseRepository[TimeOffRequest]):
    """휴가 요청 레포지토리 — Time-off request repository."""

    def __init__(self) -> None:
        super().__init__(TimeOffRequest)

    async def list_requests(
        self,
        db: AsyncSession,
        status: str | None = None,
        user_id: UUID | None = None,
    ) -> Sequence[TimeOffRequest]:
        """휴가 요청 목록 — newest first, optionally by status and/or employee."""
        query: Select = select(TimeOffRequest)
        if status is not None:
            query = query.where(TimeOffRequest.status == status)
        if user_id is not None:
            query = query.where(TimeOffRequest.user_id == user_id)
        result = await db.execute(
            query.order_by(TimeOffRequest.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()


class SwapRequestRepository(BaseRepository[ShiftSwapRequest]):
    """교대 요청 레포지토리 — Shift swap request repository."""

    def __init__(self) -> None:
        super().__init__(ShiftSwapRequest)

    async def lock_pending(self, db: AsyncSession, request_id: UUID) -> ShiftSwapRequest | None:
        """대기 중인 교대 요청을 잠그고 반환합니다.

        Lock and return a swap request only while it is still pending.
        """
        result = await db.execute(
            select(ShiftSwapRequest)
            .where(ShiftSwapRequest.id == request_id, ShiftSwapRequest.status == REQUEST_PENDING)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def has_pending_for_assignment(self, db: AsyncSession, assignment_id: UUID) -> bool:
        """해당 배정을 참조하는 대기 요청이 있는지 — Any pending swap on this assignment."""
        count: int = await self.count(
            db,
            ShiftSwapRequest.original_assignment_id == assignment_id,
            ShiftSwapRequest.status == REQUEST_PENDING,
        )
        return count > 0

    async def list_requests(
        self,
        db: AsyncSession,
        status: str | None = None,
        requested_by_id: UUID | None = None,
    ) -> Sequence[ShiftSwapRequest]:
        """교대 요청 목록 — newest first, optionally by status and/or requester."""
        query: Select = select(ShiftSwapRequest)
        if status is not None:
            query = query.where(ShiftSwapRequest.status == status)
        if requested_by_id is not None:
            query = query.where(ShiftSwapRequest.requested_by_id == requested_by_id)
        result = await db.execute(
            query.order_by(ShiftSwapRequest.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instances
time_off_repository: TimeOffRepository = TimeOffRepository()
swap_request_repository: SwapRequestRepository = SwapRequestRepository()
