"""교대 요청 서비스 — 제출 및 승인 프로토콜.

Swap Service — Submission of shift swap requests and the approval
protocol that hands the assignment to the requested coworker.

Approval re-validates the request against live assignment state inside the
request transaction, with row locks on the swap request, the shift and the
assignment. Any check that fails aborts the whole transaction, so either
the assignment moves and the request is approved, or nothing changes.

    승인 순서 (Approval steps):
        1. 대기 중 요청 잠금 — lock the pending request   → RequestNotFound
        2. 시프트 → 배정 잠금 — lock shift, then assignment → AssignmentGone
        3. 대상이 이미 담당 — target already holds it       → SwapConflict
        4. 대상의 다른 행 존재 — target has another row     → SwapConflict
        5. 배정 담당자 변경 — re-point the assignment
        6. 상태 조건부 승인 — guarded approve (exactly one row)
"""

import logging
from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.request import REQUEST_APPROVED, REQUEST_DENIED, REQUEST_PENDING, ShiftSwapRequest
from shiftdesk.models.shift import ASSIGNMENT_ASSIGNED, SHIFT_CANCELLED, Assignment, Shift
from shiftdesk.repositories.assignment_repository import assignment_repository
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.repositories.request_repository import swap_request_repository
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.services.time_off_service import review_status
from shiftdesk.utils.exceptions import (
    AssignmentGoneError,
    InvalidSwapRequestError,
    InvalidSwapTargetError,
    RequestNotFoundError,
    SwapAlreadyPendingError,
    SwapConflictError,
    SwapTargetAlreadyAssignedError,
)

logger = logging.getLogger(__name__)


class SwapService:
    """교대 요청 서비스 — Shift swap request service."""

    async def submit_swap(
        self,
        db: AsyncSession,
        requester_id: UUID,
        assignment_id: UUID,
        requested_user_id: UUID,
        now: datetime,
    ) -> ShiftSwapRequest:
        """교대 요청을 제출합니다.

        File a swap request. The requester must currently hold that exact
        assignment on an upcoming, non-cancelled shift. Every check runs
        before the insert.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            requester_id: 요청 직원 UUID (Employee filing the request)
            assignment_id: 넘겨줄 배정 UUID (Assignment being handed over)
            requested_user_id: 교대 대상 UUID (Coworker who would take it)
            now: 현재 시각, 영업장 현지 (Current business-local time)

        Raises:
            InvalidSwapRequestError: 본인 지정, 본인 배정 아님, 지난/취소된 시프트
                (Self-swap, not the holder, past or cancelled shift)
            InvalidSwapTargetError: 대상이 없거나 비활성 (Unknown or inactive target)
            SwapAlreadyPendingError: 이 배정에 대기 요청 존재 (Pending swap exists)
            SwapTargetAlreadyAssignedError: 대상이 이미 배정됨 (Target already assigned)
        """
        if requester_id == requested_user_id:
            raise InvalidSwapRequestError("You cannot swap a shift with yourself")

        assignment: Assignment | None = await assignment_repository.get_by_id(db, assignment_id)
        if (
            assignment is None
            or assignment.user_id != requester_id
            or assignment.status != ASSIGNMENT_ASSIGNED
        ):
            raise InvalidSwapRequestError()

        shift: Shift | None = await shift_repository.get_by_id(db, assignment.shift_id)
        if shift is None or shift.status == SHIFT_CANCELLED or shift.start_time <= now:
            raise InvalidSwapRequestError()

        if await user_repository.get_active(db, requested_user_id) is None:
            raise InvalidSwapTargetError()

        if await swap_request_repository.has_pending_for_assignment(db, assignment_id):
            raise SwapAlreadyPendingError()

        target_row: Assignment | None = await assignment_repository.get_for_shift_user(
            db, shift.id, requested_user_id
        )
        if target_row is not None and target_row.status == ASSIGNMENT_ASSIGNED:
            raise SwapTargetAlreadyAssignedError()

        swap: ShiftSwapRequest = await swap_request_repository.create(
            db,
            {
                "original_assignment_id": assignment_id,
                "requested_user_id": requested_user_id,
                "requested_by_id": requester_id,
                "status": REQUEST_PENDING,
            },
        )
        await audit_repository.record(
            db,
            "swap_submitted",
            requester_id,
            {"request_id": swap.id, "assignment_id": assignment_id, "requested_user_id": requested_user_id},
        )
        return swap

    async def review_swap(
        self,
        db: AsyncSession,
        request_id: UUID,
        decision: str,
        reviewer_id: UUID | None = None,
    ) -> ShiftSwapRequest:
        """교대 요청을 승인 또는 거절합니다.

        Approve or deny a pending swap request.

        Raises:
            InvalidReviewError: 알 수 없는 결정 (Unknown decision)
            RequestNotFoundError: 없거나 이미 검토됨 (Missing or already reviewed)
            AssignmentGoneError: 요청 이후 배정이 바뀜 (Assignment changed since filing)
            SwapConflictError: 대상이 이미 이 시프트 근무 중 (Target already works this shift)
        """
        status: str = review_status(decision)
        if status == REQUEST_DENIED:
            await self._guarded_transition(db, request_id, REQUEST_DENIED)
            await audit_repository.record(db, "swap_denied", reviewer_id, {"request_id": request_id})
        else:
            await self._approve(db, request_id, reviewer_id)

        swap: ShiftSwapRequest | None = await swap_request_repository.get_by_id(db, request_id)
        if swap is None:
            raise RequestNotFoundError()
        return swap

    async def _guarded_transition(self, db: AsyncSession, request_id: UUID, status: str) -> None:
        updated: int = await swap_request_repository.update_where(
            db,
            [ShiftSwapRequest.id == request_id, ShiftSwapRequest.status == REQUEST_PENDING],
            {"status": status},
        )
        if updated != 1:
            raise RequestNotFoundError()

    async def _approve(self, db: AsyncSession, request_id: UUID, reviewer_id: UUID | None) -> None:
        swap: ShiftSwapRequest | None = await swap_request_repository.lock_pending(db, request_id)
        if swap is None:
            raise RequestNotFoundError()
        if swap.original_assignment_id is None:
            raise AssignmentGoneError()

        # 시프트를 먼저 잠가 조정기와 같은 순서로 잠금
        # Lock the shift first, in the same order the reconciler uses
        snapshot: Assignment | None = await assignment_repository.get_by_id(db, swap.original_assignment_id)
        if snapshot is None:
            raise AssignmentGoneError()
        await shift_repository.lock(db, snapshot.shift_id)

        assignment: Assignment | None = await assignment_repository.get_by_id(
            db, swap.original_assignment_id, for_update=True
        )
        if (
            assignment is None
            or assignment.status != ASSIGNMENT_ASSIGNED
            or assignment.user_id not in (swap.requested_by_id, swap.requested_user_id)
        ):
            raise AssignmentGoneError()

        if assignment.user_id == swap.requested_user_id:
            logger.info("Swap %s: target already holds assignment %s", swap.id, assignment.id)
            raise SwapConflictError()

        other: Assignment | None = await assignment_repository.get_for_shift_user(
            db, assignment.shift_id, swap.requested_user_id, for_update=True
        )
        if other is not None:
            raise SwapConflictError()

        assignment.user_id = swap.requested_user_id
        await db.flush()
        await self._guarded_transition(db, swap.id, REQUEST_APPROVED)

        await audit_repository.record(
            db,
            "swap_approved",
            reviewer_id,
            {
                "request_id": swap.id,
                "assignment_id": assignment.id,
                "from_user_id": swap.requested_by_id,
                "to_user_id": swap.requested_user_id,
            },
        )
        logger.info(
            "Swap %s approved: assignment %s moved to %s", swap.id, assignment.id, swap.requested_user_id
        )

    async def list_requests(
        self,
        db: AsyncSession,
        status: str | None = None,
        requested_by_id: UUID | None = None,
    ) -> Sequence[ShiftSwapRequest]:
        return await swap_request_repository.list_requests(db, status=status, requested_by_id=requested_by_id)

    def build_response(self, swap: ShiftSwapRequest) -> dict[str, Any]:
        return {
            "id": str(swap.id),
            "original_assignment_id": str(swap.original_assignment_id) if swap.original_assignment_id else None,
            "requested_user_id": str(swap.requested_user_id),
            "requested_by_id": str(swap.requested_by_id),
            "status": swap.status,
            "created_at": swap.created_at,
        }


# 싱글턴 인스턴스 — Singleton instance
swap_service: SwapService = SwapService()
