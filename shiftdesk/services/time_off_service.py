"""휴가 요청 서비스 — 제출 및 검토 워크플로.

Time-off Service — Submission and review of time-off requests.

    pending → approved | denied  (한 번만, exactly once)

A review is a single status-guarded update; if it does not touch exactly
one row the request was already reviewed (or never existed) and the caller
gets ``RequestNotFound``.
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.request import REQUEST_APPROVED, REQUEST_DENIED, REQUEST_PENDING, TimeOffRequest
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.repositories.request_repository import time_off_repository
from shiftdesk.schemas.request import TimeOffCreate
from shiftdesk.utils.exceptions import InvalidReviewError, RequestNotFoundError
from shiftdesk.utils.validation import validate_time_off_range

# 검토 결정 → 최종 상태 — Review decision to terminal status
REVIEW_DECISIONS: dict[str, str] = {"approve": REQUEST_APPROVED, "deny": REQUEST_DENIED}


def review_status(decision: str) -> str:
    """검토 결정을 최종 상태로 변환 — Map approve/deny to a terminal status."""
    try:
        return REVIEW_DECISIONS[decision]
    except KeyError:
        raise InvalidReviewError() from None


class TimeOffService:
    """휴가 요청 서비스 — Time-off request service."""

    async def submit(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: TimeOffCreate,
    ) -> TimeOffRequest:
        """휴가 요청을 제출합니다.

        Submit a pending time-off request.

        Raises:
            InvalidTimeOffDatesError: 종료일이 시작일보다 이를 때 (end_date < start_date)
        """
        validate_time_off_range(data.start_date, data.end_date)
        request: TimeOffRequest = await time_off_repository.create(
            db,
            {
                "user_id": user_id,
                "start_date": data.start_date,
                "end_date": data.end_date,
                "reason": (data.reason or "").strip() or None,
                "status": REQUEST_PENDING,
            },
        )
        await audit_repository.record(db, "time_off_submitted", user_id, {"request_id": request.id})
        return request

    async def review(
        self,
        db: AsyncSession,
        request_id: UUID,
        decision: str,
        reviewer_id: UUID,
        now: datetime,
    ) -> TimeOffRequest:
        """휴가 요청을 승인 또는 거절합니다.

        Approve or deny a pending request, stamping the reviewer and time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            request_id: 요청 UUID (Request UUID)
            decision: "approve" 또는 "deny" (Review decision)
            reviewer_id: 검토자 UUID (Reviewing manager)
            now: 검토 시각 (Review time)

        Raises:
            InvalidReviewError: 알 수 없는 결정 (Unknown decision)
            RequestNotFoundError: 없거나 이미 검토됨 (Missing or already reviewed)
        """
        status: str = review_status(decision)
        updated: int = await time_off_repository.update_where(
            db,
            [TimeOffRequest.id == request_id, TimeOffRequest.status == REQUEST_PENDING],
            {"status": status, "reviewed_by": reviewer_id, "reviewed_at": now},
        )
        if updated != 1:
            raise RequestNotFoundError()

        await audit_repository.record(
            db, f"time_off_{status}", reviewer_id, {"request_id": request_id}
        )
        request: TimeOffRequest | None = await time_off_repository.get_by_id(db, request_id)
        if request is None:
            raise RequestNotFoundError()
        return request

    async def list_requests(
        self,
        db: AsyncSession,
        status: str | None = None,
        user_id: UUID | None = None,
    ) -> Sequence[TimeOffRequest]:
        return await time_off_repository.list_requests(db, status=status, user_id=user_id)

    def build_response(self, request: TimeOffRequest) -> dict[str, Any]:
        return {
            "id": str(request.id),
            "user_id": str(request.user_id),
            "start_date": request.start_date,
            "end_date": request.end_date,
            "reason": request.reason,
            "status": request.status,
            "reviewed_by": str(request.reviewed_by) if request.reviewed_by else None,
            "reviewed_at": request.reviewed_at,
            "created_at": request.created_at,
        }


# 싱글턴 인스턴스 — Singleton instance
time_off_service: TimeOffService = TimeOffService()
