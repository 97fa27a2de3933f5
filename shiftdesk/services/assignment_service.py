"""배정 서비스 — 시프트 담당자 조정 (Assignment Reconciler).

Assignment Service — Reconciles a shift's assignments against a single
desired assignee.

The reconciler reads the shift's current ``assigned`` rows under a row lock,
tolerating duplicates left by older writers, and persists the smallest
insert/update/delete diff that leaves at most one ``assigned`` row:

    desired 없음 (none)              → 모든 assigned 행 삭제 (delete all)
    desired가 이미 배정됨 (holds one) → 그 행 유지, 나머지 삭제 (keep, delete rest)
    다른 사람이 배정됨 (someone else) → 가장 오래된 행을 desired로 변경, 나머지 삭제
                                       (re-point the oldest row, delete rest)
    배정 없음 (no row)               → 새 행 삽입 (insert)

Running it twice with the same desired user is a no-op the second time and
keeps the same row id.
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.shift import ASSIGNMENT_ASSIGNED, Assignment
from shiftdesk.models.user import User
from shiftdesk.repositories.assignment_repository import assignment_repository
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.utils.exceptions import InvalidAssigneeError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """조정 결과 — What a reconcile call changed.

    Attributes:
        assignment_id: 유지/생성된 assigned 행 (The surviving assigned row, if any)
        inserted: 새로 삽입된 행 (Row inserted)
        updated: 담당자가 바뀐 행 (Row re-pointed or promoted)
        removed: 삭제된 행 목록 (Rows deleted)
    """

    assignment_id: UUID | None = None
    inserted: UUID | None = None
    updated: UUID | None = None
    removed: list[UUID] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.inserted is not None or self.updated is not None or bool(self.removed)


class AssignmentService:
    """배정 서비스.

    Assignment service: assignee validation and reconciliation.
    """

    async def resolve_assignee(self, db: AsyncSession, user_id: UUID | None) -> User | None:
        """담당자가 활성 직원인지 확인합니다.

        Verify that a prospective assignee exists and is active.

        Raises:
            InvalidAssigneeError: 없거나 비활성인 사용자 (Unknown or inactive user)
        """
        if user_id is None:
            return None
        user: User | None = await user_repository.get_active(db, user_id)
        if user is None:
            raise InvalidAssigneeError()
        return user

    async def reconcile(
        self,
        db: AsyncSession,
        shift_id: UUID,
        desired_user_id: UUID | None,
        actor_id: UUID | None = None,
    ) -> ReconcileResult:
        """시프트의 배정을 단일 담당자로 맞춥니다.

        Reconcile a shift's ``assigned`` rows against one desired assignee.
        The caller has already validated the assignee with
        ``resolve_assignee``; this method trusts it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            shift_id: 시프트 UUID (Shift UUID)
            desired_user_id: 원하는 담당자, None이면 미배정 (Desired assignee, None clears)
            actor_id: 감사 로그용 수행자 (Actor recorded in the audit log)

        Returns:
            ReconcileResult: 변경 내역 (The applied diff)

        Raises:
            NotFoundError: 시프트가 없을 때 (When the shift does not exist)
        """
        # 시프트 행 잠금 — 같은 시프트에 대한 조정/교대 승인을 직렬화
        # Lock the shift row; serializes reconcile and swap approval per shift
        if await shift_repository.lock(db, shift_id) is None:
            raise NotFoundError("Shift not found")

        rows: list[Assignment] = list(await assignment_repository.lock_assigned_for_shift(db, shift_id))
        if len(rows) > 1:
            logger.warning(
                "Shift %s had %d assigned rows; collapsing to one", shift_id, len(rows)
            )

        result = ReconcileResult()

        if desired_user_id is None:
            result.removed = [row.id for row in rows]
            await assignment_repository.delete_ids(db, result.removed)
        else:
            keep: Assignment | None = next((row for row in rows if row.user_id == desired_user_id), None)
            if keep is not None:
                result.assignment_id = keep.id
                result.removed = [row.id for row in rows if row.id != keep.id]
                await assignment_repository.delete_ids(db, result.removed)
            else:
                # (shift_id, user_id)는 고유 — desired가 다른 상태의 행을 이미 갖고 있으면 그 행을 승격
                # (shift_id, user_id) is unique: promote a non-assigned row the user already has
                existing: Assignment | None = await assignment_repository.get_for_shift_user(
                    db, shift_id, desired_user_id, for_update=True
                )
                if existing is not None:
                    result.removed = [row.id for row in rows]
                    await assignment_repository.delete_ids(db, result.removed)
                    existing.status = ASSIGNMENT_ASSIGNED
                    result.updated = existing.id
                elif rows:
                    first: Assignment = rows[0]
                    result.removed = [row.id for row in rows[1:]]
                    await assignment_repository.delete_ids(db, result.removed)
                    first.user_id = desired_user_id
                    result.updated = first.id
                else:
                    created: Assignment = await assignment_repository.create(
                        db,
                        {"shift_id": shift_id, "user_id": desired_user_id, "status": ASSIGNMENT_ASSIGNED},
                    )
                    result.inserted = created.id
                result.assignment_id = result.updated or result.inserted
            await db.flush()

        if result.changed:
            await audit_repository.record(
                db,
                "assignment_changed",
                actor_id,
                {
                    "shift_id": shift_id,
                    "user_id": desired_user_id,
                    "inserted": result.inserted,
                    "updated": result.updated,
                    "removed": [str(row_id) for row_id in result.removed],
                },
            )
        return result


# 싱글턴 인스턴스 — Singleton instance
assignment_service: AssignmentService = AssignmentService()
