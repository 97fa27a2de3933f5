"""감사 로그 레포지토리 — Audit log repository (append-only)."""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.audit import AuditLog
from shiftdesk.repositories.base import BaseRepository


class AuditRepository(BaseRepository[AuditLog]):

    def __init__(self) -> None:
        super().__init__(AuditLog)

    async def record(
        self,
        db: AsyncSession,
        action: str,
        user_id: UUID | None,
        details: dict[str, Any] | None = None,
    ) -> AuditLog:
        """감사 항목을 추가합니다 — Append an entry in the current transaction.

        UUID values in ``details`` are stored as strings.
        """
        payload: dict[str, Any] = {
            key: str(value) if isinstance(value, UUID) else value
            for key, value in (details or {}).items()
        }
        entry: AuditLog = AuditLog(action=action, user_id=user_id, details=payload)
        db.add(entry)
        await db.flush()
        return entry

    async def list_by_action(self, db: AsyncSession, action: str) -> Sequence[AuditLog]:
        result = await db.execute(
            select(AuditLog).where(AuditLog.action == action).order_by(AuditLog.created_at)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
audit_repository: AuditRepository = AuditRepository()
