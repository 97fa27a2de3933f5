"""직원 무결성 가드 — 마지막 활성 관리자 보호.

Staff Integrity Guard — The set of active admins never drops to zero.

The guard locks every active admin row before counting, so two managers
demoting the last two admins at the same moment serialize: the second
sees one admin left and is refused. The count and the caller's role update
share the request transaction.

Callers changing a role or lifecycle state lock through ``lock_target``,
which takes the admin rows (ordered by id) before the target row. Every
such request then acquires locks in the same order and two concurrent
demotions queue instead of deadlocking.
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.user import ROLE_ADMIN, User
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.utils.exceptions import LastAdminProtectedError

logger = logging.getLogger(__name__)


class StaffIntegrityService:

    async def lock_target(self, db: AsyncSession, user_id: UUID) -> User | None:
        """관리자 행을 먼저 잠근 뒤 대상 사용자를 잠급니다.

        Lock every active admin row, then the target row. An admin target is
        already held by the first lock; re-locking it is a no-op.
        """
        await user_repository.lock_active_admins(db)
        return await user_repository.get_by_id(db, user_id, for_update=True)

    @staticmethod
    def leaves_admin_role(user: User, new_role: str | None, deactivating: bool) -> bool:
        """이 변경이 활성 관리자 한 명을 줄이는지 — Does this change remove an active admin?"""
        if not user.is_active or user.role != ROLE_ADMIN:
            return False
        return deactivating or new_role != ROLE_ADMIN

    async def assert_not_last_admin(
        self,
        db: AsyncSession,
        user: User,
        new_role: str | None = None,
        deactivating: bool = False,
    ) -> None:
        """마지막 활성 관리자의 강등/비활성화를 막습니다.

        Refuse a role change or deactivation that would leave no active
        admin. Does nothing when the target is not an active admin leaving
        the admin role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 대상 사용자, 호출자가 잠근 상태 (Target user, locked by the caller)
            new_role: 새 역할 (New role for a role change)
            deactivating: 비활성화 여부 (True for deactivation)

        Raises:
            LastAdminProtectedError: 활성 관리자가 1명 이하일 때 (One or fewer active admins)
        """
        if not self.leaves_admin_role(user, new_role, deactivating):
            return

        admins: Sequence[User] = await user_repository.lock_active_admins(db)
        if len(admins) <= 1:
            logger.warning("Refused to remove last active admin %s", user.id)
            raise LastAdminProtectedError()


# 싱글턴 인스턴스 — Singleton instance
staff_integrity_service: StaffIntegrityService = StaffIntegrityService()
