"""사용자 레포지토리 — 직원 계정 조회 및 관리자 집계 쿼리.

User Repository — Staff account lookups and admin count queries.
Extends BaseRepository with email lookup, active-user filters and the
locked admin read used by the last-admin guard.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.user import ROLE_ADMIN, User
from shiftdesk.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자를 조회합니다 (이미 소문자로 정규화된 값).

        Retrieve a user by an already-normalized email address.
        """
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_active(self, db: AsyncSession, user_id: UUID) -> User | None:
        """활성 사용자만 조회합니다 — Retrieve a user only if active."""
        result = await db.execute(
            select(User).where(User.id == user_id, User.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def list_staff(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
    ) -> Sequence[User]:
        """직원 목록을 이름순으로 조회합니다.

        List staff ordered by name, optionally filtered by lifecycle state.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            is_active: 활성 상태 필터, None이면 전체 (Active filter, None = all)

        Returns:
            Sequence[User]: 직원 목록 (List of users)
        """
        query: Select = select(User)
        if is_active is not None:
            query = query.where(User.is_active.is_(is_active))
        result = await db.execute(query.order_by(User.name, User.email))
        return result.scalars().all()

    async def list_coworkers(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[User]:
        """본인을 제외한 활성 직원 목록 — Active staff other than the caller."""
        result = await db.execute(
            select(User)
            .where(User.id != user_id, User.is_active.is_(True))
            .order_by(User.name)
        )
        return result.scalars().all()

    async def lock_active_admins(self, db: AsyncSession) -> Sequence[User]:
        """활성 관리자 행을 모두 잠그고 반환합니다.

        Lock and return every active admin row. Two concurrent demotions
        serialize on these locks, so neither can act on a stale count.
        Aggregates cannot take ``FOR UPDATE``, hence rows instead of COUNT.

        Returns:
            Sequence[User]: 잠긴 활성 관리자 목록 (Locked active admins)
        """
        result = await db.execute(
            select(User)
            .where(User.role == ROLE_ADMIN, User.is_active.is_(True))
            .order_by(User.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def count_active_admins(self, db: AsyncSession) -> int:
        """활성 관리자 수 — Number of active admins (unlocked)."""
        return await self.count(db, User.role == ROLE_ADMIN, User.is_active.is_(True))


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
