"""직원 서비스 — 직원 계정 생성, 역할 변경, 비활성화 비즈니스 로직.

Staff Service — Business logic for staff accounts: creation, role
changes, deactivation/reactivation and password resets.

Deactivation is a soft delete (``is_active = False``); the user keeps their
last-known role. Any change that would take the last active admin out of
the admin role is refused by the staff integrity guard.
"""

import logging
from enum import Enum
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.config import settings
from shiftdesk.models.user import ROLE_EMPLOYEE, User
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.staff import CoworkerResponse, StaffCreate, StaffResponse
from shiftdesk.services.staff_integrity_service import staff_integrity_service
from shiftdesk.utils.exceptions import DuplicateEmailError, NotFoundError
from shiftdesk.utils.password import hash_password
from shiftdesk.utils.validation import (
    validate_email,
    validate_password_strength,
    validate_required,
    validate_role,
)

logger = logging.getLogger(__name__)


class StaffStatusAction(str, Enum):
    DEACTIVATE = "deactivate"
    REACTIVATE = "reactivate"


class StaffService:
    """직원 계정 비즈니스 로직을 처리하는 서비스.

    Service handling staff account business logic.
    """

    def to_response(self, user: User) -> StaffResponse:
        """사용자 모델을 응답 스키마로 변환합니다 — Convert a User to StaffResponse."""
        return StaffResponse(
            id=str(user.id),
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role,
            is_active=user.is_active,
            status=user.status,
            created_at=user.created_at,
        )

    def to_coworker(self, user: User) -> CoworkerResponse:
        return CoworkerResponse(id=str(user.id), name=user.name, email=user.email)

    async def _lock_user(self, db: AsyncSession, user_id: UUID) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id, for_update=True)
        if user is None:
            raise NotFoundError("Staff member not found")
        return user

    async def _lock_for_role_change(self, db: AsyncSession, user_id: UUID) -> User:
        # 관리자 행 → 대상 행 순서로 잠금 — admin rows first, then the target
        user: User | None = await staff_integrity_service.lock_target(db, user_id)
        if user is None:
            raise NotFoundError("Staff member not found")
        return user

    async def create_staff(
        self,
        db: AsyncSession,
        data: StaffCreate,
        actor_id: UUID | None = None,
    ) -> User:
        """새 직원 계정을 생성합니다.

        Create a staff account. The email is trimmed and lower-cased before
        the uniqueness check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 직원 생성 데이터 (Staff creation data)
            actor_id: 감사 로그용 수행자 (Actor for the audit log)

        Returns:
            User: 생성된 사용자 (Created user)

        Raises:
            MissingFieldsError: 이름이 비었을 때 (Blank name)
            InvalidEmailError: 이메일 형식 오류 (Malformed email)
            InvalidRoleError: 알 수 없는 역할 (Unknown role)
            WeakPasswordError: 비밀번호가 짧을 때 (Password too short)
            DuplicateEmailError: 이메일 중복 (Email already registered)
        """
        name: str = validate_required(name=data.name)["name"]
        email: str = validate_email(data.email)
        role: str = validate_role(data.role)
        password_hash: str | None = None
        if data.password:
            validate_password_strength(data.password, settings.MIN_PASSWORD_LENGTH)
            password_hash = hash_password(data.password)

        if await user_repository.get_by_email(db, email) is not None:
            raise DuplicateEmailError()

        try:
            user: User = await user_repository.create(
                db,
                {
                    "name": name,
                    "email": email,
                    "phone": (data.phone or "").strip() or None,
                    "role": role,
                    "is_active": True,
                    "password_hash": password_hash,
                },
            )
        except IntegrityError as exc:
            # 동시 생성 경쟁 — A concurrent insert won the unique email constraint
            raise DuplicateEmailError() from exc

        await audit_repository.record(db, "staff_created", actor_id, {"user_id": user.id, "role": role})
        return user

    async def update_staff_role(
        self,
        db: AsyncSession,
        user_id: UUID,
        role: str,
        actor_id: UUID | None = None,
    ) -> User:
        """직원 역할을 변경합니다.

        Change a staff member's role.

        Raises:
            InvalidRoleError: 알 수 없는 역할 (Unknown role)
            NotFoundError: 사용자가 없을 때 (User not found)
            LastAdminProtectedError: 마지막 관리자 강등 시도 (Demoting the last admin)
        """
        new_role: str = validate_role(role)
        user: User = await self._lock_for_role_change(db, user_id)
        await staff_integrity_service.assert_not_last_admin(db, user, new_role=new_role)

        previous: str = user.role
        user.role = new_role
        await db.flush()
        await audit_repository.record(
            db, "staff_role_changed", actor_id, {"user_id": user.id, "from": previous, "to": new_role}
        )
        return user

    async def set_staff_status(
        self,
        db: AsyncSession,
        user_id: UUID,
        action: StaffStatusAction,
        role: str = ROLE_EMPLOYEE,
        actor_id: UUID | None = None,
    ) -> User:
        """직원을 비활성화하거나 재활성화합니다.

        Deactivate a staff member (soft delete, role retained) or reactivate
        them with the given role.

        Raises:
            InvalidRoleError: 재활성화 역할이 잘못됨 (Unknown reactivation role)
            NotFoundError: 사용자가 없을 때 (User not found)
            LastAdminProtectedError: 마지막 관리자 비활성화 또는 재활성화로 강등
                (Deactivating the last admin, or reactivating them into another role)
        """
        if action == StaffStatusAction.REACTIVATE:
            new_role: str = validate_role(role)
            user: User = await self._lock_for_role_change(db, user_id)
            # 이미 활성인 관리자에게는 역할 변경과 같음 — same as a role change for an active admin
            await staff_integrity_service.assert_not_last_admin(db, user, new_role=new_role)
            user.is_active = True
            user.role = new_role
        else:
            user = await self._lock_for_role_change(db, user_id)
            await staff_integrity_service.assert_not_last_admin(db, user, deactivating=True)
            user.is_active = False

        await db.flush()
        await audit_repository.record(
            db, f"staff_{action.value}d", actor_id, {"user_id": user.id, "role": user.role}
        )
        logger.info("Staff %s %sd by %s", user.id, action.value, actor_id)
        return user

    async def reset_password(
        self,
        db: AsyncSession,
        user_id: UUID,
        password: str,
        actor_id: UUID | None = None,
    ) -> User:
        """비밀번호를 재설정합니다 — Set a new password for a staff member."""
        validate_password_strength(password, settings.MIN_PASSWORD_LENGTH)
        user: User = await self._lock_user(db, user_id)
        user.password_hash = hash_password(password)
        await db.flush()
        await audit_repository.record(db, "staff_password_reset", actor_id, {"user_id": user.id})
        return user

    async def list_staff(self, db: AsyncSession, is_active: bool | None = None) -> Sequence[User]:
        return await user_repository.list_staff(db, is_active=is_active)

    async def list_coworkers(self, db: AsyncSession, user_id: UUID) -> Sequence[User]:
        return await user_repository.list_coworkers(db, user_id)


# 싱글턴 인스턴스 — Singleton instance
staff_service: StaffService = StaffService()
