"""관리자 직원 라우터 — 직원 계정 관리 API.

Admin Staff Router — Staff account creation, role changes,
deactivation/reactivation and password resets. Manager or admin only.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import require_manager
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.common import MessageResponse
from shiftdesk.schemas.staff import (
    PasswordReset,
    ReactivateRequest,
    RoleUpdate,
    StaffCreate,
    StaffResponse,
)
from shiftdesk.services.staff_service import StaffStatusAction, staff_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StaffResponse])
async def list_staff(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
    is_active: Annotated[bool | None, Query()] = None,
) -> list[StaffResponse]:
    """직원 목록 — Staff list, optionally filtered by active state."""
    users = await staff_service.list_staff(db, is_active=is_active)
    return [staff_service.to_response(u) for u in users]


@router.post("", response_model=StaffResponse, status_code=201)
async def create_staff(
    data: StaffCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> StaffResponse:
    """새 직원 계정을 생성합니다.

    Create a staff account.

    Args:
        data: 직원 생성 데이터 (Staff creation data)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 매니저 이상 사용자 (Authenticated manager or admin)

    Returns:
        StaffResponse: 생성된 직원 (Created staff member)
    """
    user = await staff_service.create_staff(db, data, actor_id=current_user.id)
    await db.commit()
    return staff_service.to_response(user)


@router.patch("/{user_id}/role", response_model=StaffResponse)
async def update_staff_role(
    user_id: UUID,
    data: RoleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> StaffResponse:
    """역할 변경 — 마지막 관리자 강등은 409 (Demoting the last admin is refused)."""
    user = await staff_service.update_staff_role(db, user_id, data.role, actor_id=current_user.id)
    await db.commit()
    return staff_service.to_response(user)


@router.post("/{user_id}/deactivate", response_model=StaffResponse)
async def deactivate_staff(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> StaffResponse:
    """직원 비활성화 (소프트 삭제) — Deactivate a staff member."""
    user = await staff_service.set_staff_status(
        db, user_id, StaffStatusAction.DEACTIVATE, actor_id=current_user.id
    )
    await db.commit()
    return staff_service.to_response(user)


@router.post("/{user_id}/reactivate", response_model=StaffResponse)
async def reactivate_staff(
    user_id: UUID,
    data: ReactivateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> StaffResponse:
    """직원 재활성화 — Reactivate a staff member with the given role."""
    user = await staff_service.set_staff_status(
        db, user_id, StaffStatusAction.REACTIVATE, role=data.role, actor_id=current_user.id
    )
    await db.commit()
    return staff_service.to_response(user)


@router.post("/{user_id}/reset-password", response_model=MessageResponse)
async def reset_password(
    user_id: UUID,
    data: PasswordReset,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> dict:
    """비밀번호 재설정 — Set a new password for a staff member."""
    await staff_service.reset_password(db, user_id, data.password, actor_id=current_user.id)
    await db.commit()
    return {"message": "Password updated"}
