"""앱 인증 라우터 — 이메일/비밀번호 로그인.

App Auth Router — Email/password login for every active staff member.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_user
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.auth import LoginRequest, TokenResponse
from shiftdesk.schemas.staff import StaffResponse
from shiftdesk.services.auth_service import auth_service
from shiftdesk.services.staff_service import staff_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 후 액세스 토큰을 발급합니다.

    Log in and receive an access token. Inactive users are rejected.

    Args:
        data: 로그인 자격 증명 (Login credentials)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        TokenResponse: JWT 액세스 토큰 (Access token)
    """
    return await auth_service.login(db, data)


@router.get("/me", response_model=StaffResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> StaffResponse:
    """내 계정 정보 — The authenticated user's account."""
    return staff_service.to_response(current_user)
