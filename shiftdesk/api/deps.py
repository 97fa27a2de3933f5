"""FastAPI 의존성 주입 모듈 — 인증, 권한 검사, 현재 시각.

FastAPI dependency injection module — Authentication, authorization and
the request clock.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증 (decode_token verifies the JWT)
    3. "sub"로 DB에서 사용자를 다시 조회 — 토큰의 역할은 참고용
       (User is re-read from the DB; the token's role claim is advisory)
    4. 비활성 사용자는 401 (Inactive users get 401)

Authorization:
    require_manager는 manager/admin만 허용, 그 외 403
    (require_manager admits manager and admin, 403 otherwise)

Clock:
    get_now는 영업장 현지 naive 시각을 반환합니다. 서비스는 시각을 직접 읽지
    않고 항상 이 값을 인자로 받습니다. 테스트는 dependency_overrides로 고정합니다.
    get_now returns the business-local wall clock. Services never read the
    clock themselves; tests pin it through dependency_overrides.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.database import get_db
from shiftdesk.models.user import MANAGER_ROLES, User
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.utils.exceptions import ForbiddenError, UnauthorizedError
from shiftdesk.utils.jwt import decode_token

# auto_error=False — 헤더 누락도 코드가 붙은 401로 응답 (Missing header → coded 401)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 활성 사용자를 추출합니다.

    Decode the bearer token and return the live, active user it names.

    Raises:
        UnauthorizedError: 토큰 누락/만료/위조 또는 비활성 사용자
            (Missing, expired or invalid token, or inactive user)
    """
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: UUID = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedError("Invalid or expired token") from None

    user: User | None = await user_repository.get_active(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found or inactive")
    return user


async def require_manager(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """매니저/관리자 권한 검사 — Admit manager and admin principals only."""
    if current_user.role not in MANAGER_ROLES:
        raise ForbiddenError()
    return current_user


def get_now() -> datetime:
    """현재 영업장 현지 시각 — Current business-local time (naive)."""
    return datetime.now()

