"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT access token helpers. The token is the opaque principal handed to the
scheduling core; it carries only the user id and the role at login time:

    {
        "sub": "user_uuid",   # 사용자 ID (User identifier)
        "role": "manager",    # 로그인 시점 역할 (Role at login)
        "exp": 1234567890,    # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"
    }

The role claim is advisory; ``api.deps`` re-reads the live role from the
database on every request so demotions take effect immediately.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt

from shiftdesk.config import settings


def create_access_token(user_id: UUID, role: str) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Issue an access token for a user, valid for
    ``JWT_ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {"sub": str(user_id), "role": role, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
