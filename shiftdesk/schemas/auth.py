"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication request/response schema definitions.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일, 대소문자 무시 (Login email, case-insensitive)
        password: 비밀번호 (Plain text, compared to the bcrypt hash)
    """

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Attributes:
        access_token: JWT 액세스 토큰 (Access token)
        token_type: 토큰 유형, 항상 "bearer" (Always "bearer")
        role: 로그인 시점 역할 (Role at login)
    """

    access_token: str
    token_type: str = "bearer"
    role: str
