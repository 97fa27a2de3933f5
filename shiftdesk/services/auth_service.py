"""인증 서비스 — 이메일/비밀번호 로그인 및 토큰 발급.

Auth Service — Email/password login and access token issuance.
Inactive users and accounts without a password cannot log in.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.user import User
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.auth import LoginRequest, TokenResponse
from shiftdesk.utils.exceptions import UnauthorizedError
from shiftdesk.utils.jwt import create_access_token
from shiftdesk.utils.password import verify_password


class AuthService:

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        """자격 증명을 확인합니다.

        Verify credentials. Every failure gives the same message so the
        response does not reveal which emails exist.

        Raises:
            UnauthorizedError: 이메일/비밀번호 불일치 또는 비활성 (Bad credentials or inactive)
        """
        user: User | None = await user_repository.get_by_email(db, email.strip().lower())
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        return user

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        user: User = await self.authenticate(db, data.email, data.password)
        return TokenResponse(access_token=create_access_token(user.id, user.role), role=user.role)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
