"""직원 계정 관련 Pydantic 요청/응답 스키마 정의.

Staff account Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel


class StaffCreate(BaseModel):
    """직원 생성 요청 스키마 (관리자용).

    Staff creation request schema.

    Attributes:
        name: 표시 이름 (Display name)
        email: 로그인 이메일, 소문자로 저장 (Login email, stored lower-cased)
        phone: 전화번호 (Phone, optional)
        role: 역할 (employee / manager / admin)
        password: 초기 비밀번호, 선택 (Initial password, optional)
    """

    name: str
    email: str
    phone: str | None = None
    role: str = "employee"
    password: str | None = None


class RoleUpdate(BaseModel):
    role: str


class ReactivateRequest(BaseModel):
    """재활성화 요청 — 복귀 시 부여할 역할 (Role granted on reactivation)."""

    role: str = "employee"


class PasswordReset(BaseModel):
    password: str


class StaffResponse(BaseModel):
    """직원 응답 스키마.

    ``status`` is the role, or "inactive" for deactivated accounts.
    """

    id: str
    name: str
    email: str
    phone: str | None
    role: str
    is_active: bool
    status: str
    created_at: datetime | None = None


class CoworkerResponse(BaseModel):
    """동료 목록 항목 — Coworker entry (no contact details beyond email)."""

    id: str
    name: str
    email: str
