"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Staff accounts carry one assignable role (employee / manager / admin) and a
separate lifecycle flag. Deactivation is a soft delete: the row keeps its
last-known role and is never physically destroyed.

Tables:
    - users: 직원 계정 (Staff accounts)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftdesk.database import Base

# 배정 가능한 역할 — Assignable roles ("inactive" is a derived status, never stored)
ROLE_EMPLOYEE: str = "employee"
ROLE_MANAGER: str = "manager"
ROLE_ADMIN: str = "admin"
ACTIVE_ROLES: tuple[str, ...] = (ROLE_EMPLOYEE, ROLE_MANAGER, ROLE_ADMIN)
MANAGER_ROLES: tuple[str, ...] = (ROLE_MANAGER, ROLE_ADMIN)
STATUS_INACTIVE: str = "inactive"


class User(Base):
    """사용자 모델 — 직원, 매니저, 관리자 계정.

    User model — Employee, manager and admin accounts.
    Email is globally unique and stored lower-cased.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 표시 이름 (Display name)
        email: 로그인 이메일, 고유 (Login email, unique)
        phone: 전화번호, 선택 (Phone number for SMS, optional)
        role: 마지막으로 부여된 역할 (Last-known assignable role)
        is_active: 활성 상태, 소프트 삭제 (Lifecycle flag, soft-delete pattern)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 로그인 이메일 — 전역 고유 (globally unique, lower-cased on write)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 역할 — employee / manager / admin
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_EMPLOYEE)
    # 활성 상태 — 비활성 사용자는 배정 대상/로그인/관리자 집계에서 제외
    # Inactive users are excluded from assignment pools, login and admin counts
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_users_role_active", "role", "is_active"),
    )

    # 관계 — Relationships
    assignments = relationship("Assignment", back_populates="user")

    @property
    def status(self) -> str:
        """표시용 상태 — Display status: the role, or "inactive" when deactivated."""
        return self.role if self.is_active else STATUS_INACTIVE
