"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 직원 계정 (Staff accounts)
    shift: 시프트 및 배정 (Shifts and assignments)
    request: 휴가 및 교대 요청 (Time-off and swap requests)
    audit: 감사 로그 (Audit log)
"""

from shiftdesk.models.user import User
from shiftdesk.models.shift import Shift, Assignment
from shiftdesk.models.request import TimeOffRequest, ShiftSwapRequest
from shiftdesk.models.audit import AuditLog

__all__ = [
    "User",
    "Shift", "Assignment",
    "TimeOffRequest", "ShiftSwapRequest",
    "AuditLog",
]
