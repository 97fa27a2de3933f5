"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Every failure the scheduling core can report maps to exactly one stable
``ErrorCode`` so a presentation layer can render a fixed message without
inspecting internals. The response body is always::

    {"detail": {"code": "<error_code>", "message": "<human readable text>"}}

Usage:
    from shiftdesk.utils.exceptions import SwapConflictError
    raise SwapConflictError()
"""

from enum import Enum

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    """열거 가능한 오류 코드 — Enumerable, stable error codes."""

    # 검증 실패 — Validation failures (detected before any mutation)
    INVALID_TIME = "invalid_time"
    AFTER_HOURS = "after_hours"
    INVALID_ROLE = "invalid_role"
    INVALID_EMAIL = "invalid_email"
    WEAK_PASSWORD = "weak_password"
    INVALID_SWAP_REQUEST = "invalid_swap_request"
    INVALID_SWAP_TARGET = "invalid_swap_target"
    INVALID_TIME_OFF_DATES = "invalid_time_off_dates"
    INVALID_ASSIGNEE = "invalid_assignee"
    INVALID_REVIEW = "invalid_review"
    MISSING_FIELDS = "missing_fields"

    # 대상 없음 / 상태 변경됨 — Not-found and stale-state failures
    NOT_FOUND = "not_found"
    REQUEST_NOT_FOUND = "request_not_found"
    ASSIGNMENT_GONE = "assignment_gone"

    # 업무 규칙 충돌 — Business-rule conflicts
    SWAP_CONFLICT = "swap_conflict"
    SWAP_ALREADY_PENDING = "swap_already_pending"
    SWAP_TARGET_ALREADY_ASSIGNED = "swap_target_already_assigned"
    LAST_ADMIN_PROTECTED = "last_admin_protected"
    DUPLICATE_EMAIL = "duplicate_email"

    # 인증/권한 — Authentication and authorization
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


class AppError(HTTPException):
    """코드가 붙은 HTTP 예외의 베이스 클래스.

    Base class for coded HTTP exceptions. Subclasses pin the status code and
    the error code; callers may override the message.

    Args:
        message: 오류 메시지 (Error message, defaults to the class default)
    """

    status_code_default: int = status.HTTP_400_BAD_REQUEST
    code: ErrorCode
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message: str = message or self.default_message
        super().__init__(
            status_code=self.status_code_default,
            detail={"code": self.code.value, "message": self.message},
        )


class BadRequestError(AppError):
    """400 Bad Request — 검증 실패 공통 부모 (Validation failure parent)."""

    status_code_default = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """404 Not Found — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a referenced shift or user does not exist.
    """

    status_code_default = status.HTTP_404_NOT_FOUND
    code = ErrorCode.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    """409 Conflict — 업무 규칙 충돌 공통 부모 (Business-rule conflict parent)."""

    status_code_default = status.HTTP_409_CONFLICT


class UnauthorizedError(AppError):
    """401 Unauthorized — 인증 정보가 없거나 만료되었거나 비활성 사용자."""

    status_code_default = status.HTTP_401_UNAUTHORIZED
    code = ErrorCode.UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AppError):
    """403 Forbidden — 권한 부족 (Insufficient role)."""

    status_code_default = status.HTTP_403_FORBIDDEN
    code = ErrorCode.FORBIDDEN
    default_message = "Insufficient permissions"


# === 검증 실패 (Validation) ===

class InvalidTimeError(BadRequestError):
    code = ErrorCode.INVALID_TIME
    default_message = "Shift end time must be after its start time"


class AfterHoursError(BadRequestError):
    code = ErrorCode.AFTER_HOURS
    default_message = "Shift must start before and end by closing time"


class InvalidRoleError(BadRequestError):
    code = ErrorCode.INVALID_ROLE
    default_message = "Role must be one of employee, manager, admin"


class InvalidEmailError(BadRequestError):
    code = ErrorCode.INVALID_EMAIL
    default_message = "Email address is not valid"


class WeakPasswordError(BadRequestError):
    code = ErrorCode.WEAK_PASSWORD
    default_message = "Password is too short"


class InvalidSwapRequestError(BadRequestError):
    code = ErrorCode.INVALID_SWAP_REQUEST
    default_message = "Only your own upcoming assigned shift can be swapped"


class InvalidSwapTargetError(BadRequestError):
    code = ErrorCode.INVALID_SWAP_TARGET
    default_message = "Swap target must be an active coworker"


class InvalidTimeOffDatesError(BadRequestError):
    code = ErrorCode.INVALID_TIME_OFF_DATES
    default_message = "Time-off end date cannot be before its start date"


class InvalidAssigneeError(BadRequestError):
    code = ErrorCode.INVALID_ASSIGNEE
    default_message = "Assignee must be an active staff member"


class InvalidReviewError(BadRequestError):
    code = ErrorCode.INVALID_REVIEW
    default_message = "Review decision must be approve or deny"


class MissingFieldsError(BadRequestError):
    code = ErrorCode.MISSING_FIELDS
    default_message = "Required fields are missing"


# === 대상 없음 / 상태 변경 (Not found / stale) ===

class RequestNotFoundError(NotFoundError):
    code = ErrorCode.REQUEST_NOT_FOUND
    default_message = "Request not found or already reviewed"


class AssignmentGoneError(NotFoundError):
    code = ErrorCode.ASSIGNMENT_GONE
    default_message = "The shift assignment changed since the request was filed"


# === 충돌 (Conflicts) ===

class SwapConflictError(ConflictError):
    code = ErrorCode.SWAP_CONFLICT
    default_message = "The requested coworker is already working this shift"


class SwapAlreadyPendingError(ConflictError):
    code = ErrorCode.SWAP_ALREADY_PENDING
    default_message = "A swap request for this shift is already pending"


class SwapTargetAlreadyAssignedError(ConflictError):
    code = ErrorCode.SWAP_TARGET_ALREADY_ASSIGNED
    default_message = "The requested coworker is already assigned to this shift"


class LastAdminProtectedError(ConflictError):
    code = ErrorCode.LAST_ADMIN_PROTECTED
    default_message = "At least one active admin must remain"


class DuplicateEmailError(ConflictError):
    code = ErrorCode.DUPLICATE_EMAIL
    default_message = "A staff member with this email already exists"
