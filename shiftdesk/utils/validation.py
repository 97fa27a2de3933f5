"""입력 검증 유틸리티 모듈 — 순수 함수, I/O 없음.

Input validation utility module — pure functions, no I/O.
Each check raises the matching coded exception from ``utils.exceptions``
and never touches the database, so services run all of them before the
first write.
"""

import re
from datetime import date, datetime, time, timedelta

from shiftdesk.models.user import ACTIVE_ROLES
from shiftdesk.utils.exceptions import (
    AfterHoursError,
    InvalidEmailError,
    InvalidRoleError,
    InvalidTimeError,
    InvalidTimeOffDatesError,
    MissingFieldsError,
    WeakPasswordError,
)

# 최소한의 local@domain.tld 형태 — Minimal local@domain.tld shape
_EMAIL_PATTERN: re.Pattern[str] = re.compile(r"^\S+@\S+\.\S+$")


def since_midnight(t: time) -> timedelta:
    """자정 이후 경과 시간 (초 단위 포함) — Time elapsed since midnight, seconds included."""
    return timedelta(hours=t.hour, minutes=t.minute, seconds=t.second, microseconds=t.microsecond)


def validate_shift_window(
    shift_date: date,
    start: time,
    end: time,
    closing_minutes: int,
) -> tuple[datetime, datetime]:
    """시프트 시간대를 검증하고 시작/종료 일시를 반환합니다.

    Validate a same-day shift window against the closing time.

    Args:
        shift_date: 근무일 (Shift date)
        start: 시작 시각 (Start time of day)
        end: 종료 시각 (End time of day)
        closing_minutes: 영업 종료, 자정 기준 분 (Closing time in minutes after midnight)

    Returns:
        tuple[datetime, datetime]: (시작 일시, 종료 일시) (Start and end timestamps)

    Raises:
        InvalidTimeError: 종료가 시작보다 같거나 이를 때 (end <= start)
        AfterHoursError: 마감 이후 시작하거나 마감을 넘겨 끝날 때
                         (start >= closing or end > closing)
    """
    start_dt: datetime = datetime.combine(shift_date, start)
    end_dt: datetime = datetime.combine(shift_date, end)
    if end_dt <= start_dt:
        raise InvalidTimeError()

    closing: timedelta = timedelta(minutes=closing_minutes)
    if since_midnight(start) >= closing or since_midnight(end) > closing:
        raise AfterHoursError()

    return start_dt, end_dt


def validate_role(role: str) -> str:
    """역할이 배정 가능한 세 가지 중 하나인지 확인합니다.

    "inactive" is a derived status and is rejected like any unknown value.
    """
    if role not in ACTIVE_ROLES:
        raise InvalidRoleError()
    return role


def validate_email(email: str) -> str:
    """이메일 형식을 확인하고 정규화(trim + 소문자)된 값을 반환합니다.

    Validate email syntax and return the trimmed, lower-cased address.
    """
    normalized: str = email.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise InvalidEmailError()
    return normalized


def validate_password_strength(password: str, min_length: int = 8) -> str:
    if len(password) < min_length:
        raise WeakPasswordError(f"Password must be at least {min_length} characters")
    return password


def validate_time_off_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise InvalidTimeOffDatesError()


def validate_required(**fields: str | None) -> dict[str, str]:
    """필수 텍스트 필드를 trim 후 비어있지 않은지 확인합니다.

    Trim required text fields and reject blanks.

    Returns:
        dict[str, str]: trim된 값 (Trimmed values keyed by field name)

    Raises:
        MissingFieldsError: 비어있는 필드가 있을 때 (names the blank fields)
    """
    cleaned: dict[str, str] = {name: (value or "").strip() for name, value in fields.items()}
    missing: list[str] = [name for name, value in cleaned.items() if not value]
    if missing:
        raise MissingFieldsError(f"Missing required fields: {', '.join(missing)}")
    return cleaned
