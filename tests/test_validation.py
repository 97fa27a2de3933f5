"""입력 검증 함수 테스트.

Validation function tests — business hours, roles, email, password strength,
time-off ranges and required fields. Pure functions, no database.
"""

from datetime import date, datetime, time, timedelta

import pytest

from shiftdesk.utils.exceptions import (
    AfterHoursError,
    ErrorCode,
    InvalidEmailError,
    InvalidRoleError,
    InvalidTimeError,
    InvalidTimeOffDatesError,
    MissingFieldsError,
    WeakPasswordError,
)
from shiftdesk.utils.validation import (
    since_midnight,
    validate_email,
    validate_password_strength,
    validate_required,
    validate_role,
    validate_shift_window,
    validate_time_off_range,
)

DAY = date(2026, 3, 3)
CLOSING = 20 * 60


class TestShiftWindow:
    """시프트 시간대 및 영업 시간 검증."""

    def test_full_business_day_is_valid(self):
        """09:00–20:00은 허용 — 마감 시각에 정확히 끝나는 것은 허용."""
        start, end = validate_shift_window(DAY, time(9, 0), time(20, 0), CLOSING)
        assert start == datetime(2026, 3, 3, 9, 0)
        assert end == datetime(2026, 3, 3, 20, 0)

    def test_ending_one_minute_after_close(self):
        with pytest.raises(AfterHoursError) as exc:
            validate_shift_window(DAY, time(9, 0), time(20, 1), CLOSING)
        assert exc.value.detail["code"] == "after_hours"

    def test_starting_at_close(self):
        """마감 시각에 시작하는 시프트는 거부 (종료가 더 늦으므로 AfterHours)."""
        with pytest.raises(AfterHoursError):
            validate_shift_window(DAY, time(20, 0), time(20, 30), CLOSING)

    def test_end_before_start(self):
        with pytest.raises(InvalidTimeError) as exc:
            validate_shift_window(DAY, time(10, 0), time(9, 0), CLOSING)
        assert exc.value.status_code == 400
        assert exc.value.detail["code"] == ErrorCode.INVALID_TIME.value

    def test_zero_length_shift(self):
        with pytest.raises(InvalidTimeError):
            validate_shift_window(DAY, time(10, 0), time(10, 0), CLOSING)

    def test_inverted_after_hours_reports_invalid_time_first(self):
        """종료 <= 시작이 영업 시간 검사보다 우선."""
        with pytest.raises(InvalidTimeError):
            validate_shift_window(DAY, time(21, 0), time(20, 30), CLOSING)

    def test_custom_closing_time(self):
        with pytest.raises(AfterHoursError):
            validate_shift_window(DAY, time(9, 0), time(18, 30), 18 * 60)

    def test_since_midnight(self):
        assert since_midnight(time(20, 0)) == timedelta(minutes=1200)
        assert since_midnight(time(0, 0)) == timedelta(0)
        assert since_midnight(time(20, 0, 30)) == timedelta(minutes=1200, seconds=30)

    def test_seconds_past_close(self):
        """마감 직후 몇 초라도 넘기면 거부."""
        with pytest.raises(AfterHoursError):
            validate_shift_window(DAY, time(9, 0), time(20, 0, 30), CLOSING)


class TestRoleAndEmail:
    """역할/이메일 검증."""

    @pytest.mark.parametrize("role", ["employee", "manager", "admin"])
    def test_assignable_roles(self, role):
        assert validate_role(role) == role

    @pytest.mark.parametrize("role", ["inactive", "owner", "", "Admin"])
    def test_rejected_roles(self, role):
        with pytest.raises(InvalidRoleError):
            validate_role(role)

    def test_email_is_trimmed_and_lowercased(self):
        assert validate_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize("email", ["alice", "alice@example", "a b@example.com", "@", ""])
    def test_malformed_email(self, email):
        with pytest.raises(InvalidEmailError):
            validate_email(email)


class TestPasswordAndDates:
    """비밀번호 강도, 휴가 기간, 필수 필드."""

    def test_minimum_length_password(self):
        assert validate_password_strength("12345678") == "12345678"

    def test_short_password(self):
        with pytest.raises(WeakPasswordError) as exc:
            validate_password_strength("1234567")
        assert exc.value.detail["code"] == "weak_password"

    def test_configured_minimum(self):
        with pytest.raises(WeakPasswordError):
            validate_password_strength("12345678", min_length=12)

    def test_single_day_time_off(self):
        validate_time_off_range(date(2026, 3, 5), date(2026, 3, 5))

    def test_time_off_end_before_start(self):
        with pytest.raises(InvalidTimeOffDatesError):
            validate_time_off_range(date(2026, 3, 5), date(2026, 3, 4))

    def test_required_fields_are_trimmed(self):
        assert validate_required(title="  Morning  ") == {"title": "Morning"}

    def test_blank_required_field(self):
        with pytest.raises(MissingFieldsError) as exc:
            validate_required(title="   ", name="Bob")
        assert "title" in exc.value.message
        assert "name" not in exc.value.message
