"""시프트 관리 및 직원 스케줄 테스트.

Shift management and employee schedule tests — creation with an assignee,
business-hours rejection, edits that reassign or clear, cancel/restore,
week summary, and the employee-facing schedule endpoints.
"""

import uuid
from datetime import date, time

import pytest
from sqlalchemy import func, select

from shiftdesk.models.shift import Assignment, Shift
from shiftdesk.schemas.shift import ShiftCreate, ShiftUpdate
from shiftdesk.services.shift_service import ShiftStatusAction, shift_service, week_bounds
from shiftdesk.utils.exceptions import AfterHoursError, InvalidAssigneeError, NotFoundError
from tests.conftest import auth_header, make_user

SHIFTS_URL = "/api/v1/admin/shifts"


def shift_payload(day: str, start: str, end: str, assignee=None, **extra) -> dict:
    payload = {
        "title": "Front desk",
        "shift_date": day,
        "start_time": start,
        "end_time": end,
        "assigned_user_id": str(assignee.id) if assignee else None,
    }
    payload.update(extra)
    return payload


def shift_data(day: date, start: time, end: time, assignee=None, **extra) -> ShiftCreate:
    return ShiftCreate(
        title="Front desk",
        shift_date=day,
        start_time=start,
        end_time=end,
        assigned_user_id=assignee.id if assignee else None,
        **extra,
    )


async def count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestShiftService:
    """시프트 서비스 — 검증은 쓰기 전에."""

    async def test_after_hours_leaves_nothing_behind(self, db, manager_user, employee_a):
        with pytest.raises(AfterHoursError):
            await shift_service.create_shift(
                db, shift_data(date(2026, 3, 3), time(9, 0), time(20, 1), employee_a), manager_user.id
            )
        assert await count(db, Shift) == 0
        assert await count(db, Assignment) == 0

    async def test_inactive_assignee_leaves_nothing_behind(self, db, manager_user):
        gone = await make_user(db, "Gone", is_active=False)
        with pytest.raises(InvalidAssigneeError):
            await shift_service.create_shift(
                db, shift_data(date(2026, 3, 3), time(9, 0), time(13, 0), gone), manager_user.id
            )
        assert await count(db, Shift) == 0

    async def test_status_on_create(self, db, manager_user):
        draft = await shift_service.create_shift(
            db, shift_data(date(2026, 3, 3), time(9, 0), time(10, 0), status="draft"), manager_user.id
        )
        other = await shift_service.create_shift(
            db, shift_data(date(2026, 3, 3), time(10, 0), time(11, 0), status="cancelled"), manager_user.id
        )
        assert draft.status == "draft"
        assert other.status == "published"

    async def test_failed_edit_keeps_assignee(self, db, manager_user, employee_a, employee_b):
        shift = await shift_service.create_shift(
            db, shift_data(date(2026, 3, 3), time(9, 0), time(13, 0), employee_a), manager_user.id
        )
        edit = ShiftUpdate(
            title="Front desk",
            shift_date=date(2026, 3, 3),
            start_time=time(9, 0),
            end_time=time(21, 0),
            assigned_user_id=employee_b.id,
        )
        with pytest.raises(AfterHoursError):
            await shift_service.update_shift(db, shift.id, edit)
        shift = await shift_service.get_shift(db, shift.id)
        assert [a.user_id for a in shift.assignments] == [employee_a.id]

    async def test_cancel_and_restore_keep_assignee(self, db, manager_user, employee_a):
        shift = await shift_service.create_shift(
            db, shift_data(date(2026, 3, 3), time(9, 0), time(13, 0), employee_a), manager_user.id
        )
        cancelled = await shift_service.set_shift_status(db, shift.id, ShiftStatusAction.CANCEL)
        assert cancelled.status == "cancelled"

        restored = await shift_service.set_shift_status(db, shift.id, ShiftStatusAction.RESTORE)
        assert restored.status == "published"
        assert shift_service.build_response(restored)["assignee"]["id"] == str(employee_a.id)

    async def test_unknown_shift(self, db, manager_user):
        with pytest.raises(NotFoundError):
            await shift_service.set_shift_status(db, uuid.uuid4(), ShiftStatusAction.CANCEL)

    async def test_week_summary(self, db, manager_user, employee_a):
        """월요일 시작 주 — 취소된 시프트 제외, 배정 시간 합계."""
        for day, start, end, assignee in (
            (date(2026, 3, 2), time(9, 0), time(13, 0), employee_a),
            (date(2026, 3, 4), time(12, 0), time(13, 30), employee_a),
            (date(2026, 3, 8), time(9, 0), time(17, 0), None),
            (date(2026, 3, 9), time(9, 0), time(17, 0), employee_a),
        ):
            await shift_service.create_shift(db, shift_data(day, start, end, assignee), manager_user.id)
        cancelled = await shift_service.create_shift(
            db, shift_data(date(2026, 3, 5), time(9, 0), time(10, 0), employee_a), manager_user.id
        )
        await shift_service.set_shift_status(db, cancelled.id, ShiftStatusAction.CANCEL)

        summary = await shift_service.week_summary(db, date(2026, 3, 5))

        assert summary["week_start"] == date(2026, 3, 2)
        assert summary["week_end"] == date(2026, 3, 8)
        assert summary["shift_count"] == 3
        assert summary["assigned_count"] == 2
        assert summary["open_count"] == 1
        assert summary["scheduled_hours"] == 5.5

    def test_week_bounds_from_sunday(self):
        assert week_bounds(date(2026, 3, 8)) == (date(2026, 3, 2), date(2026, 3, 8))


class TestShiftAPI:
    """관리자 시프트 API."""

    async def test_create_with_assignee(self, client, manager_token, employee_a):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "13:00:00", employee_a, location="Lobby"),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 201
        body = res.json()
        assert body["status"] == "published"
        assert body["start_time"] == "2026-03-03T09:00:00"
        assert body["assignee"]["name"] == "Alice"
        assert body["location"] == "Lobby"

    async def test_closing_time_boundary(self, client, manager_token):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "20:00:00"),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 201

        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "20:01:00"),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "after_hours"

    async def test_end_before_start(self, client, manager_token):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "10:00:00", "09:00:00"),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "invalid_time"

    async def test_blank_title(self, client, manager_token):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "10:00:00", title="  "),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "missing_fields"

    async def test_employee_forbidden(self, client, employee_a_token):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "10:00:00"),
            headers=auth_header(employee_a_token),
        )
        assert res.status_code == 403

    async def test_missing_token(self, client):
        res = await client.get(SHIFTS_URL)
        assert res.status_code == 401
        assert res.json()["detail"]["code"] == "unauthorized"

    async def test_edit_reassigns_then_clears(self, client, manager_token, employee_a, employee_b):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "13:00:00", employee_a),
            headers=auth_header(manager_token),
        )
        shift_id = res.json()["id"]

        res = await client.put(
            f"{SHIFTS_URL}/{shift_id}",
            json=shift_payload("2026-03-03", "10:00:00", "14:00:00", employee_b),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 200
        assert res.json()["assignee"]["name"] == "Bob"
        assert res.json()["start_time"] == "2026-03-03T10:00:00"

        res = await client.put(
            f"{SHIFTS_URL}/{shift_id}",
            json=shift_payload("2026-03-03", "10:00:00", "14:00:00"),
            headers=auth_header(manager_token),
        )
        assert res.status_code == 200
        assert res.json()["assignee"] is None

    async def test_cancel_and_restore(self, client, manager_token, employee_a):
        res = await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "13:00:00", employee_a),
            headers=auth_header(manager_token),
        )
        shift_id = res.json()["id"]

        res = await client.post(f"{SHIFTS_URL}/{shift_id}/cancel", headers=auth_header(manager_token))
        assert res.json()["status"] == "cancelled"

        res = await client.get(SHIFTS_URL, params={"status": "cancelled"}, headers=auth_header(manager_token))
        assert [s["id"] for s in res.json()] == [shift_id]

        res = await client.post(f"{SHIFTS_URL}/{shift_id}/restore", headers=auth_header(manager_token))
        assert res.json()["status"] == "published"
        assert res.json()["assignee"]["name"] == "Alice"

    async def test_list_by_date_range(self, client, manager_token):
        for day in ("2026-03-03", "2026-03-05", "2026-03-10"):
            await client.post(
                SHIFTS_URL,
                json=shift_payload(day, "09:00:00", "10:00:00"),
                headers=auth_header(manager_token),
            )
        res = await client.get(
            SHIFTS_URL,
            params={"date_from": "2026-03-03", "date_to": "2026-03-05"},
            headers=auth_header(manager_token),
        )
        assert [s["start_time"][:10] for s in res.json()] == ["2026-03-03", "2026-03-05"]

    async def test_week_summary_defaults_to_this_week(self, client, manager_token, employee_a):
        await client.post(
            SHIFTS_URL,
            json=shift_payload("2026-03-03", "09:00:00", "13:00:00", employee_a),
            headers=auth_header(manager_token),
        )
        res = await client.get(f"{SHIFTS_URL}/week-summary", headers=auth_header(manager_token))
        assert res.status_code == 200
        assert res.json()["week_start"] == "2026-03-02"
        assert res.json()["assigned_count"] == 1
        assert res.json()["scheduled_hours"] == 4.0

    async def test_upcoming(self, client, manager_token):
        for day in ("2026-03-01", "2026-03-04"):
            await client.post(
                SHIFTS_URL,
                json=shift_payload(day, "09:00:00", "10:00:00"),
                headers=auth_header(manager_token),
            )
        res = await client.get(f"{SHIFTS_URL}/upcoming", headers=auth_header(manager_token))
        assert [s["start_time"][:10] for s in res.json()] == ["2026-03-04"]


class TestEmployeeSchedule:
    """직원 스케줄 API — 고정 시각 2026-03-02(월) 08:00."""

    async def _seed(self, db, manager_user, employee_a, employee_b) -> dict[str, Shift]:
        shifts: dict[str, Shift] = {}
        for key, day, start, end, assignee in (
            ("tue", date(2026, 3, 3), time(9, 0), time(13, 0), employee_a),
            ("wed", date(2026, 3, 4), time(10, 0), time(12, 0), employee_a),
            ("next_mon", date(2026, 3, 9), time(9, 0), time(10, 0), employee_a),
            ("bob", date(2026, 3, 3), time(14, 0), time(18, 0), employee_b),
        ):
            shifts[key] = await shift_service.create_shift(
                db, shift_data(day, start, end, assignee), manager_user.id
            )
        return shifts

    async def test_my_schedule(self, client, db, manager_user, employee_a, employee_b, employee_a_token):
        await self._seed(db, manager_user, employee_a, employee_b)

        res = await client.get("/api/v1/app/schedule", headers=auth_header(employee_a_token))
        assert res.status_code == 200
        assert [s["start_time"] for s in res.json()] == [
            "2026-03-03T09:00:00",
            "2026-03-04T10:00:00",
            "2026-03-09T09:00:00",
        ]

    async def test_summary(self, client, db, manager_user, employee_a, employee_b, employee_a_token):
        shifts = await self._seed(db, manager_user, employee_a, employee_b)

        res = await client.get("/api/v1/app/schedule/summary", headers=auth_header(employee_a_token))
        body = res.json()
        assert body["week_start"] == "2026-03-02"
        assert body["week_hours"] == 6.0
        assert len(body["upcoming"]) == 2
        assert body["next_shift"]["id"] == str(shifts["tue"].id)

    async def test_swap_eligible_skips_cancelled(self, client, db, manager_user, employee_a, employee_b, employee_a_token):
        shifts = await self._seed(db, manager_user, employee_a, employee_b)
        await shift_service.set_shift_status(db, shifts["wed"].id, ShiftStatusAction.CANCEL)

        res = await client.get("/api/v1/app/schedule/swap-eligible", headers=auth_header(employee_a_token))
        assert [e["shift"]["id"] for e in res.json()] == [str(shifts["tue"].id), str(shifts["next_mon"].id)]

    async def test_coworkers_exclude_self_and_inactive(self, client, db, employee_a, employee_b, employee_a_token):
        await make_user(db, "Gone", is_active=False)

        res = await client.get("/api/v1/app/coworkers", headers=auth_header(employee_a_token))
        names = [c["name"] for c in res.json()]
        assert "Bob" in names
        assert "Alice" not in names
        assert "Gone" not in names
