"""배정 조정기 서비스 테스트.

Assignment reconciler service tests — insert, keep, re-point, clear,
duplicate self-healing, idempotency and the promote edge case.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.shift import Assignment, Shift
from shiftdesk.repositories.audit_repository import audit_repository
from shiftdesk.services.assignment_service import assignment_service
from shiftdesk.utils.exceptions import InvalidAssigneeError, NotFoundError
from tests.conftest import make_user


async def assigned_rows(db: AsyncSession, shift_id) -> list[Assignment]:
    result = await db.execute(
        select(Assignment)
        .where(Assignment.shift_id == shift_id, Assignment.status == "assigned")
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


@pytest_asyncio.fixture
async def shift(db: AsyncSession, manager_user) -> Shift:
    s = Shift(
        title="Morning",
        start_time=datetime(2026, 3, 3, 9, 0),
        end_time=datetime(2026, 3, 3, 13, 0),
        status="published",
        created_by=manager_user.id,
    )
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


class TestReconcile:
    """단일 담당자 조정."""

    async def test_insert_when_unassigned(self, db, shift, employee_a):
        result = await assignment_service.reconcile(db, shift.id, employee_a.id)

        rows = await assigned_rows(db, shift.id)
        assert [r.user_id for r in rows] == [employee_a.id]
        assert result.inserted == rows[0].id
        assert result.updated is None
        assert result.removed == []

    async def test_idempotent_second_call(self, db, shift, employee_a):
        """같은 담당자로 두 번 조정해도 같은 행 하나가 유지됨."""
        first = await assignment_service.reconcile(db, shift.id, employee_a.id)
        second = await assignment_service.reconcile(db, shift.id, employee_a.id)

        rows = await assigned_rows(db, shift.id)
        assert len(rows) == 1
        assert rows[0].id == first.assignment_id == second.assignment_id
        assert not second.changed

    async def test_reassign_keeps_row_id(self, db, shift, employee_a, employee_b):
        """다른 사람이 배정되어 있으면 그 행의 user_id만 변경."""
        first = await assignment_service.reconcile(db, shift.id, employee_a.id)
        second = await assignment_service.reconcile(db, shift.id, employee_b.id)

        rows = await assigned_rows(db, shift.id)
        assert len(rows) == 1
        assert rows[0].id == first.assignment_id
        assert rows[0].user_id == employee_b.id
        assert second.updated == first.assignment_id

    async def test_clear_assignee(self, db, shift, employee_a):
        first = await assignment_service.reconcile(db, shift.id, employee_a.id)
        cleared = await assignment_service.reconcile(db, shift.id, None)

        assert await assigned_rows(db, shift.id) == []
        assert cleared.removed == [first.assignment_id]

    async def test_clear_when_already_empty(self, db, shift):
        result = await assignment_service.reconcile(db, shift.id, None)
        assert not result.changed

    async def test_collapses_duplicates_to_desired(self, db, shift, employee_a, employee_b):
        """기존 중복 배정 중 desired 행만 남김."""
        carol = await make_user(db, "Carol")
        for user, minute in ((employee_a, 0), (employee_b, 1), (carol, 2)):
            db.add(Assignment(
                shift_id=shift.id,
                user_id=user.id,
                status="assigned",
                created_at=datetime(2026, 3, 1, 12, minute, tzinfo=timezone.utc),
            ))
        await db.flush()

        result = await assignment_service.reconcile(db, shift.id, employee_b.id)

        rows = await assigned_rows(db, shift.id)
        assert [r.user_id for r in rows] == [employee_b.id]
        assert len(result.removed) == 2

    async def test_duplicates_repoint_oldest_row(self, db, shift, employee_a, employee_b):
        """desired가 없으면 가장 오래된 행을 변경하고 나머지 삭제."""
        carol = await make_user(db, "Carol")
        oldest = Assignment(
            shift_id=shift.id, user_id=employee_a.id, status="assigned",
            created_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        )
        newer = Assignment(
            shift_id=shift.id, user_id=employee_b.id, status="assigned",
            created_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc) + timedelta(minutes=5),
        )
        db.add_all([oldest, newer])
        await db.flush()
        oldest_id, newer_id = oldest.id, newer.id

        result = await assignment_service.reconcile(db, shift.id, carol.id)

        rows = await assigned_rows(db, shift.id)
        assert len(rows) == 1
        assert rows[0].id == oldest_id
        assert rows[0].user_id == carol.id
        assert result.removed == [newer_id]

    async def test_promotes_existing_non_assigned_row(self, db, shift, employee_a, employee_b):
        """(shift, user) 고유 제약 — desired의 requested 행을 assigned로 승격."""
        db.add_all([
            Assignment(shift_id=shift.id, user_id=employee_a.id, status="assigned"),
            Assignment(shift_id=shift.id, user_id=employee_b.id, status="requested"),
        ])
        await db.flush()

        result = await assignment_service.reconcile(db, shift.id, employee_b.id)

        rows = await assigned_rows(db, shift.id)
        assert [r.user_id for r in rows] == [employee_b.id]
        assert result.updated == rows[0].id
        assert len(result.removed) == 1

    async def test_records_audit_entry(self, db, shift, employee_a, manager_user):
        await assignment_service.reconcile(db, shift.id, employee_a.id, actor_id=manager_user.id)

        entries = await audit_repository.list_by_action(db, "assignment_changed")
        assert len(entries) == 1
        assert entries[0].user_id == manager_user.id
        assert entries[0].details["user_id"] == str(employee_a.id)

    async def test_unknown_shift(self, db, employee_a):
        with pytest.raises(NotFoundError):
            await assignment_service.reconcile(db, uuid.uuid4(), employee_a.id)


class TestResolveAssignee:
    """담당자 유효성."""

    async def test_none_is_allowed(self, db):
        assert await assignment_service.resolve_assignee(db, None) is None

    async def test_active_user(self, db, employee_a):
        user = await assignment_service.resolve_assignee(db, employee_a.id)
        assert user.id == employee_a.id

    async def test_inactive_user_rejected(self, db):
        gone = await make_user(db, "Gone", is_active=False)
        with pytest.raises(InvalidAssigneeError) as exc:
            await assignment_service.resolve_assignee(db, gone.id)
        assert exc.value.detail["code"] == "invalid_assignee"
