"""create_scheduling_schema

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 09:00:00.000000

직원, 시프트, 배정, 휴가/교대 요청, 감사 로그 테이블 생성.
Create users, shifts, assignments, time-off and swap requests, and the
audit log.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 직원 계정, 비활성화는 소프트 삭제 (soft delete via is_active)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', sa.String(20), server_default='employee', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_role_active', 'users', ['role', 'is_active'])

    # shifts — 시작/종료는 영업장 현지 시각 (business-local wall clock)
    op.create_table(
        'shifts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), server_default='published', nullable=False),
        sa.Column('created_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_shifts_start_time', 'shifts', ['start_time'])

    # assignments — (shift_id, user_id) 고유, 시프트와 함께 삭제
    op.create_table(
        'assignments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('shift_id', UUID(as_uuid=True), sa.ForeignKey('shifts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), server_default='assigned', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('shift_id', 'user_id', name='uq_assignment_shift_user'),
    )
    op.create_index('ix_assignments_shift_status', 'assignments', ['shift_id', 'status'])
    op.create_index('ix_assignments_user_status', 'assignments', ['user_id', 'status'])

    op.create_table(
        'time_off_requests',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('reviewed_by', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_time_off_requests_status', 'time_off_requests', ['status'])
    op.create_index('ix_time_off_requests_user', 'time_off_requests', ['user_id'])

    # shift_swap_requests — 배정 삭제 시 참조만 NULL, 요청은 이력으로 유지
    # Assignment deletion nulls the reference; the request stays as history
    op.create_table(
        'shift_swap_requests',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('original_assignment_id', UUID(as_uuid=True), sa.ForeignKey('assignments.id', ondelete='SET NULL'), nullable=True),
        sa.Column('requested_user_id', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('requested_by_id', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        'ix_shift_swap_requests_assignment_status',
        'shift_swap_requests',
        ['original_assignment_id', 'status'],
    )

    op.create_table(
        'audit_log',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('details', JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_audit_log_action_created', 'audit_log', ['action', 'created_at'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('shift_swap_requests')
    op.drop_table('time_off_requests')
    op.drop_table('assignments')
    op.drop_table('shifts')
    op.drop_table('users')
