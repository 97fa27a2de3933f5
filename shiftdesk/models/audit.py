"""감사 로그 SQLAlchemy ORM 모델 정의.

Audit log SQLAlchemy ORM model definition.
Append-only trail of shift, assignment, staff and request mutations.

Tables:
    - audit_log: 변경 이력 (Change history)
"""

import uuid
from datetime import datetime, timezone
from typing import Any
from sqlalchemy import JSON, String, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from shiftdesk.database import Base


class AuditLog(Base):
    """감사 로그 모델.

    Audit log model. ``action`` is a short verb such as ``shift_created``,
    ``assignment_changed`` or ``swap_approved``; ``details`` holds the ids
    and values involved.
    """

    __tablename__ = "audit_log"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    # 수행자 FK — Acting user (nullable for scripts)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # PostgreSQL에서는 JSONB, 그 외에는 JSON (JSONB on PostgreSQL, JSON elsewhere)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_audit_log_action_created", "action", "created_at"),
    )
