"""초기 데이터 시드 스크립트 — 테이블 및 첫 관리자 계정 생성.

Seed script — Creates the tables and the first admin account.
Run once to bootstrap an empty database.

Usage:
    python -m shiftdesk.seed

Creates:
    - 1개 관리자 계정: admin@shiftdesk.local / admin1234 (1 admin user)

Idempotent: 활성 관리자가 이미 있으면 건너뜁니다 (Skips if an active admin exists).
"""

import asyncio

from shiftdesk.database import Base, async_session, engine
import shiftdesk.models  # noqa: F401 — register all models with metadata
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.staff import StaffCreate
from shiftdesk.services.staff_service import staff_service

SEED_ADMIN: StaffCreate = StaffCreate(
    name="Admin",
    email="admin@shiftdesk.local",
    role="admin",
    password="admin1234",
)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database: create tables from ORM metadata, then the first
    admin if there is no active admin yet.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if await user_repository.count_active_admins(db) > 0:
            print("Already seeded. Skipping.")
            return

        admin = await staff_service.create_staff(db, SEED_ADMIN)
        await db.commit()

    print("Seed complete!")
    print(f"  Admin: {admin.email} / {SEED_ADMIN.password}")


if __name__ == "__main__":
    asyncio.run(seed())
