"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Database, session and httpx client fixtures.
Runs on in-memory SQLite through aiosqlite by default; set
``TEST_DATABASE_URL`` (e.g. ``postgresql+asyncpg://…/test_shiftdesk``) to run
the same suite against PostgreSQL. The schema is recreated for every test.
"""

import os
from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from shiftdesk.config import settings

# 테스트에서는 bcrypt 비용을 최소로 — Cheapest bcrypt cost for tests
settings.BCRYPT_ROUNDS = 4

from shiftdesk.api.deps import get_now  # noqa: E402
from shiftdesk.database import Base, get_db  # noqa: E402
from shiftdesk.main import app  # noqa: E402
from shiftdesk.models import *  # noqa: F401,F403,E402 — register all models with metadata
from shiftdesk.models.user import User  # noqa: E402
from shiftdesk.utils.jwt import create_access_token  # noqa: E402
from shiftdesk.utils.password import hash_password  # noqa: E402

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL: str = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# 고정 현재 시각 — 2026-03-02(월) 08:00, 영업장 현지 시각
# Pinned "now": Monday 2026-03-02 08:00 business-local
FIXED_NOW: datetime = datetime(2026, 3, 2, 8, 0)


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 스키마를 새로 만듭니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        eng = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # SQLite는 FK(ON DELETE SET NULL/CASCADE)를 켜야 동작
        @event.listens_for(eng.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 현재 시각을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_user(
    db: AsyncSession,
    name: str,
    role: str = "employee",
    is_active: bool = True,
    password: str | None = "password123",
) -> User:
    """사용자를 직접 생성합니다 — Insert a user directly, bypassing the service."""
    user = User(
        name=name,
        email=f"{name.lower().replace(' ', '.')}@test.com",
        role=role,
        is_active=is_active,
        password_hash=hash_password(password) if password else None,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await make_user(db, "Admin", role="admin")


@pytest_asyncio.fixture
async def manager_user(db: AsyncSession) -> User:
    return await make_user(db, "Manager", role="manager")


@pytest_asyncio.fixture
async def employee_a(db: AsyncSession) -> User:
    return await make_user(db, "Alice")


@pytest_asyncio.fixture
async def employee_b(db: AsyncSession) -> User:
    return await make_user(db, "Bob")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token(user.id, user.role)


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return make_token(admin_user)


@pytest.fixture
def manager_token(manager_user: User) -> str:
    return make_token(manager_user)


@pytest.fixture
def employee_a_token(employee_a: User) -> str:
    return make_token(employee_a)


@pytest.fixture
def employee_b_token(employee_b: User) -> str:
    return make_token(employee_b)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
