"""인증 API 테스트 — 로그인, /me, 토큰 검증.

Auth API tests — Login, the /me endpoint and bearer token checks,
including accounts deactivated after their token was issued.
"""

from httpx import AsyncClient

from shiftdesk.services.staff_service import StaffStatusAction, staff_service
from tests.conftest import auth_header, make_user

APP_AUTH = "/api/v1/app/auth"


class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, employee_a):
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "alice@test.com",
            "password": "password123",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["role"] == "employee"

    async def test_email_is_case_insensitive(self, client: AsyncClient, employee_a):
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "  ALICE@Test.com",
            "password": "password123",
        })
        assert res.status_code == 200

    async def test_wrong_password(self, client: AsyncClient, employee_a):
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "alice@test.com",
            "password": "wrong-password",
        })
        assert res.status_code == 401
        assert res.json()["detail"]["code"] == "unauthorized"

    async def test_unknown_email(self, client: AsyncClient):
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "nobody@test.com",
            "password": "password123",
        })
        assert res.status_code == 401

    async def test_inactive_user_rejected(self, client: AsyncClient, db):
        """비활성 사용자는 올바른 비밀번호로도 로그인 불가."""
        await make_user(db, "Gone", is_active=False)
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "gone@test.com",
            "password": "password123",
        })
        assert res.status_code == 401

    async def test_account_without_password(self, client: AsyncClient, db):
        await make_user(db, "Nopass", password=None)
        res = await client.post(f"{APP_AUTH}/login", json={
            "email": "nopass@test.com",
            "password": "password123",
        })
        assert res.status_code == 401


class TestMe:
    """/me 및 토큰 검증."""

    async def test_me(self, client: AsyncClient, manager_token):
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header(manager_token))
        assert res.status_code == 200
        assert res.json()["email"] == "manager@test.com"
        assert res.json()["role"] == "manager"

    async def test_missing_token(self, client: AsyncClient):
        res = await client.get(f"{APP_AUTH}/me")
        assert res.status_code == 401

    async def test_garbage_token(self, client: AsyncClient):
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401
        assert res.json()["detail"]["code"] == "unauthorized"

    async def test_deactivated_user_token_rejected(self, client: AsyncClient, db, employee_a, employee_a_token):
        """발급 후 비활성화된 사용자의 토큰은 거부."""
        await staff_service.set_staff_status(db, employee_a.id, StaffStatusAction.DEACTIVATE)
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header(employee_a_token))
        assert res.status_code == 401

    async def test_role_is_read_from_database(self, client: AsyncClient, db, employee_a, employee_a_token):
        """토큰 발급 후 승격되면 DB의 역할이 적용됨."""
        await staff_service.update_staff_role(db, employee_a.id, "manager")
        res = await client.get("/api/v1/admin/staff", headers=auth_header(employee_a_token))
        assert res.status_code == 200
