"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates manager/admin endpoints into a single
router for inclusion in the FastAPI application.

Included routers:
    - shifts: 시프트 관리 (Shift management and assignment)
    - staff: 직원 계정 관리 (Staff accounts)
    - requests: 휴가/교대 요청 검토 (Time-off and swap review)
"""

from fastapi import APIRouter

from shiftdesk.api.admin.requests import router as requests_router
from shiftdesk.api.admin.shifts import router as shifts_router
from shiftdesk.api.admin.staff import router as staff_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 라우터 등록 — Register routers
# ---------------------------------------------------------------------------
admin_router.include_router(shifts_router, prefix="/shifts", tags=["Admin Shifts"])
admin_router.include_router(staff_router, prefix="/staff", tags=["Admin Staff"])
admin_router.include_router(requests_router, prefix="/requests", tags=["Admin Requests"])
