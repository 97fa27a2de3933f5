"""앱 API 라우터 패키지 — 모든 앱(직원용) 엔드포인트 통합.

App API Router package — Aggregates the employee-facing endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - auth: 로그인 (Login)
    - schedule: 내 스케줄, 요약, 교대 가능 배정, 동료 (My schedule views)
    - time_off: 내 휴가 요청 (My time-off requests)
    - swaps: 내 교대 요청 (My swap requests)
"""

from fastapi import APIRouter

from shiftdesk.api.app.auth import router as auth_router
from shiftdesk.api.app.schedule import router as schedule_router
from shiftdesk.api.app.swaps import router as swaps_router
from shiftdesk.api.app.time_off import router as time_off_router

app_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 라우터 등록 — Register routers
# ---------------------------------------------------------------------------
app_router.include_router(auth_router, prefix="/auth", tags=["App Auth"])
# 스케줄: /schedule, /schedule/summary, /schedule/swap-eligible, /coworkers
app_router.include_router(schedule_router, tags=["App Schedule"])
app_router.include_router(time_off_router, prefix="/time-off", tags=["App Time-off"])
app_router.include_router(swaps_router, prefix="/swaps", tags=["App Swaps"])
