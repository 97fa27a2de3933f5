"""FastAPI 애플리케이션 엔트리포인트 — 로깅, 미들웨어 및 라우터 등록.

FastAPI application entry point — Logging, middleware and router
registration.

    uvicorn shiftdesk.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shiftdesk.api.admin import admin_router
from shiftdesk.api.app import app_router
from shiftdesk.config import settings
from shiftdesk.middleware.axiom_logging import AxiomLoggingMiddleware

# 서비스 로거 레벨 — Module loggers (shiftdesk.*) follow LOG_LEVEL
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# admin_router: 시프트, 직원, 요청 검토 (manager/admin)
# app_router: 로그인, 내 스케줄, 휴가/교대 요청 (any active user)
app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(app_router, prefix="/api/v1/app")
