"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per API request to Axiom: method, path, masked
query/body, status, duration and, for failures, the stable error ``code``
and message from the ``{"detail": {"code", "message"}}`` body. Password
and token fields are masked before anything leaves the process.

Without ``AXIOM_API_TOKEN``/``AXIOM_DATASET`` the middleware is a
pass-through.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shiftdesk.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields masked in request bodies and query strings
_SENSITIVE_KEYS = re.compile(r"(password|secret|token|authorization|credential)", re.IGNORECASE)

# 로깅 제외 경로 — Paths never logged
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DETAIL = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def error_fields(body: bytes) -> dict[str, Any]:
    """오류 응답 본문에서 코드와 메시지를 추출합니다.

    Pull ``code`` and ``message`` out of an error body. Validation errors
    from FastAPI (422) carry a list in ``detail``; it is kept as-is.
    """
    try:
        detail: Any = json.loads(body).get("detail")
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return {"error": body.decode("utf-8", errors="replace")[:_MAX_DETAIL]}

    if isinstance(detail, dict) and "code" in detail:
        return {"error_code": detail["code"], "error": str(detail.get("message", ""))[:_MAX_DETAIL]}
    return {"error": json.dumps(detail)[:_MAX_DETAIL]}


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request and response to Axiom.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _request_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        body: bytes = await request.body()
        if not body:
            return None
        try:
            return mask_sensitive(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    def _ship(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패는 요청에 영향 없음 — Log delivery never fails the request
            logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path, "status_code": 500}
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        request_body: Any = await self._request_body(request)
        if request_body is not None:
            event["request_body"] = request_body

        try:
            response: Response = await call_next(request)
            event["status_code"] = response.status_code

            if response.status_code >= 400:
                # 본문을 읽은 뒤 같은 내용으로 다시 감싸서 반환 — Re-wrap the consumed body
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event.update(error_fields(body))
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ship(event)

        return response
