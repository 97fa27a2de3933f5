"""공통 Pydantic 스키마 — Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """단순 메시지 응답 — Plain message response.

    Attributes:
        message: 결과 메시지 (Result message)
    """

    message: str
