"""
schemas/common.py

- Shared schemas used across the API (pydantic v2)
  1) error response: ErrorDetail, ErrorResponse
  2) success envelope: SuccessEnvelope[T], ok()
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) Error response
# =========================================================

class ErrorDetail(BaseModel):
    """Smallest unit carrying an error code/message"""
    code: str = Field(..., description="error code (e.g. INTERNAL_ERROR, INVALID_GRADE)")
    message: str = Field(..., description="human readable message")


class ErrorResponse(BaseModel):
    """
    Standard error body returned by the global handlers
    (middlewares/error_handler.py)
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="response time (UTC)"
    )
    latency_ms: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) Success envelope
# =========================================================

T = TypeVar("T")

class SuccessEnvelope(BaseModel, Generic[T]):
    """
    - success: always True
    - data: payload
    - message: short status text
    """
    success: bool = True
    data: T
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def ok(data, message: Optional[str] = None) -> dict:
    return {"success": True, "data": data, "message": message}
