"""
Standard API response wrappers.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
]


class MessageResponse(BaseSchema):
    """Response carrying only a status message."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")


class ErrorDetail(BaseSchema):
    """Error body returned for every failed request."""

    code: str = Field(..., description="Stable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional context")


class ErrorResponse(BaseSchema):
    """Standard error envelope."""

    detail: ErrorDetail
