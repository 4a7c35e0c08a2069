"""
Leave application request and response schemas.

The date range itself is checked by the service so a reversed range is
reported as INVALID_RANGE rather than a generic validation failure.
"""

from __future__ import annotations

from datetime import date as Date
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from app.models.common.enums import LeaveStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema

__all__ = [
    "LeaveApplicationCreate",
    "LeaveApplicationUpdate",
    "LeaveApplicationResponse",
]


class LeaveApplicationCreate(BaseCreateSchema):
    """
    Leave application submitted by the caller for themselves.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "leave_type_id": "123e4567-e89b-12d3-a456-426614174000",
                "start_date": "2024-12-15",
                "end_date": "2024-12-20",
                "reason": "Family vacation",
            }
        }
    )

    leave_type_id: str = Field(..., min_length=1, description="Leave type identifier")
    start_date: Date = Field(..., description="First day of leave")
    end_date: Date = Field(..., description="Last day of leave (inclusive)")
    reason: str = Field(..., min_length=1, max_length=2000, description="Reason for leave")
    supporting_document: Optional[str] = Field(
        None,
        max_length=500,
        description="Reference to a supporting document",
    )


class LeaveApplicationUpdate(BaseUpdateSchema):
    """Partial edit of a pending application."""

    leave_type_id: Optional[str] = Field(None, min_length=1)
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None
    reason: Optional[str] = Field(None, min_length=1, max_length=2000)
    supporting_document: Optional[str] = Field(None, max_length=500)


class LeaveApplicationResponse(BaseResponseSchema):
    personnel_id: str
    leave_type_id: str
    start_date: Date
    end_date: Date
    total_days: int
    status: LeaveStatus
    reason: str
    supporting_document: Optional[str] = None
    request_date: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
