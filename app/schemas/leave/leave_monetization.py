"""
Leave monetization schemas.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.common.enums import LeaveStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "MonetizationCreate",
    "MonetizationApprove",
    "MonetizationResponse",
]


class MonetizationCreate(BaseCreateSchema):
    leave_type_id: str = Field(..., min_length=1)
    days_to_monetize: int = Field(..., gt=0)


class MonetizationApprove(BaseSchema):
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class MonetizationResponse(BaseResponseSchema):
    personnel_id: str
    leave_type_id: str
    days_to_monetize: int
    status: LeaveStatus
    amount: Optional[Decimal] = None
    approved_by: Optional[str] = None
    approval_date: Optional[datetime] = None
    request_date: datetime
