"""
Leave ledger schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "LeaveBalanceInitialize",
    "LeaveBalanceResponse",
]


class LeaveBalanceInitialize(BaseCreateSchema):
    """Create or re-credit one ledger row."""

    personnel_id: str = Field(..., min_length=1)
    leave_type_id: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900, le=9999)
    total_credits: int = Field(..., ge=0)


class LeaveBalanceResponse(BaseSchema):
    id: str
    personnel_id: str
    leave_type_id: str
    year: int
    total_credits: int
    used_credits: int
    earned_credits: int
    remaining_credits: int = Field(..., description="total_credits - used_credits")
    last_updated: datetime
