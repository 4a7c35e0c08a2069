"""
Leave type schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema

__all__ = [
    "LeaveTypeCreate",
    "LeaveTypeUpdate",
    "LeaveTypeResponse",
]


class LeaveTypeCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    max_days: Optional[int] = Field(None, ge=0)
    requires_document: bool = False


class LeaveTypeUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    max_days: Optional[int] = Field(None, ge=0)
    requires_document: Optional[bool] = None


class LeaveTypeResponse(BaseResponseSchema):
    name: str
    description: Optional[str] = None
    max_days: Optional[int] = None
    requires_document: bool
    is_active: bool
