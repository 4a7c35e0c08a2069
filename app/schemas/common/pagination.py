"""
Pagination schemas for page-based responses.
"""

from __future__ import annotations

from typing import Generic, List, TypeVar

from pydantic import Field

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "PaginationMeta",
    "PaginatedResponse",
]


class PaginationMeta(BaseSchema):
    """Pagination metadata."""

    current_page: int = Field(..., ge=1, description="Current page number")
    per_page: int = Field(..., ge=1, description="Items per page")
    total_items: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")
    has_next: bool = Field(..., description="Whether a next page exists")
    has_previous: bool = Field(..., description="Whether a previous page exists")


class PaginatedResponse(BaseSchema, Generic[T]):
    """Page of items with pagination metadata."""

    items: List[T] = Field(default_factory=list, description="Items on this page")
    pagination: PaginationMeta
