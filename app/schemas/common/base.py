"""
Schema base classes.

Request bodies reject unknown fields; responses are built straight from
ORM rows (``from_attributes``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]


class BaseSchema(BaseModel):
    """Common configuration for every request and response model."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class BaseCreateSchema(BaseSchema):
    model_config = ConfigDict(extra="forbid")


class BaseUpdateSchema(BaseSchema):
    """
    Partial update body; every field of a subclass is Optional.
    """

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class BaseResponseSchema(BaseSchema):
    """Response for a persisted row: id plus audit timestamps."""

    id: str = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
