"""
Current-session schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import Field

from app.models.common.enums import Permission
from app.schemas.common.base import BaseSchema

__all__ = ["CurrentUserResponse"]


class CurrentUserResponse(BaseSchema):
    """Identity and effective permissions of the caller."""

    user_id: str
    username: str
    last_activity: datetime
    permissions: List[Permission] = Field(default_factory=list)
