"""
Role, permission and assignment schemas.

Permission names are accepted as plain strings and validated by the
service layer so an unknown name yields VALIDATION_ERROR for the whole
request rather than a partial write.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.models.common.enums import Permission
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "RoleCreate",
    "RoleResponse",
    "RolePermissionsUpdate",
    "RolePermissionsResponse",
    "UserRolesUpdate",
    "UserRoleResponse",
    "AssignmentStatusUpdate",
    "UserPermissionsResponse",
]


class RoleCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)


class RoleResponse(BaseResponseSchema):
    name: str
    description: Optional[str] = None
    is_active: bool


class RolePermissionsUpdate(BaseUpdateSchema):
    """Full replacement set of permission names for a role."""

    permissions: List[str] = Field(default_factory=list)


class RolePermissionsResponse(BaseSchema):
    role_id: str
    permissions: List[Permission]


class UserRolesUpdate(BaseUpdateSchema):
    """Full replacement set of role ids for a user."""

    role_ids: List[str] = Field(default_factory=list)


class UserRoleResponse(BaseSchema):
    user_id: str
    role_id: str
    is_active: bool
    assigned_by: Optional[str] = None


class AssignmentStatusUpdate(BaseUpdateSchema):
    is_active: bool


class UserPermissionsResponse(BaseSchema):
    user_id: str
    permissions: List[Permission]
