"""
Administration schemas.
"""

from app.schemas.admin.role import (
    AssignmentStatusUpdate,
    RoleCreate,
    RolePermissionsResponse,
    RolePermissionsUpdate,
    RoleResponse,
    UserPermissionsResponse,
    UserRoleResponse,
    UserRolesUpdate,
)

__all__ = [
    "AssignmentStatusUpdate",
    "RoleCreate",
    "RolePermissionsResponse",
    "RolePermissionsUpdate",
    "RoleResponse",
    "UserPermissionsResponse",
    "UserRoleResponse",
    "UserRolesUpdate",
]
