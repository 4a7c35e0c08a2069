"""
Role and permission administration endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.common.enums import Permission
from app.schemas.admin import (
    AssignmentStatusUpdate,
    RoleCreate,
    RolePermissionsResponse,
    RolePermissionsUpdate,
    RoleResponse,
    UserPermissionsResponse,
    UserRoleResponse,
    UserRolesUpdate,
)
from app.schemas.common import MessageResponse
from app.services.admin import RoleService
from app.services.auth import Principal

router = APIRouter(tags=["Roles & Permissions"])


# ============================================================================
# PERMISSIONS & ROLES
# ============================================================================


@router.get("/permissions", response_model=List[Permission])
def list_permissions(
    _: Principal = Depends(deps.require_permission(Permission.PERMISSION_READ)),
    service: RoleService = Depends(deps.get_role_service),
):
    """All permission names a role can be granted."""
    return deps.unwrap(service.list_permissions())


@router.get("/roles", response_model=List[RoleResponse])
def list_roles(
    _: Principal = Depends(deps.require_permission(Permission.ROLE_READ)),
    service: RoleService = Depends(deps.get_role_service),
):
    return [RoleResponse.model_validate(role) for role in deps.unwrap(service.list_roles())]


@router.post("/roles", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
def create_role(
    payload: RoleCreate,
    _: Principal = Depends(deps.require_permission(Permission.ROLE_CREATE)),
    service: RoleService = Depends(deps.get_role_service),
):
    return RoleResponse.model_validate(deps.unwrap(service.create_role(payload.name, payload.description)))


@router.get("/roles/{role_id}/permissions", response_model=RolePermissionsResponse)
def get_role_permissions(
    role_id: str,
    _: Principal = Depends(deps.require_any_permission(Permission.ROLE_READ, Permission.PERMISSION_READ)),
    service: RoleService = Depends(deps.get_role_service),
):
    permissions = deps.unwrap(service.get_role_permissions(role_id))
    return RolePermissionsResponse(role_id=role_id, permissions=permissions)


@router.put("/roles/{role_id}/permissions", response_model=RolePermissionsResponse)
def set_role_permissions(
    role_id: str,
    payload: RolePermissionsUpdate,
    principal: Principal = Depends(deps.require_permission(Permission.PERMISSION_UPDATE)),
    service: RoleService = Depends(deps.get_role_service),
):
    """Replace every permission granted to a role."""
    permissions = deps.unwrap(
        service.set_role_permissions(role_id, payload.permissions, granted_by=principal.user_id)
    )
    return RolePermissionsResponse(role_id=role_id, permissions=permissions)


@router.delete("/roles/{role_id}/permissions/{permission}", response_model=MessageResponse)
def remove_role_permission(
    role_id: str,
    permission: str,
    _: Principal = Depends(deps.require_permission(Permission.PERMISSION_UPDATE)),
    service: RoleService = Depends(deps.get_role_service),
):
    result = service.remove_role_permission(role_id, permission)
    deps.unwrap(result)
    return MessageResponse(message=result.message)


# ============================================================================
# USER ASSIGNMENTS
# ============================================================================


@router.get("/users/{user_id}/permissions", response_model=UserPermissionsResponse)
def get_user_permissions(
    user_id: str,
    _: Principal = Depends(deps.require_permission(Permission.USER_READ)),
    service: RoleService = Depends(deps.get_role_service),
):
    """Effective permissions of a user, as the access guard sees them."""
    permissions = deps.unwrap(service.get_user_permissions(user_id))
    return UserPermissionsResponse(user_id=user_id, permissions=permissions)


@router.put("/users/{user_id}/roles", response_model=List[UserRoleResponse])
def assign_roles(
    user_id: str,
    payload: UserRolesUpdate,
    principal: Principal = Depends(deps.require_permission(Permission.USER_UPDATE)),
    service: RoleService = Depends(deps.get_role_service),
):
    """Replace every role assignment of a user."""
    rows = deps.unwrap(service.assign_roles(user_id, payload.role_ids, assigned_by=principal.user_id))
    return [UserRoleResponse.model_validate(row) for row in rows]


@router.patch("/users/{user_id}/roles/{role_id}", response_model=UserRoleResponse)
def set_assignment_active(
    user_id: str,
    role_id: str,
    payload: AssignmentStatusUpdate,
    _: Principal = Depends(deps.require_permission(Permission.USER_UPDATE)),
    service: RoleService = Depends(deps.get_role_service),
):
    row = deps.unwrap(service.set_assignment_active(user_id, role_id, payload.is_active))
    return UserRoleResponse.model_validate(row)
