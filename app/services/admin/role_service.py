"""
Role and permission administration.

Manages the permission grants of roles and the role assignments of
users. Permission names arriving from outside are validated against the
closed Permission enumeration before anything is written.
"""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    EntityAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from app.models.auth import Role, UserRole
from app.models.common.enums import Permission
from app.repositories.auth import RoleRepository
from app.repositories.user import UserRepository
from app.services.auth.permission_resolver import PermissionResolver
from app.services.base import BaseService, ServiceResult


def _parse_permissions(names: Iterable[str]) -> List[Permission]:
    try:
        return Permission.parse_many(names)
    except ValueError as e:
        raise ValidationError(str(e), field_errors={"permissions": [str(e)]}) from e


def _sorted(permissions: Iterable[Permission]) -> List[Permission]:
    return sorted(permissions, key=lambda p: p.value)


class RoleService(BaseService[Role, RoleRepository]):
    """
    Service for role definitions, role permissions and user assignments.
    """

    def __init__(
        self,
        role_repository: RoleRepository,
        user_repository: UserRepository,
        permission_resolver: PermissionResolver,
        db_session: Session,
    ):
        super().__init__(role_repository, db_session)
        self.role_repository = role_repository
        self.user_repository = user_repository
        self.permission_resolver = permission_resolver

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_permissions(self) -> ServiceResult[List[Permission]]:
        return ServiceResult.success(list(Permission))

    def list_roles(self) -> ServiceResult[List[Role]]:
        try:
            return ServiceResult.success(self.role_repository.list_roles())
        except Exception as e:
            return self._handle_exception(e, "list roles")

    def create_role(self, name: str, description: Optional[str] = None) -> ServiceResult[Role]:
        try:
            if self.role_repository.find_by_name(name) is not None:
                raise EntityAlreadyExistsError(f"Role '{name}' already exists", {"name": name})
            with self.transaction():
                role = self.role_repository.create(Role(name=name, description=description, is_active=True))
            self._log_operation("create role", role.id, {"role_name": name})
            return ServiceResult.success(role, message="Role created")
        except Exception as e:
            return self._handle_exception(e, "create role", name)

    # =========================================================================
    # Role permissions
    # =========================================================================

    def get_role_permissions(self, role_id: str) -> ServiceResult[List[Permission]]:
        try:
            self.role_repository.get_by_id(role_id)
            return ServiceResult.success(
                _sorted(set(self.role_repository.find_role_permissions([role_id])))
            )
        except Exception as e:
            return self._handle_exception(e, "get role permissions", role_id)

    def set_role_permissions(
        self,
        role_id: str,
        permission_names: Iterable[str],
        granted_by: Optional[str] = None,
    ) -> ServiceResult[List[Permission]]:
        """
        Replace all grants of a role.

        Any unknown permission name fails the whole call with
        VALIDATION_ERROR and leaves the existing grants untouched.
        """
        try:
            permissions = _parse_permissions(permission_names)
            self.role_repository.get_by_id(role_id)

            with self.transaction():
                rows = self.role_repository.replace_role_permissions(role_id, permissions, granted_by)

            granted = _sorted(row.permission for row in rows)
            self._log_operation(
                "set role permissions",
                role_id,
                {"permission_count": len(granted), "granted_by": granted_by},
            )
            return ServiceResult.success(granted, message="Role permissions updated")
        except Exception as e:
            return self._handle_exception(e, "set role permissions", role_id)

    def remove_role_permission(self, role_id: str, permission_name: str) -> ServiceResult[bool]:
        try:
            (permission,) = _parse_permissions([permission_name])
            self.role_repository.get_by_id(role_id)

            with self.transaction():
                removed = self.role_repository.remove_role_permission(role_id, permission)
            if not removed:
                raise ResourceNotFoundError(
                    "Role permission",
                    message=f"Permission '{permission.value}' is not granted to this role",
                )

            self._log_operation("remove role permission", role_id, {"permission": permission.value})
            return ServiceResult.success(True, message="Permission removed from role")
        except Exception as e:
            return self._handle_exception(e, "remove role permission", role_id)

    # =========================================================================
    # User assignments
    # =========================================================================

    def assign_roles(
        self,
        user_id: str,
        role_ids: Iterable[str],
        assigned_by: Optional[str] = None,
    ) -> ServiceResult[List[UserRole]]:
        """Replace all role assignments of a user with ``role_ids``."""
        try:
            wanted = list(dict.fromkeys(role_ids))
            if self.user_repository.find_user_by_id(user_id) is None:
                raise ResourceNotFoundError("User", user_id)

            found = {role.id for role in self.role_repository.find_roles_by_ids(wanted)}
            missing = [role_id for role_id in wanted if role_id not in found]
            if missing:
                raise ValidationError(
                    "Unknown role ids",
                    field_errors={"role_ids": missing},
                )

            with self.transaction():
                rows = self.role_repository.replace_user_roles(user_id, wanted, assigned_by)

            self._log_operation("assign roles", user_id, {"role_count": len(rows), "assigned_by": assigned_by})
            return ServiceResult.success(rows, message="Roles assigned")
        except Exception as e:
            return self._handle_exception(e, "assign roles", user_id)

    def set_assignment_active(
        self,
        user_id: str,
        role_id: str,
        is_active: bool,
    ) -> ServiceResult[UserRole]:
        try:
            assignment = self.role_repository.find_user_role(user_id, role_id)
            if assignment is None:
                raise ResourceNotFoundError("Role assignment", f"{user_id}/{role_id}")

            with self.transaction():
                assignment = self.role_repository.update(assignment, {"is_active": is_active})

            self._log_operation(
                "set role assignment active",
                user_id,
                {"role_id": role_id, "is_active": is_active},
            )
            return ServiceResult.success(assignment)
        except Exception as e:
            return self._handle_exception(e, "set role assignment active", user_id)

    def get_user_permissions(self, user_id: str) -> ServiceResult[List[Permission]]:
        try:
            if self.user_repository.find_user_by_id(user_id) is None:
                raise ResourceNotFoundError("User", user_id)
            return ServiceResult.success(_sorted(self.permission_resolver.resolve(user_id)))
        except Exception as e:
            return self._handle_exception(e, "get user permissions", user_id)
