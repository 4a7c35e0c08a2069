"""
Role Repository - roles, their permission grants and user assignments.
"""
from typing import Iterable, List, Optional, Set

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.auth import Role, RolePermission, UserRole
from app.models.common.enums import Permission
from app.repositories.base.base_repository import BaseRepository
from app.core.logging import get_logger

logger = get_logger(__name__)


class RoleRepository(BaseRepository[Role]):
    """
    Repository for Role entity and its RolePermission / UserRole rows.
    """

    def __init__(self, db: Session):
        super().__init__(Role, db)

    # ==================== Roles ====================

    def list_roles(self, include_inactive: bool = True) -> List[Role]:
        stmt = select(Role).order_by(Role.name)
        if not include_inactive:
            stmt = stmt.where(Role.is_active.is_(True))
        return list(self.db.execute(stmt).scalars())

    def find_by_name(self, name: str) -> Optional[Role]:
        return self.find_one_by_criteria(name=name)

    def find_roles_by_ids(self, role_ids: Iterable[str]) -> List[Role]:
        ids = list(role_ids)
        if not ids:
            return []
        stmt = select(Role).where(Role.id.in_(ids))
        return list(self.db.execute(stmt).scalars())

    # ==================== Permission grants ====================

    def find_role_permissions(self, role_ids: Iterable[str]) -> List[Permission]:
        """
        Permission grants of the given roles; duplicates across roles are
        returned as stored.
        """
        ids = list(role_ids)
        if not ids:
            return []
        stmt = select(RolePermission.permission).where(RolePermission.role_id.in_(ids))
        return list(self.db.execute(stmt).scalars())

    def replace_role_permissions(
        self,
        role_id: str,
        permissions: Iterable[Permission],
        granted_by: Optional[str] = None,
    ) -> List[RolePermission]:
        """
        Replace every grant of ``role_id`` with ``permissions``.

        Runs inside the caller's transaction.
        """
        self.db.execute(delete(RolePermission).where(RolePermission.role_id == role_id))
        self.db.expire_all()

        unique: List[Permission] = []
        seen: Set[Permission] = set()
        for permission in permissions:
            if permission not in seen:
                seen.add(permission)
                unique.append(permission)

        rows = [
            RolePermission(role_id=role_id, permission=permission, granted_by=granted_by)
            for permission in unique
        ]
        self.db.add_all(rows)
        self.db.flush()
        logger.debug(f"Replaced permissions of role {role_id}: {len(rows)} grants")
        return rows

    def remove_role_permission(self, role_id: str, permission: Permission) -> bool:
        result = self.db.execute(
            delete(RolePermission).where(
                RolePermission.role_id == role_id,
                RolePermission.permission == permission,
            )
        )
        return result.rowcount > 0

    # ==================== User assignments ====================

    def find_user_roles(self, user_id: str) -> List[UserRole]:
        stmt = select(UserRole).where(UserRole.user_id == user_id)
        return list(self.db.execute(stmt).scalars())

    def find_user_role(self, user_id: str, role_id: str) -> Optional[UserRole]:
        stmt = select(UserRole).where(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
        )
        return self.db.execute(stmt).scalars().first()

    def replace_user_roles(
        self,
        user_id: str,
        role_ids: Iterable[str],
        assigned_by: Optional[str] = None,
    ) -> List[UserRole]:
        """Replace every assignment of ``user_id`` with active ``role_ids``."""
        self.db.execute(delete(UserRole).where(UserRole.user_id == user_id))
        self.db.expire_all()

        rows = [
            UserRole(user_id=user_id, role_id=role_id, is_active=True, assigned_by=assigned_by)
            for role_id in dict.fromkeys(role_ids)
        ]
        self.db.add_all(rows)
        self.db.flush()
        return rows
