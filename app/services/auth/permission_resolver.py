"""
Permission resolution: user -> effective permission set.
"""

from typing import FrozenSet

from sqlalchemy.orm import Session

from app.models.auth import Role
from app.models.common.enums import Permission
from app.repositories.auth import RoleRepository
from app.repositories.user import UserRepository
from app.services.base import BaseService


class PermissionResolver(BaseService[Role, RoleRepository]):
    """
    Computes the union of permissions granted through a user's active
    role assignments.

    Results are computed fresh on every call; a revoked grant or a
    deactivated assignment takes effect on the next request.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        db_session: Session,
    ):
        super().__init__(role_repository, db_session)
        self.user_repository = user_repository
        self.role_repository = role_repository

    def resolve(self, user_id: str) -> FrozenSet[Permission]:
        """
        Effective permissions of ``user_id``.

        A user without active assignments resolves to the empty set.
        """
        assignments = self.user_repository.find_active_role_assignments(user_id)
        if not assignments:
            return frozenset()

        permissions = frozenset(
            self.role_repository.find_role_permissions(a.role_id for a in assignments)
        )
        self._logger.debug(
            f"Resolved {len(permissions)} permissions for user {user_id}",
            extra={"role_count": len(assignments)},
        )
        return permissions
