"""
User Repository - credential store lookups for authentication and
role resolution.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.models.auth import Role, UserRole
from app.models.user import Personnel, User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User entity: identity lookups, personnel binding and
    active role assignments.
    """

    def __init__(self, db: Session):
        super().__init__(User, db)

    # ==================== Identity ====================

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.find_by_id(user_id)

    def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        """
        Find user by username or email address (email compared
        case-insensitively).
        """
        stmt = select(User).where(
            or_(
                User.username == identifier,
                func.lower(User.email) == identifier.lower(),
            )
        ).limit(1)
        return self.db.execute(stmt).scalars().first()

    def record_login(self, user: User) -> None:
        user.last_login = datetime.now(timezone.utc)
        self.db.flush()

    # ==================== Personnel ====================

    def find_personnel_by_user_id(self, user_id: str) -> Optional[Personnel]:
        stmt = select(Personnel).where(Personnel.user_id == user_id)
        return self.db.execute(stmt).scalars().first()

    def find_personnel_by_id(self, personnel_id: str) -> Optional[Personnel]:
        return self.db.get(Personnel, personnel_id)

    # ==================== Role assignments ====================

    def find_active_role_assignments(self, user_id: str) -> List[UserRole]:
        """
        Active assignments of active roles for a user.

        Inactive assignments and assignments to deactivated roles
        contribute nothing to the user's permissions.
        """
        stmt = (
            select(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .where(
                UserRole.user_id == user_id,
                UserRole.is_active.is_(True),
                Role.is_active.is_(True),
            )
        )
        return list(self.db.execute(stmt).scalars())
