"""
User account and personnel record models.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.common.enums import UserStatus
from app.models.common.types import value_enum

if TYPE_CHECKING:
    from app.models.auth.role import UserRole

__all__ = ["User", "Personnel"]


class User(TimestampModel):
    """
    Login identity.

    Only users with status Active may authenticate. A user owns at most
    one personnel record and any number of role assignments.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        value_enum(UserStatus, length=16),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    personnel: Mapped[Optional["Personnel"]] = relationship(
        back_populates="user",
        uselist=False,
    )
    user_roles: Mapped[List["UserRole"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        foreign_keys="UserRole.user_id",
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


class Personnel(TimestampModel):
    """HR profile bound one-to-one to a user account."""

    __tablename__ = "personnel"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    designation: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)

    user: Mapped[User] = relationship(back_populates="personnel")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
