"""
Leave type catalog model.
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel

__all__ = ["LeaveType"]


class LeaveType(TimestampModel):
    """
    Catalog entry for a kind of leave (Vacation, Sick, ...).

    Deactivated types stay in the table so historical applications and
    ledger rows keep their reference.
    """

    __tablename__ = "leave_types"
    __table_args__ = (
        CheckConstraint(
            "max_days IS NULL OR max_days >= 0",
            name="ck_leave_type_max_days_non_negative"
        ),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    max_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    requires_document: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
