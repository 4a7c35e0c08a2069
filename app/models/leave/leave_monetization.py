"""
Leave monetization request model.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.models.base.base_model import TimestampModel
from app.models.common.enums import LeaveStatus
from app.models.common.types import value_enum

if TYPE_CHECKING:
    from app.models.leave.leave_type import LeaveType

__all__ = ["LeaveMonetization"]


class LeaveMonetization(TimestampModel):
    """Request to convert unused leave days into pay."""

    __tablename__ = "leave_monetizations"
    __table_args__ = (
        CheckConstraint(
            "days_to_monetize > 0",
            name="ck_leave_monetization_days_positive"
        ),
    )

    personnel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("personnel.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    leave_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("leave_types.id"),
        nullable=False,
    )
    days_to_monetize: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        value_enum(LeaveStatus, length=16),
        nullable=False,
        default=LeaveStatus.PENDING,
    )
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    approved_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approval_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    request_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    leave_type: Mapped["LeaveType"] = relationship()
