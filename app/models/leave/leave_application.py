"""
Leave application model.

Status moves Pending -> Approved or Pending -> Rejected and never back.
``total_days`` is derived from the date range when the row is written.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.models.base.base_model import TimestampModel
from app.models.common.enums import LeaveStatus
from app.models.common.types import value_enum

if TYPE_CHECKING:
    from app.models.leave.leave_type import LeaveType
    from app.models.user.user import Personnel

__all__ = ["LeaveApplication"]


class LeaveApplication(TimestampModel):
    """
    Request by one personnel member for a contiguous leave period.
    """

    __tablename__ = "leave_applications"
    __table_args__ = (
        CheckConstraint(
            "end_date >= start_date",
            name="ck_leave_application_date_range"
        ),
        CheckConstraint(
            "total_days > 0",
            name="ck_leave_application_total_days_positive"
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
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_days: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        value_enum(LeaveStatus, length=16),
        nullable=False,
        default=LeaveStatus.PENDING,
        index=True,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    supporting_document: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    request_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    reviewed_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    leave_type: Mapped["LeaveType"] = relationship()
    personnel: Mapped["Personnel"] = relationship()

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    def __repr__(self) -> str:
        return (
            f"<LeaveApplication(id={self.id}, personnel={self.personnel_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )
