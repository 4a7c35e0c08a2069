"""
Leave ledger model.

One row per (personnel, leave type, year). The row is the single source
of truth for remaining credit; ``remaining`` is derived on read and never
stored.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from app.models.leave.leave_type import LeaveType

__all__ = ["LeaveBalance"]


class LeaveBalance(TimestampModel):
    """
    Per-person, per-leave-type, per-year credit ledger row.
    """

    __tablename__ = "leave_balances"
    __table_args__ = (
        UniqueConstraint(
            "personnel_id",
            "leave_type_id",
            "year",
            name="uq_leave_balance_personnel_type_year"
        ),
        CheckConstraint(
            "total_credits >= 0",
            name="ck_leave_balance_total_non_negative"
        ),
        CheckConstraint(
            "used_credits >= 0",
            name="ck_leave_balance_used_non_negative"
        ),
        CheckConstraint(
            "used_credits <= total_credits",
            name="ck_leave_balance_used_within_total"
        ),
        CheckConstraint(
            "earned_credits >= 0",
            name="ck_leave_balance_earned_non_negative"
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
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    total_credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    used_credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    earned_credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    leave_type: Mapped["LeaveType"] = relationship()

    @property
    def remaining_credits(self) -> int:
        return self.total_credits - self.used_credits

    def __repr__(self) -> str:
        return (
            f"<LeaveBalance(personnel={self.personnel_id}, type={self.leave_type_id}, "
            f"year={self.year}, used={self.used_credits}/{self.total_credits})>"
        )
