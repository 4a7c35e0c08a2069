"""
Leave Balance Repository

Ledger rows keyed by (personnel, leave type, year). ``used_credits`` is
only ever changed through ``increment_used``, a conditional UPDATE that
keeps ``0 <= used_credits <= total_credits`` in the database itself.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.leave.leave_balance import LeaveBalance
from app.repositories.base.base_repository import BaseRepository


class LeaveBalanceRepository(BaseRepository[LeaveBalance]):
    """
    Leave ledger store.
    """

    def __init__(self, db: Session):
        super().__init__(LeaveBalance, db)

    def find_ledger_row(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        for_update: bool = False,
    ) -> Optional[LeaveBalance]:
        """
        Find the ledger row for a key.

        Args:
            personnel_id: Personnel ID
            leave_type_id: Leave type ID
            year: Calendar year
            for_update: Lock the row (SELECT ... FOR UPDATE) where the
                database supports it, and reload its current values

        Returns:
            Ledger row or None
        """
        stmt = select(LeaveBalance).where(
            LeaveBalance.personnel_id == personnel_id,
            LeaveBalance.leave_type_id == leave_type_id,
            LeaveBalance.year == year,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalars().first()

    def find_for_personnel(self, personnel_id: str, year: Optional[int] = None) -> List[LeaveBalance]:
        stmt = select(LeaveBalance).where(LeaveBalance.personnel_id == personnel_id)
        if year is not None:
            stmt = stmt.where(LeaveBalance.year == year)
        stmt = stmt.order_by(LeaveBalance.year.desc(), LeaveBalance.leave_type_id)
        return list(self.db.execute(stmt).scalars())

    def upsert_ledger(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        total_credits: int,
    ) -> LeaveBalance:
        """
        Create the row with zero usage, or set ``total_credits`` on the
        existing one. Callers check ``total_credits >= used_credits``.
        """
        row = self.find_ledger_row(personnel_id, leave_type_id, year, for_update=True)
        now = datetime.now(timezone.utc)
        if row is None:
            return self.create(
                LeaveBalance(
                    personnel_id=personnel_id,
                    leave_type_id=leave_type_id,
                    year=year,
                    total_credits=total_credits,
                    used_credits=0,
                    earned_credits=0,
                    last_updated=now,
                )
            )
        return self.update(row, {"total_credits": total_credits, "last_updated": now})

    def increment_used(self, row: LeaveBalance, delta: int) -> bool:
        """
        Add ``delta`` (either sign) to the row's ``used_credits``.

        Returns:
            True if applied, False if the result would leave the
            ``0 <= used_credits <= total_credits`` range
        """
        new_used = LeaveBalance.used_credits + delta
        stmt = (
            update(LeaveBalance)
            .where(
                LeaveBalance.id == row.id,
                new_used >= 0,
                new_used <= LeaveBalance.total_credits,
            )
            .values(used_credits=new_used, last_updated=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        applied = self.db.execute(stmt).rowcount == 1
        if applied:
            self.db.expire(row)
        return applied
