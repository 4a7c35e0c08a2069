"""
Leave Monetization Repository
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.common.enums import LeaveStatus
from app.models.leave.leave_monetization import LeaveMonetization
from app.repositories.base.base_repository import BaseRepository


class LeaveMonetizationRepository(BaseRepository[LeaveMonetization]):
    """Monetization request store."""

    def __init__(self, db: Session):
        super().__init__(LeaveMonetization, db)

    def find_request(self, request_id: str, refresh: bool = False) -> Optional[LeaveMonetization]:
        return self.db.get(LeaveMonetization, request_id, populate_existing=refresh)

    def search(
        self,
        status: Optional[LeaveStatus] = None,
        personnel_id: Optional[str] = None,
    ) -> List[LeaveMonetization]:
        stmt = select(LeaveMonetization)
        if status is not None:
            stmt = stmt.where(LeaveMonetization.status == status)
        if personnel_id:
            stmt = stmt.where(LeaveMonetization.personnel_id == personnel_id)
        stmt = stmt.order_by(LeaveMonetization.request_date.desc())
        return list(self.db.execute(stmt).scalars())

    def update_request_status(
        self,
        request_id: str,
        to_status: LeaveStatus,
        approved_by: str,
        approval_date: datetime,
        amount: Optional[Decimal] = None,
    ) -> bool:
        """Decide a request that is still Pending; False if it is not."""
        values = {
            "status": to_status,
            "approved_by": approved_by,
            "approval_date": approval_date,
        }
        if amount is not None:
            values["amount"] = amount
        stmt = (
            update(LeaveMonetization)
            .where(
                LeaveMonetization.id == request_id,
                LeaveMonetization.status == LeaveStatus.PENDING,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1
