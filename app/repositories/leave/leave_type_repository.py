"""
Leave Type Repository
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.leave.leave_type import LeaveType
from app.repositories.base.base_repository import BaseRepository


class LeaveTypeRepository(BaseRepository[LeaveType]):
    """Leave type catalog store."""

    def __init__(self, db: Session):
        super().__init__(LeaveType, db)

    def find_active(self) -> List[LeaveType]:
        stmt = select(LeaveType).where(LeaveType.is_active.is_(True)).order_by(LeaveType.name)
        return list(self.db.execute(stmt).scalars())

    def find_by_name(self, name: str) -> Optional[LeaveType]:
        return self.find_one_by_criteria(name=name)
