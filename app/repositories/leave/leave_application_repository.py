"""
Leave Application Repository

Lookups, filtered listings and the conditional writes that make every
status transition race-safe: an UPDATE or DELETE only touches the row
while it is still Pending, and the affected row count tells the caller
whether it won.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.models.common.enums import LeaveStatus
from app.models.leave.leave_application import LeaveApplication
from app.repositories.base.base_repository import BaseRepository
from app.repositories.base.pagination import PaginatedResult, PaginationParams


class LeaveApplicationRepository(BaseRepository[LeaveApplication]):
    """
    Leave application store.
    """

    def __init__(self, db: Session):
        super().__init__(LeaveApplication, db)

    # ============================================================================
    # LOOKUPS
    # ============================================================================

    def find_application(
        self,
        application_id: str,
        refresh: bool = False
    ) -> Optional[LeaveApplication]:
        """
        Find application by id.

        Args:
            application_id: Application ID
            refresh: Reload column values from the database even if the
                row is already in the session

        Returns:
            Leave application or None
        """
        return self.db.get(LeaveApplication, application_id, populate_existing=refresh)

    def find_by_personnel(self, personnel_id: str) -> List[LeaveApplication]:
        stmt = (
            select(LeaveApplication)
            .where(LeaveApplication.personnel_id == personnel_id)
            .order_by(LeaveApplication.request_date.desc(), LeaveApplication.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def find_pending(self) -> List[LeaveApplication]:
        stmt = (
            select(LeaveApplication)
            .where(LeaveApplication.status == LeaveStatus.PENDING)
            .order_by(LeaveApplication.request_date.asc())
        )
        return list(self.db.execute(stmt).scalars())

    def search(
        self,
        pagination: PaginationParams,
        status: Optional[LeaveStatus] = None,
        leave_type_id: Optional[str] = None,
        personnel_id: Optional[str] = None,
        start_from: Optional[date] = None,
        end_to: Optional[date] = None,
    ) -> PaginatedResult[LeaveApplication]:
        """
        Filtered, paginated listing, newest request first.

        Args:
            pagination: Page request
            status: Only applications in this status
            leave_type_id: Only applications of this leave type
            personnel_id: Only applications of this personnel member
            start_from: Only applications starting on or after this date
            end_to: Only applications ending on or before this date
        """
        stmt = select(LeaveApplication)
        if status is not None:
            stmt = stmt.where(LeaveApplication.status == status)
        if leave_type_id:
            stmt = stmt.where(LeaveApplication.leave_type_id == leave_type_id)
        if personnel_id:
            stmt = stmt.where(LeaveApplication.personnel_id == personnel_id)
        if start_from:
            stmt = stmt.where(LeaveApplication.start_date >= start_from)
        if end_to:
            stmt = stmt.where(LeaveApplication.end_date <= end_to)

        stmt = stmt.order_by(LeaveApplication.request_date.desc(), LeaveApplication.id)
        return self.paginate_query(stmt, pagination)

    # ============================================================================
    # CONDITIONAL WRITES
    # ============================================================================

    def update_application_status(
        self,
        application_id: str,
        from_status: LeaveStatus,
        to_status: LeaveStatus,
        reviewed_by: Optional[str] = None,
        reviewed_at: Optional[datetime] = None,
    ) -> bool:
        """
        Move an application from ``from_status`` to ``to_status``.

        Returns:
            True if this call performed the transition, False if the row
            was missing or no longer in ``from_status``
        """
        stmt = (
            update(LeaveApplication)
            .where(
                LeaveApplication.id == application_id,
                LeaveApplication.status == from_status,
            )
            .values(status=to_status, reviewed_by=reviewed_by, reviewed_at=reviewed_at)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1

    def update_pending_fields(
        self,
        application_id: str,
        personnel_id: str,
        values: Dict[str, Any],
    ) -> bool:
        """
        Update fields of an application still Pending and owned by
        ``personnel_id``.
        """
        stmt = (
            update(LeaveApplication)
            .where(
                LeaveApplication.id == application_id,
                LeaveApplication.personnel_id == personnel_id,
                LeaveApplication.status == LeaveStatus.PENDING,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1

    def delete_pending(self, application_id: str, personnel_id: str) -> bool:
        """Delete an application still Pending and owned by ``personnel_id``."""
        stmt = (
            delete(LeaveApplication)
            .where(
                LeaveApplication.id == application_id,
                LeaveApplication.personnel_id == personnel_id,
                LeaveApplication.status == LeaveStatus.PENDING,
            )
            .execution_options(synchronize_session=False)
        )
        deleted = self.db.execute(stmt).rowcount == 1
        if deleted:
            instance = self.db.identity_map.get(self.db.identity_key(LeaveApplication, application_id))
            if instance is not None:
                self.db.expunge(instance)
        return deleted
