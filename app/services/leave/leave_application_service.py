"""
Leave application lifecycle.

Applications are created Pending and move exactly once, to Approved or
Rejected. Only the owner may edit or cancel, and only while Pending.
Approval charges the application's days to the ledger row of the
current calendar year in the same transaction as the status change.

Every transition is a conditional write guarded on ``status = Pending``:
of two concurrent deciders only one can win, and the loser is told the
application is no longer pending.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ErrorCode,
    InvalidDateRangeError,
    ResourceNotFoundError,
    StateTransitionError,
)
from app.models.common.enums import LeaveStatus
from app.models.leave import LeaveApplication, LeaveType
from app.repositories.base.pagination import PaginatedResult, PaginationParams
from app.repositories.leave import LeaveApplicationRepository, LeaveTypeRepository
from app.services.base import BaseService, ServiceResult
from app.services.leave.leave_balance_service import LeaveBalanceService


def calculate_total_days(start_date: date, end_date: date) -> int:
    """
    Inclusive length of a leave range in calendar days.

    Raises:
        InvalidDateRangeError: If ``end_date`` is before ``start_date``
    """
    if end_date < start_date:
        raise InvalidDateRangeError()
    return (end_date - start_date).days + 1


class LeaveApplicationService(BaseService[LeaveApplication, LeaveApplicationRepository]):
    """
    State machine for leave applications.
    """

    def __init__(
        self,
        application_repository: LeaveApplicationRepository,
        leave_type_repository: LeaveTypeRepository,
        balance_service: LeaveBalanceService,
        db_session: Session,
        today_provider: Callable[[], date] = date.today,
    ):
        super().__init__(application_repository, db_session)
        self.application_repository = application_repository
        self.leave_type_repository = leave_type_repository
        self.balance_service = balance_service
        self._today = today_provider

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def create(
        self,
        personnel_id: str,
        leave_type_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        supporting_document: Optional[str] = None,
    ) -> ServiceResult[LeaveApplication]:
        """
        Submit a new application in Pending status. No ledger effect.
        """
        try:
            total_days = calculate_total_days(start_date, end_date)
            self._get_active_leave_type(leave_type_id)

            with self.transaction():
                application = self.application_repository.create(
                    LeaveApplication(
                        personnel_id=personnel_id,
                        leave_type_id=leave_type_id,
                        start_date=start_date,
                        end_date=end_date,
                        total_days=total_days,
                        status=LeaveStatus.PENDING,
                        reason=reason,
                        supporting_document=supporting_document,
                        request_date=datetime.now(timezone.utc),
                    )
                )

            self._log_operation(
                "create leave application",
                application.id,
                {"personnel_id": personnel_id, "total_days": total_days},
            )
            return ServiceResult.success(application, message="Leave application submitted")
        except Exception as e:
            return self._handle_exception(e, "create leave application", personnel_id)

    def edit(
        self,
        application_id: str,
        personnel_id: str,
        changes: Dict[str, Any],
    ) -> ServiceResult[LeaveApplication]:
        """
        Change a Pending application owned by ``personnel_id``.

        ``changes`` may hold ``leave_type_id``, ``start_date``,
        ``end_date``, ``reason`` and ``supporting_document``; ``total_days``
        is recomputed whenever a date changes.
        """
        try:
            application = self._get_owned(application_id, personnel_id)
            if application.status != LeaveStatus.PENDING:
                raise StateTransitionError(
                    "Only pending leave applications can be edited",
                    ErrorCode.NOT_EDITABLE,
                    application.status.value,
                )

            values = self._edit_values(application, changes)
            if not values:
                return ServiceResult.success(application)

            with self.transaction():
                if not self.application_repository.update_pending_fields(
                    application_id, personnel_id, values
                ):
                    self._raise_lost_race(
                        application_id,
                        "Only pending leave applications can be edited",
                        ErrorCode.NOT_EDITABLE,
                    )

            application = self.application_repository.find_application(application_id, refresh=True)
            self._log_operation("edit leave application", application_id, {"fields": sorted(values)})
            return ServiceResult.success(application, message="Leave application updated")
        except Exception as e:
            return self._handle_exception(e, "edit leave application", application_id)

    def cancel(self, application_id: str, personnel_id: str) -> ServiceResult[bool]:
        """Withdraw (delete) a Pending application owned by ``personnel_id``."""
        try:
            application = self._get_owned(application_id, personnel_id)
            if application.status != LeaveStatus.PENDING:
                raise StateTransitionError(
                    "Only pending leave applications can be cancelled",
                    ErrorCode.NOT_CANCELLABLE,
                    application.status.value,
                )

            with self.transaction():
                if not self.application_repository.delete_pending(application_id, personnel_id):
                    self._raise_lost_race(
                        application_id,
                        "Only pending leave applications can be cancelled",
                        ErrorCode.NOT_CANCELLABLE,
                    )

            self._log_operation("cancel leave application", application_id)
            return ServiceResult.success(True, message="Leave application cancelled")
        except Exception as e:
            return self._handle_exception(e, "cancel leave application", application_id)

    def approve(self, application_id: str, approver_id: str) -> ServiceResult[LeaveApplication]:
        """
        Approve a Pending application and charge the ledger.

        The status change and the ledger charge commit together; a
        missing ledger row or insufficient credit rolls both back.
        """
        try:
            self._get_pending(application_id)
            year = self._today().year

            with self.transaction():
                if not self.application_repository.update_application_status(
                    application_id,
                    LeaveStatus.PENDING,
                    LeaveStatus.APPROVED,
                    reviewed_by=approver_id,
                    reviewed_at=datetime.now(timezone.utc),
                ):
                    self._raise_lost_race(
                        application_id,
                        "Leave application is no longer pending",
                        ErrorCode.NOT_PENDING,
                    )
                # The flipped row is locked; charge what was actually approved.
                approved = self.application_repository.find_application(application_id, refresh=True)
                self.balance_service.increment_used(
                    approved.personnel_id,
                    approved.leave_type_id,
                    year,
                    approved.total_days,
                )

            application = self.application_repository.find_application(application_id, refresh=True)
            self._log_operation(
                "approve leave application",
                application_id,
                {"approver_id": approver_id, "year": year, "days": application.total_days},
            )
            return ServiceResult.success(application, message="Leave application approved")
        except Exception as e:
            return self._handle_exception(e, "approve leave application", application_id)

    def reject(self, application_id: str, approver_id: str) -> ServiceResult[LeaveApplication]:
        """Reject a Pending application. No ledger effect."""
        try:
            self._get_pending(application_id)

            with self.transaction():
                if not self.application_repository.update_application_status(
                    application_id,
                    LeaveStatus.PENDING,
                    LeaveStatus.REJECTED,
                    reviewed_by=approver_id,
                    reviewed_at=datetime.now(timezone.utc),
                ):
                    self._raise_lost_race(
                        application_id,
                        "Leave application is no longer pending",
                        ErrorCode.NOT_PENDING,
                    )

            application = self.application_repository.find_application(application_id, refresh=True)
            self._log_operation("reject leave application", application_id, {"approver_id": approver_id})
            return ServiceResult.success(application, message="Leave application rejected")
        except Exception as e:
            return self._handle_exception(e, "reject leave application", application_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, application_id: str) -> ServiceResult[LeaveApplication]:
        try:
            application = self.application_repository.find_application(application_id)
            if application is None:
                return ServiceResult.not_found("Leave application", application_id)
            return ServiceResult.success(application)
        except Exception as e:
            return self._handle_exception(e, "get leave application", application_id)

    def list(
        self,
        pagination: PaginationParams,
        status: Optional[LeaveStatus] = None,
        leave_type_id: Optional[str] = None,
        personnel_id: Optional[str] = None,
        start_from: Optional[date] = None,
        end_to: Optional[date] = None,
    ) -> ServiceResult[PaginatedResult[LeaveApplication]]:
        try:
            page = self.application_repository.search(
                pagination,
                status=status,
                leave_type_id=leave_type_id,
                personnel_id=personnel_id,
                start_from=start_from,
                end_to=end_to,
            )
            return ServiceResult.success(page)
        except Exception as e:
            return self._handle_exception(e, "list leave applications")

    def list_for_personnel(self, personnel_id: str) -> ServiceResult[List[LeaveApplication]]:
        try:
            return ServiceResult.success(self.application_repository.find_by_personnel(personnel_id))
        except Exception as e:
            return self._handle_exception(e, "list own leave applications", personnel_id)

    def list_pending(self) -> ServiceResult[List[LeaveApplication]]:
        try:
            return ServiceResult.success(self.application_repository.find_pending())
        except Exception as e:
            return self._handle_exception(e, "list pending leave applications")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_active_leave_type(self, leave_type_id: str) -> LeaveType:
        leave_type = self.leave_type_repository.find_by_id(leave_type_id)
        if leave_type is None or not leave_type.is_active:
            raise ResourceNotFoundError("Leave type", leave_type_id)
        return leave_type

    def _get_owned(self, application_id: str, personnel_id: str) -> LeaveApplication:
        # Other people's applications are reported as missing, not forbidden.
        application = self.application_repository.find_application(application_id, refresh=True)
        if application is None or application.personnel_id != personnel_id:
            raise ResourceNotFoundError("Leave application", application_id)
        return application

    def _get_pending(self, application_id: str) -> LeaveApplication:
        application = self.application_repository.find_application(application_id)
        if application is None:
            raise ResourceNotFoundError("Leave application", application_id)
        if application.status != LeaveStatus.PENDING:
            raise StateTransitionError(
                "Leave application is not pending",
                ErrorCode.NOT_PENDING,
                application.status.value,
            )
        return application

    def _edit_values(self, application: LeaveApplication, changes: Dict[str, Any]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}

        start_date = changes.get("start_date") or application.start_date
        end_date = changes.get("end_date") or application.end_date
        if start_date != application.start_date or end_date != application.end_date:
            values["start_date"] = start_date
            values["end_date"] = end_date
            values["total_days"] = calculate_total_days(start_date, end_date)

        leave_type_id = changes.get("leave_type_id")
        if leave_type_id and leave_type_id != application.leave_type_id:
            self._get_active_leave_type(leave_type_id)
            values["leave_type_id"] = leave_type_id

        for key in ("reason", "supporting_document"):
            if changes.get(key) is not None:
                values[key] = changes[key]
        return values

    def _raise_lost_race(self, application_id: str, message: str, error_code: ErrorCode) -> None:
        current = self.application_repository.find_application(application_id, refresh=True)
        if current is None:
            raise ResourceNotFoundError("Leave application", application_id)
        raise StateTransitionError(message, error_code, current.status.value)
