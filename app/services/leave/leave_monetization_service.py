"""
Leave monetization requests.

Requests follow the same Pending -> Approved | Rejected lifecycle as
leave applications, decided through a conditional write. Approval
records the payout amount only; it does not charge the leave ledger.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ErrorCode,
    ResourceNotFoundError,
    StateTransitionError,
    ValidationError,
)
from app.models.common.enums import LeaveStatus
from app.models.leave import LeaveMonetization
from app.repositories.leave import LeaveMonetizationRepository, LeaveTypeRepository
from app.services.base import BaseService, ServiceResult


class LeaveMonetizationService(BaseService[LeaveMonetization, LeaveMonetizationRepository]):
    """Create, decide and list monetization requests."""

    def __init__(
        self,
        monetization_repository: LeaveMonetizationRepository,
        leave_type_repository: LeaveTypeRepository,
        db_session: Session,
    ):
        super().__init__(monetization_repository, db_session)
        self.leave_type_repository = leave_type_repository

    def create(
        self,
        personnel_id: str,
        leave_type_id: str,
        days_to_monetize: int,
    ) -> ServiceResult[LeaveMonetization]:
        try:
            if days_to_monetize <= 0:
                raise ValidationError(
                    "days_to_monetize must be positive",
                    field_errors={"days_to_monetize": ["must be > 0"]},
                )
            leave_type = self.leave_type_repository.find_by_id(leave_type_id)
            if leave_type is None or not leave_type.is_active:
                raise ResourceNotFoundError("Leave type", leave_type_id)

            with self.transaction():
                request = self.repository.create(
                    LeaveMonetization(
                        personnel_id=personnel_id,
                        leave_type_id=leave_type_id,
                        days_to_monetize=days_to_monetize,
                        status=LeaveStatus.PENDING,
                        request_date=datetime.now(timezone.utc),
                    )
                )
            self._log_operation("create monetization request", request.id, {"days": days_to_monetize})
            return ServiceResult.success(request, message="Monetization request submitted")
        except Exception as e:
            return self._handle_exception(e, "create monetization request", personnel_id)

    def approve(
        self,
        request_id: str,
        approver_id: str,
        amount: Optional[Decimal] = None,
    ) -> ServiceResult[LeaveMonetization]:
        return self._decide(request_id, approver_id, LeaveStatus.APPROVED, amount)

    def reject(self, request_id: str, approver_id: str) -> ServiceResult[LeaveMonetization]:
        return self._decide(request_id, approver_id, LeaveStatus.REJECTED)

    def list(
        self,
        status: Optional[LeaveStatus] = None,
        personnel_id: Optional[str] = None,
    ) -> ServiceResult[List[LeaveMonetization]]:
        try:
            return ServiceResult.success(self.repository.search(status=status, personnel_id=personnel_id))
        except Exception as e:
            return self._handle_exception(e, "list monetization requests")

    def _decide(
        self,
        request_id: str,
        approver_id: str,
        to_status: LeaveStatus,
        amount: Optional[Decimal] = None,
    ) -> ServiceResult[LeaveMonetization]:
        operation = f"{'approve' if to_status == LeaveStatus.APPROVED else 'reject'} monetization request"
        try:
            if amount is not None and amount < 0:
                raise ValidationError("amount must not be negative", field_errors={"amount": ["must be >= 0"]})

            request = self.repository.find_request(request_id)
            if request is None:
                raise ResourceNotFoundError("Monetization request", request_id)

            with self.transaction():
                if not self.repository.update_request_status(
                    request_id,
                    to_status,
                    approved_by=approver_id,
                    approval_date=datetime.now(timezone.utc),
                    amount=amount,
                ):
                    current = self.repository.find_request(request_id, refresh=True)
                    raise StateTransitionError(
                        "Monetization request is not pending",
                        ErrorCode.NOT_PENDING,
                        current.status.value if current else None,
                    )

            request = self.repository.find_request(request_id, refresh=True)
            self._log_operation(operation, request_id, {"approver_id": approver_id})
            return ServiceResult.success(request)
        except Exception as e:
            return self._handle_exception(e, operation, request_id)
