"""
Leave ledger service.

Owns every change to ``used_credits``. Ledger rows are keyed by
(personnel, leave type, calendar year) and keep
``0 <= used_credits <= total_credits``; remaining credit is derived on
read.

``increment_used`` is the in-transaction primitive used by leave
approval and raises on integrity violations so the caller's whole
transaction rolls back. The remaining operations manage their own
transactions and return ServiceResult.
"""

from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ErrorCode,
    LedgerError,
    ResourceNotFoundError,
    ValidationError,
)
from app.models.leave.leave_balance import LeaveBalance
from app.repositories.leave import LeaveBalanceRepository, LeaveTypeRepository
from app.services.base import BaseService, ServiceResult


class LeaveBalanceService(BaseService[LeaveBalance, LeaveBalanceRepository]):
    """
    Ledger operations for leave credits.
    """

    def __init__(
        self,
        balance_repository: LeaveBalanceRepository,
        leave_type_repository: LeaveTypeRepository,
        db_session: Session,
        today_provider: Callable[[], date] = date.today,
    ):
        super().__init__(balance_repository, db_session)
        self.balance_repository = balance_repository
        self.leave_type_repository = leave_type_repository
        self._today = today_provider

    # -------------------------------------------------------------------------
    # Ledger mutations
    # -------------------------------------------------------------------------

    def initialize(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        total_credits: int,
    ) -> ServiceResult[LeaveBalance]:
        """
        Create or re-credit a ledger row.

        New rows start with zero used and earned credits. Lowering
        ``total_credits`` below what is already used is refused.
        """
        try:
            if total_credits < 0:
                raise ValidationError(
                    "total_credits must not be negative",
                    field_errors={"total_credits": ["must be >= 0"]},
                )
            if self.leave_type_repository.find_by_id(leave_type_id) is None:
                raise ResourceNotFoundError("Leave type", leave_type_id)

            with self.transaction():
                existing = self.balance_repository.find_ledger_row(
                    personnel_id, leave_type_id, year, for_update=True
                )
                if existing is not None and total_credits < existing.used_credits:
                    raise LedgerError(
                        "Total credits cannot be lower than credits already used",
                        ErrorCode.INSUFFICIENT_BALANCE,
                        {"used_credits": existing.used_credits, "requested_total": total_credits},
                    )
                row = self.balance_repository.upsert_ledger(
                    personnel_id, leave_type_id, year, total_credits
                )

            self._log_operation(
                "initialize leave balance",
                row.id,
                {"personnel_id": personnel_id, "year": year, "total_credits": total_credits},
            )
            return ServiceResult.success(row, message="Leave balance initialized")
        except Exception as e:
            return self._handle_exception(e, "initialize leave balance", personnel_id)

    def increment_used(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        days: int,
    ) -> LeaveBalance:
        """
        Charge ``days`` against a ledger row.

        Must run inside the caller's transaction; the row is locked for
        the rest of it.

        Raises:
            LedgerError: LEDGER_ROW_MISSING if no row exists for the key,
                INSUFFICIENT_BALANCE if the charge exceeds remaining credit
        """
        if days <= 0:
            raise ValidationError("days must be positive", field_errors={"days": ["must be > 0"]})
        return self._apply_delta(personnel_id, leave_type_id, year, days)

    def reverse_used(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        days: int,
    ) -> ServiceResult[LeaveBalance]:
        """Give back ``days`` previously charged; never below zero used."""
        try:
            if days <= 0:
                raise ValidationError("days must be positive", field_errors={"days": ["must be > 0"]})
            with self.transaction():
                row = self._apply_delta(personnel_id, leave_type_id, year, -days)
            self._log_operation("reverse used credits", row.id, {"days": days})
            return ServiceResult.success(row)
        except Exception as e:
            return self._handle_exception(e, "reverse used credits", personnel_id)

    def adjust_used(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        delta: int,
    ) -> ServiceResult[LeaveBalance]:
        """Administrative correction of ``used_credits`` by ``delta``."""
        try:
            if delta == 0:
                raise ValidationError("delta must not be zero", field_errors={"delta": ["must not be 0"]})
            with self.transaction():
                row = self._apply_delta(personnel_id, leave_type_id, year, delta)
            self._log_operation("adjust used credits", row.id, {"delta": delta})
            return ServiceResult.success(row)
        except Exception as e:
            return self._handle_exception(e, "adjust used credits", personnel_id)

    def _apply_delta(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
        delta: int,
    ) -> LeaveBalance:
        row = self.balance_repository.find_ledger_row(
            personnel_id, leave_type_id, year, for_update=True
        )
        if row is None:
            raise LedgerError(
                "No leave balance exists for this leave type and year",
                ErrorCode.LEDGER_ROW_MISSING,
                {"personnel_id": personnel_id, "leave_type_id": leave_type_id, "year": year},
            )

        if not self.balance_repository.increment_used(row, delta):
            if delta > 0:
                raise LedgerError(
                    "Insufficient leave balance",
                    ErrorCode.INSUFFICIENT_BALANCE,
                    {"remaining_credits": row.remaining_credits, "requested": delta},
                )
            raise ValidationError(
                "Cannot reverse more credits than have been used",
                field_errors={"days": [f"at most {row.used_credits}"]},
            )
        return row

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_balances(
        self,
        personnel_id: str,
        year: Optional[int] = None,
    ) -> ServiceResult[List[LeaveBalance]]:
        try:
            return ServiceResult.success(
                self.balance_repository.find_for_personnel(personnel_id, year)
            )
        except Exception as e:
            return self._handle_exception(e, "get leave balances", personnel_id)

    def get_balance(
        self,
        personnel_id: str,
        leave_type_id: str,
        year: int,
    ) -> ServiceResult[LeaveBalance]:
        try:
            row = self.balance_repository.find_ledger_row(personnel_id, leave_type_id, year)
            if row is None:
                return ServiceResult.not_found("Leave balance")
            return ServiceResult.success(row)
        except Exception as e:
            return self._handle_exception(e, "get leave balance", personnel_id)

    def get_my_balances(self, personnel_id: str) -> ServiceResult[List[LeaveBalance]]:
        """Current-year ledger rows of one personnel member."""
        return self.get_balances(personnel_id, self._today().year)
