"""
Leave management services.
"""

from app.services.leave.leave_application_service import (
    LeaveApplicationService,
    calculate_total_days,
)
from app.services.leave.leave_balance_service import LeaveBalanceService
from app.services.leave.leave_monetization_service import LeaveMonetizationService
from app.services.leave.leave_type_service import LeaveTypeService

__all__ = [
    "LeaveApplicationService",
    "calculate_total_days",
    "LeaveBalanceService",
    "LeaveMonetizationService",
    "LeaveTypeService",
]
