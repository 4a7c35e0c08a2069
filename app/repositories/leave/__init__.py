"""
Leave repositories package.
"""

from app.repositories.leave.leave_application_repository import LeaveApplicationRepository
from app.repositories.leave.leave_balance_repository import LeaveBalanceRepository
from app.repositories.leave.leave_monetization_repository import LeaveMonetizationRepository
from app.repositories.leave.leave_type_repository import LeaveTypeRepository

__all__ = [
    "LeaveApplicationRepository",
    "LeaveBalanceRepository",
    "LeaveMonetizationRepository",
    "LeaveTypeRepository",
]
