"""
Leave management models package.
"""
from app.models.leave.leave_application import LeaveApplication
from app.models.leave.leave_balance import LeaveBalance
from app.models.leave.leave_monetization import LeaveMonetization
from app.models.leave.leave_type import LeaveType

__all__ = [
    "LeaveApplication",
    "LeaveBalance",
    "LeaveMonetization",
    "LeaveType",
]
