"""
Leave management schemas.
"""

from app.schemas.leave.leave_application import (
    LeaveApplicationCreate,
    LeaveApplicationResponse,
    LeaveApplicationUpdate,
)
from app.schemas.leave.leave_balance import LeaveBalanceInitialize, LeaveBalanceResponse
from app.schemas.leave.leave_monetization import (
    MonetizationApprove,
    MonetizationCreate,
    MonetizationResponse,
)
from app.schemas.leave.leave_type import LeaveTypeCreate, LeaveTypeResponse, LeaveTypeUpdate

__all__ = [
    "LeaveApplicationCreate",
    "LeaveApplicationResponse",
    "LeaveApplicationUpdate",
    "LeaveBalanceInitialize",
    "LeaveBalanceResponse",
    "MonetizationApprove",
    "MonetizationCreate",
    "MonetizationResponse",
    "LeaveTypeCreate",
    "LeaveTypeResponse",
    "LeaveTypeUpdate",
]
