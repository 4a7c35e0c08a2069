# models/__init__.py
from .auth import Role, RolePermission, UserRole
from .base import Base, BaseModel, TimestampModel
from .common import LeaveStatus, Permission, UserStatus
from .leave import LeaveApplication, LeaveBalance, LeaveMonetization, LeaveType
from .user import Personnel, User

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "UserStatus",
    "LeaveStatus",
    "Permission",
    "User",
    "Personnel",
    "Role",
    "RolePermission",
    "UserRole",
    "LeaveType",
    "LeaveBalance",
    "LeaveApplication",
    "LeaveMonetization",
]
