"""
Common models module.
"""
from app.models.common.enums import LeaveStatus, Permission, UserStatus

__all__ = ["LeaveStatus", "Permission", "UserStatus"]
