"""
Authorization models package.
"""
from app.models.auth.role import Role, RolePermission, UserRole

__all__ = ["Role", "RolePermission", "UserRole"]
