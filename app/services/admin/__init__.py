"""
Administration services.
"""

from app.services.admin.role_service import RoleService

__all__ = ["RoleService"]
