"""
Authorization repositories package.
"""

from app.repositories.auth.role_repository import RoleRepository

__all__ = ["RoleRepository"]
