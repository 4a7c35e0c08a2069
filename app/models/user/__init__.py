"""
User models package initialization.
"""
from app.models.user.user import Personnel, User

__all__ = ["User", "Personnel"]
