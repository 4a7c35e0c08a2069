"""
Authentication and authorization services.
"""

from app.services.auth.access_guard import (
    Principal,
    has_all,
    has_any,
    has_one,
    require_all,
    require_any,
    require_one,
)
from app.services.auth.authentication_service import AuthenticationService, IssuedToken
from app.services.auth.permission_resolver import PermissionResolver
from app.services.auth.session_validator import Identity, SessionValidator

__all__ = [
    "Principal",
    "has_all",
    "has_any",
    "has_one",
    "require_all",
    "require_any",
    "require_one",
    "AuthenticationService",
    "IssuedToken",
    "PermissionResolver",
    "Identity",
    "SessionValidator",
]
