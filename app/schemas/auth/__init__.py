"""
Authentication schemas.
"""

from app.schemas.auth.login import LoginRequest, TokenResponse
from app.schemas.auth.session import CurrentUserResponse

__all__ = ["LoginRequest", "TokenResponse", "CurrentUserResponse"]
