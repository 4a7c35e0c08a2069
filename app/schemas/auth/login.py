"""
Login and token schemas.
Pydantic v2 compliant.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "LoginRequest",
    "TokenResponse",
]


class LoginRequest(BaseCreateSchema):
    """
    Username-or-email / password login request.
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Username or email address",
        examples=["jdoe"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User password",
    )

    @field_validator("password", mode="after")
    @classmethod
    def validate_password_not_empty(cls, v: str) -> str:
        """Ensure password is not just whitespace."""
        if not v.strip():
            raise ValueError("Password cannot be empty or whitespace")
        return v


class TokenResponse(BaseSchema):
    """Issued session token."""

    access_token: str = Field(..., description="Signed bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Hard lifetime in seconds")
    user_id: str = Field(..., description="Authenticated user id")
