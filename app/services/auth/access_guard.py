# app/services/auth/access_guard.py
"""
Permission checks over an authenticated principal.

``require_*`` raise; ``has_*`` are boolean twins for branching code.
A missing principal is an authentication failure, never a permission
failure, and permission failures never name the missing permission.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from app.core.exceptions import AuthenticationError, PermissionDenied
from app.models.common.enums import Permission


@dataclass(frozen=True)
class Principal:
    """
    Represents an authenticated user in the service layer.

    Attributes:
        user_id: Unique identifier for the user
        permissions: Resolved, deduplicated permission set
        username: Login name, when known
    """
    user_id: str
    permissions: FrozenSet[Permission] = field(default_factory=frozenset)
    username: Optional[str] = None


def _granted(principal: Optional[Principal]) -> FrozenSet[Permission]:
    if principal is None:
        raise AuthenticationError("Authentication required")
    return principal.permissions


def has_all(principal: Principal, required: Iterable[Permission]) -> bool:
    """True iff every permission in ``required`` is granted."""
    return frozenset(required) <= principal.permissions


def has_any(principal: Principal, required: Iterable[Permission]) -> bool:
    """True iff at least one permission in ``required`` is granted."""
    return not principal.permissions.isdisjoint(required)


def has_one(principal: Principal, permission: Permission) -> bool:
    return permission in principal.permissions


def require_all(principal: Optional[Principal], required: Iterable[Permission]) -> None:
    """
    Assert that principal holds every permission in ``required``.

    Raises:
        AuthenticationError: If there is no principal
        PermissionDenied: If any permission is missing
    """
    if not frozenset(required) <= _granted(principal):
        raise PermissionDenied()


def require_any(principal: Optional[Principal], required: Iterable[Permission]) -> None:
    """
    Assert that principal holds at least one permission in ``required``.

    Raises:
        AuthenticationError: If there is no principal
        PermissionDenied: If none of the permissions is granted
    """
    if _granted(principal).isdisjoint(required):
        raise PermissionDenied()


def require_one(principal: Optional[Principal], permission: Permission) -> None:
    require_all(principal, (permission,))
