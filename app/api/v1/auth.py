"""
Authentication endpoints: login, session activity refresh, current user.
"""

from fastapi import APIRouter, Depends

from app.api import deps
from app.core.logging import get_logger
from app.schemas.auth import CurrentUserResponse, LoginRequest, TokenResponse
from app.services.auth import AuthenticationService, Identity, Principal

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    service: AuthenticationService = Depends(deps.get_authentication_service),
):
    """Exchange username (or email) and password for a session token."""
    issued = deps.unwrap(service.login(payload.username, payload.password))
    return TokenResponse(
        access_token=issued.access_token,
        token_type=issued.token_type,
        expires_in=issued.expires_in,
        user_id=issued.user_id,
    )


@router.post("/refresh-activity", response_model=TokenResponse)
def refresh_activity(
    identity: Identity = Depends(deps.get_current_identity),
    service: AuthenticationService = Depends(deps.get_authentication_service),
):
    """
    Re-issue the caller's token with a fresh activity timestamp.

    Clients call this while the user is active; a session that is never
    refreshed expires after the inactivity window.
    """
    issued = deps.unwrap(service.touch(identity))
    return TokenResponse(
        access_token=issued.access_token,
        token_type=issued.token_type,
        expires_in=issued.expires_in,
        user_id=issued.user_id,
    )


@router.get("/me", response_model=CurrentUserResponse)
def read_current_user(
    identity: Identity = Depends(deps.get_current_identity),
    principal: Principal = Depends(deps.get_current_principal),
):
    return CurrentUserResponse(
        user_id=identity.user_id,
        username=identity.username,
        last_activity=identity.last_activity,
        permissions=sorted(principal.permissions, key=lambda p: p.value),
    )
