"""
Session validation: bearer token -> authenticated identity.

A session is rejected when its token is malformed, badly signed or past
its hard expiry, when it has been idle longer than the configured
inactivity window, or when its user is missing or not Active.
Validation never advances the session's activity timestamp.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import jwt
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ErrorCode
from app.core.security.jwt_handler import JWTManager, LAST_ACTIVITY_CLAIM, USER_ID_CLAIM
from app.models.user import User
from app.repositories.user import UserRepository
from app.services.base import BaseService, ServiceResult

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as established from a valid session token."""

    user_id: str
    username: str
    issued_at: datetime
    last_activity: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch(value, claim: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AuthenticationError(
            f"Malformed '{claim}' claim",
            ErrorCode.INVALID_TOKEN,
        )
    return float(value)


class SessionValidator(BaseService[User, UserRepository]):
    """
    Validates ``Authorization`` header values.

    Inactivity is measured from the later of the token's ``lastActivity``
    and ``iat`` claims, independently of the token's own ``exp``.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        db_session: Session,
        jwt_manager: JWTManager,
        session_timeout_seconds: int = 1800,
        clock: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(user_repository, db_session)
        self.user_repository = user_repository
        self.jwt = jwt_manager
        self.session_timeout_seconds = session_timeout_seconds
        self._clock = clock

    def validate(self, authorization_header: Optional[str]) -> ServiceResult[Identity]:
        """
        Validate an ``Authorization`` header value.

        Returns:
            ServiceResult with the caller's Identity, or a failure whose
            code is one of UNAUTHENTICATED, INVALID_TOKEN, TOKEN_EXPIRED,
            SESSION_EXPIRED, USER_NOT_FOUND or USER_INACTIVE
        """
        try:
            return ServiceResult.success(self._validate(authorization_header))
        except Exception as e:
            return self._handle_exception(e, "validate session")

    def _validate(self, authorization_header: Optional[str]) -> Identity:
        if not authorization_header or not authorization_header.startswith(BEARER_PREFIX):
            raise AuthenticationError("Authentication token required")

        token = authorization_header[len(BEARER_PREFIX):].strip()
        if not token:
            raise AuthenticationError("Authentication token required")

        try:
            claims = self.jwt.verify_token(token)
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired", ErrorCode.TOKEN_EXPIRED) from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token", ErrorCode.INVALID_TOKEN) from None

        user_id = claims.get(USER_ID_CLAIM)
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("Token does not identify a user", ErrorCode.INVALID_TOKEN)

        issued_at = _epoch(claims["iat"], "iat")
        last_activity = issued_at
        if claims.get(LAST_ACTIVITY_CLAIM) is not None:
            last_activity = max(_epoch(claims[LAST_ACTIVITY_CLAIM], LAST_ACTIVITY_CLAIM), issued_at)

        idle_seconds = self._clock().timestamp() - last_activity
        if idle_seconds > self.session_timeout_seconds:
            raise AuthenticationError(
                "Session expired due to inactivity",
                ErrorCode.SESSION_EXPIRED,
            )

        user = self.user_repository.find_user_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found", ErrorCode.USER_NOT_FOUND)
        if not user.is_active:
            raise AuthenticationError("User account is inactive", ErrorCode.USER_INACTIVE)

        return Identity(
            user_id=user.id,
            username=user.username,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            last_activity=datetime.fromtimestamp(last_activity, tz=timezone.utc),
        )
