"""
Authentication service: login and session activity refresh.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ErrorCode
from app.core.security.jwt_handler import JWTManager
from app.core.security.password_hasher import PasswordHasher
from app.models.user.user import User
from app.repositories.user import UserRepository
from app.services.auth.session_validator import Identity
from app.services.base import BaseService, ServiceResult


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_in: int
    user_id: str
    token_type: str = "bearer"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthenticationService(BaseService[User, UserRepository]):
    """
    Service for authenticating users and issuing session tokens.

    Every issued token carries ``userId``, ``iat``, ``lastActivity`` and
    ``exp``; ``touch`` re-issues the caller's token with a fresh
    ``lastActivity`` so an active client keeps its session alive.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        db_session: Session,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(user_repository, db_session)
        self.user_repository = user_repository
        self.jwt = jwt_manager
        self.password_hasher = password_hasher
        self._clock = clock

    def login(self, identifier: str, password: str) -> ServiceResult[IssuedToken]:
        """
        Authenticate user via username or email and password.

        Unknown users and wrong passwords fail identically.
        """
        try:
            user = self.user_repository.find_by_username_or_email(identifier.strip())
            password_hash = user.password_hash if user is not None else None
            if not self.password_hasher.verify(password, password_hash):
                raise AuthenticationError("Invalid credentials")
            if not user.is_active:
                raise AuthenticationError("User account is inactive", ErrorCode.USER_INACTIVE)

            with self.transaction():
                self.user_repository.record_login(user)

            self._log_operation("login", user.id)
            return ServiceResult.success(self._issue(user.id), message="Login successful")
        except Exception as e:
            return self._handle_exception(e, "login")

    def touch(self, identity: Identity) -> ServiceResult[IssuedToken]:
        """Re-issue a token for an already validated identity."""
        try:
            return ServiceResult.success(self._issue(identity.user_id))
        except Exception as e:
            return self._handle_exception(e, "refresh session activity", identity.user_id)

    def _issue(self, user_id: str) -> IssuedToken:
        now = self._clock()
        token = self.jwt.create_access_token(user_id, issued_at=now, last_activity=now)
        return IssuedToken(
            access_token=token,
            expires_in=self.jwt.access_token_expire_minutes * 60,
            user_id=user_id,
        )
