"""
JWT token management utilities.

Handles creation and verification of the signed session tokens carried in
the ``Authorization: Bearer`` header. Claims: ``userId``, ``iat``,
``lastActivity`` and ``exp`` (all timestamps in epoch seconds).
"""

import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional, Union
from uuid import UUID

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"
LAST_ACTIVITY_CLAIM = "lastActivity"


class JWTManager:
    """
    JWT token manager for authentication.

    Signs and verifies session tokens with a server-held secret.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 60

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_minutes: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Hard token lifetime in minutes
        """
        if not secret_key:
            raise ValueError("A signing secret is required")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    def create_access_token(
        self,
        user_id: Union[UUID, str],
        issued_at: Optional[datetime] = None,
        last_activity: Optional[datetime] = None,
        expires_delta: Optional[timedelta] = None,
        additional_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            issued_at: Issue time (defaults to now)
            last_activity: Last recorded activity (omitted when None)
            expires_delta: Custom expiration time
            additional_claims: Additional claims to include

        Returns:
            Encoded JWT token
        """
        now = issued_at or datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            USER_ID_CLAIM: str(user_id),
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        if last_activity is not None:
            payload[LAST_ACTIVITY_CLAIM] = int(last_activity.timestamp())

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Decoded token payload

        Raises:
            jwt.ExpiredSignatureError: If token is expired
            jwt.InvalidTokenError: If token is invalid
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token verification failed: token expired")
            raise
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise
