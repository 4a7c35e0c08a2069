from app.core.security.jwt_handler import JWTManager, USER_ID_CLAIM, LAST_ACTIVITY_CLAIM
from app.core.security.password_hasher import PasswordHasher

__all__ = ["JWTManager", "PasswordHasher", "USER_ID_CLAIM", "LAST_ACTIVITY_CLAIM"]
