"""
bcrypt password hashing.
"""

import logging
from typing import Optional

import bcrypt

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
# bcrypt only reads this many bytes of a password; longer input is refused.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    Hashes and checks login passwords.

    ``rounds`` is the bcrypt cost factor (4..31); tests use the minimum.
    """

    def __init__(self, rounds: int = 12):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be within 4..31, got {rounds}")
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("Password cannot be empty")
        if len(password.encode(_ENCODING)) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        digest = bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode(_ENCODING)

    def verify(self, password: str, hashed_password: Optional[str]) -> bool:
        """
        True iff ``password`` matches ``hashed_password``.

        A missing hash (unknown user) still pays for one bcrypt check, so
        both failure kinds take about the same time. Over-long passwords
        and malformed stored hashes never match.
        """
        candidate = (password or "").encode(_ENCODING)
        if not hashed_password or len(candidate) > MAX_PASSWORD_BYTES:
            bcrypt.checkpw(candidate[:MAX_PASSWORD_BYTES], self._dummy())
            return False
        try:
            return bcrypt.checkpw(candidate, hashed_password.encode(_ENCODING))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def _dummy(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"unused", bcrypt.gensalt(rounds=self.rounds))
        return self._dummy_hash
