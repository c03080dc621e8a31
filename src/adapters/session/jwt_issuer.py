"""
JWT session issuer adapter - Implements SessionTokenIssuer protocol.

Signs HS256 session tokens with PyJWT. The subject claim carries the
user id; tokens expire after the configured lifetime.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import jwt

from src.domain.models import User


class JwtSessionIssuer:
    """Implements SessionTokenIssuer protocol via PyJWT."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60 * 24,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expires_minutes)
        self._clock = clock

    def sign(self, user: User) -> str:
        issued_at = self._clock()
        payload = {
            "sub": user.id,
            "email": user.email,
            "seller": user.is_seller,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
