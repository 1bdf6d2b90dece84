from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_EXPIRE_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError


class TokenService:
    """Signs and verifies bearer tokens scoped to ``{account id, role}``."""

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        expire_days: int = DEFAULT_TOKEN_EXPIRE_DAYS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("JWT secret key is not configured")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_days = int(expire_days)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def expire_days(self) -> int:
        return self._expire_days

    def issue(self, *, account_id: int, role: Role) -> str:
        now = self._clock()
        claims = {
            "sub": str(account_id),
            "role": role.value,
            "iat": now,
            "exp": now + timedelta(days=self._expire_days),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict:
        """Return verified claims or raise AuthenticationError (bad signature, expired, malformed)."""
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationError("Token not valid")
        if not claims.get("sub") or not claims.get("role"):
            raise AuthenticationError("Token not valid")
        return claims
