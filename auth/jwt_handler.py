"""
Access token issuing and verification.

TokenService receives its TokenConfig explicitly; only get_token_service()
looks at application settings.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt

from app.config import get_settings
from app.logger import get_logger
from models.user import Role

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60 * 24


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    id: int
    email: str
    role: Role


class TokenService:
    def __init__(self, config: TokenConfig):
        if not config.secret_key:
            raise ValueError("Token secret key must not be empty")
        self.config = config

    def issue(self, user_id: int, email: str, role: Role) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "id": user_id,
            "email": email,
            "role": Role(role).value,
            "iat": now,
            "exp": now + timedelta(minutes=self.config.expire_minutes),
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Return the claims of a well-formed, correctly signed, unexpired token.
        Every failure yields None; callers must not tell the reasons apart.
        """
        try:
            payload = jwt.decode(token, self.config.secret_key, algorithms=[self.config.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        user_id = payload.get("id")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
            logger.debug("Token rejected: malformed identity claims")
            return None
        try:
            role = Role(payload.get("role"))
        except ValueError:
            logger.debug("Token rejected: unknown role claim")
            return None
        return TokenClaims(id=user_id, email=email, role=role)


@lru_cache()
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    settings = get_settings()
    return TokenService(
        TokenConfig(
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )
    )
