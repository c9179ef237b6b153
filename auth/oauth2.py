from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.errors import AuthError, AuthorizationError
from app.logger import get_logger
from auth.jwt_handler import TokenClaims, TokenService, get_token_service
from models.user import Role

logger = get_logger(__name__)

# auto_error is off so a missing header raises our own uniform 401
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHENTICATED = "Authentication required"


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Authorization gate: resolve the bearer token into the caller's identity."""
    if credentials is None or not credentials.credentials:
        logger.warning("Rejected request: missing or non-bearer Authorization header")
        raise AuthError(UNAUTHENTICATED)

    claims = tokens.verify(credentials.credentials)
    if claims is None:
        logger.warning("Rejected request: bearer token failed verification")
        raise AuthError(UNAUTHENTICATED)
    return claims


def require_role(actor: TokenClaims, role: Role, message: str) -> None:
    if actor.role is not role:
        raise AuthorizationError(message)
