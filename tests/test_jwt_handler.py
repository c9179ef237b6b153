from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.jwt_handler import TokenClaims, TokenConfig, TokenService
from models.user import Role


def test_issue_then_verify_returns_identity(token_service) -> None:
    token = token_service.issue(7, "tm@x.com", Role.TEAM_MEMBER)
    assert token_service.verify(token) == TokenClaims(id=7, email="tm@x.com", role=Role.TEAM_MEMBER)


def test_token_signed_with_other_secret_is_rejected(token_service) -> None:
    other = TokenService(TokenConfig(secret_key="someone-else"))
    assert token_service.verify(other.issue(7, "tm@x.com", Role.TEAM_MEMBER)) is None


def test_expired_token_is_rejected() -> None:
    service = TokenService(TokenConfig(secret_key="test-secret", expire_minutes=-1))
    assert service.verify(service.issue(1, "pm@x.com", Role.PROJECT_MANAGER)) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(token_service, token) -> None:
    assert token_service.verify(token) is None


def test_unknown_role_claim_is_rejected(token_service) -> None:
    payload = {
        "sub": "1",
        "id": 1,
        "email": "root@x.com",
        "role": "admin",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    token = jwt.encode(payload, "test-secret", algorithm="HS256")
    assert token_service.verify(token) is None


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        TokenService(TokenConfig(secret_key=""))
