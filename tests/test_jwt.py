"""
tests.test_jwt

Session token issuing, validation order and revocation.
"""

from __future__ import annotations

import time
from datetime import timedelta

import jwt
import pytest

from rota_auth.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    TokenRevokedError,
    TokenService,
)
from rota_auth.domain import Email, UnexpectedStoreError
from rota_auth.services.data_stores import MemoryBannedTokenStore

TEST_JWT_SECRET = "test-secret"


class BrokenBannedTokenStore(MemoryBannedTokenStore):
    async def is_revoked(self, token: str) -> bool:
        raise UnexpectedStoreError("backend down")


def _service(banned: MemoryBannedTokenStore, *, ttl_seconds: int = 600) -> TokenService:
    cfg = JwtConfig(alg="HS256", secret=TEST_JWT_SECRET, ttl=timedelta(seconds=ttl_seconds))
    return TokenService(cfg=cfg, banned_tokens=banned)


@pytest.mark.asyncio
async def test_issued_token_validates_with_email_subject(tokens: TokenService) -> None:
    token = tokens.issue(Email.parse("a@b.com"))
    claims = await tokens.validate(token)

    assert claims.sub == "a@b.com"
    assert claims.exp - claims.iat == 600
    assert claims.jti


def test_tokens_for_same_email_are_distinct(tokens: TokenService) -> None:
    email = Email.parse("a@b.com")
    assert tokens.issue(email) != tokens.issue(email)


def test_config_repr_hides_secret() -> None:
    cfg = JwtConfig(alg="HS256", secret="super-secret-value")
    assert "super-secret-value" not in repr(cfg)


@pytest.mark.asyncio
async def test_wrong_secret_is_rejected(banned_tokens: MemoryBannedTokenStore) -> None:
    forged = jwt.encode(
        {"sub": "a@b.com", "exp": int(time.time()) + 600},
        "another-secret",
        algorithm="HS256",
    )
    with pytest.raises(JwtValidationError):
        await _service(banned_tokens).validate(forged)


@pytest.mark.asyncio
async def test_garbage_is_rejected(tokens: TokenService) -> None:
    with pytest.raises(JwtValidationError):
        await tokens.validate("not.a.jwt")


@pytest.mark.asyncio
async def test_expired_token_is_rejected(banned_tokens: MemoryBannedTokenStore) -> None:
    svc = _service(banned_tokens, ttl_seconds=-30)
    token = svc.issue(Email.parse("a@b.com"))
    with pytest.raises(JwtValidationError) as exc:
        await svc.validate(token)
    assert not isinstance(exc.value, TokenRevokedError)


@pytest.mark.asyncio
async def test_missing_subject_is_rejected(tokens: TokenService) -> None:
    token = jwt.encode({"exp": int(time.time()) + 600}, TEST_JWT_SECRET, algorithm="HS256")
    with pytest.raises(JwtValidationError):
        await tokens.validate(token)


@pytest.mark.asyncio
async def test_revoked_token_is_rejected_while_otherwise_valid(
    tokens: TokenService, banned_tokens: MemoryBannedTokenStore
) -> None:
    token = tokens.issue(Email.parse("a@b.com"))
    await banned_tokens.revoke(token)

    with pytest.raises(TokenRevokedError):
        await tokens.validate(token)


@pytest.mark.asyncio
async def test_revocation_wins_over_expiry(banned_tokens: MemoryBannedTokenStore) -> None:
    svc = _service(banned_tokens, ttl_seconds=-30)
    token = svc.issue(Email.parse("a@b.com"))
    await banned_tokens.revoke(token)

    with pytest.raises(TokenRevokedError):
        await svc.validate(token)


@pytest.mark.asyncio
async def test_store_failure_is_not_reported_as_invalid_token() -> None:
    svc = _service(BrokenBannedTokenStore())
    token = svc.issue(Email.parse("a@b.com"))
    with pytest.raises(UnexpectedStoreError):
        await svc.validate(token)


@pytest.mark.asyncio
async def test_remaining_lifetime_tracks_expiry(tokens: TokenService) -> None:
    claims = await tokens.validate(tokens.issue(Email.parse("a@b.com")))
    assert 590 <= tokens.remaining_lifetime(claims) <= 600
