"""
rota_auth.auth.jwt

Session token issuing and validation.

Responsibilities:
- Issue short-lived HS256 session tokens whose subject is the account email.
- Validate tokens: revocation check first, then signature + expiry.
- Report how long a token has left so revocation entries can expire with it.

Note:
- Tokens are self-contained; the only server-side session state is the
  revocation deny-list.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError, PyJWTError

from rota_auth.domain.data_stores import BannedTokenStore
from rota_auth.domain.email import Email
from rota_auth.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str = field(repr=False)
    ttl: timedelta = timedelta(seconds=600)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            secret=settings.jwt_secret,
            ttl=timedelta(seconds=settings.token_ttl_seconds),
        )


@dataclass(frozen=True, slots=True)
class Claims:
    sub: str
    exp: int
    iat: int
    jti: str


class JwtValidationError(Exception):
    pass


class TokenRevokedError(JwtValidationError):
    pass


class TokenSigningError(Exception):
    pass


class TokenService:
    def __init__(self, *, cfg: JwtConfig, banned_tokens: BannedTokenStore) -> None:
        self._cfg = cfg
        self._banned_tokens = banned_tokens

    def issue(self, email: Email) -> str:
        now = datetime.now(tz=UTC)
        payload: dict[str, Any] = {
            "sub": email.expose_secret(),
            "iat": int(now.timestamp()),
            "exp": int((now + self._cfg.ttl).timestamp()),
            # Distinguishes tokens minted in the same second for the same account,
            # so revoking one never revokes another.
            "jti": uuid.uuid4().hex,
        }
        try:
            return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)
        except PyJWTError as e:
            raise TokenSigningError("failed to create token") from e

    async def validate(self, token: str) -> Claims:
        """
        Raises `TokenRevokedError` before looking at the signature: a revoked
        token reports revocation even if it is also expired or forged.
        Store failures propagate as `UnexpectedStoreError`.
        """

        if await self._banned_tokens.is_revoked(token):
            raise TokenRevokedError("token has been revoked")

        try:
            payload = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                options={"require": ["exp", "sub"]},
            )
        except InvalidTokenError as e:
            raise JwtValidationError(str(e)) from e

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise JwtValidationError("invalid token subject")
        return Claims(
            sub=sub,
            exp=int(payload["exp"]),
            iat=int(payload.get("iat", 0)),
            jti=str(payload.get("jti", "")),
        )

    def remaining_lifetime(self, claims: Claims) -> int:
        now = int(datetime.now(tz=UTC).timestamp())
        return max(claims.exp - now, 1)


# --- Module Notes -----------------------------------------------------------
# Token transport (cookie vs. bearer header) is an API concern; see
# `rota_auth.auth.deps`.
