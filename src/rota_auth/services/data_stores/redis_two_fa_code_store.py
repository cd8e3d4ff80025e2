"""
rota_auth.services.data_stores.redis_two_fa_code_store

Pending 2FA challenges on Redis.

Responsibilities:
- Store `[login_attempt_id, code]` as JSON under `two_fa_code:<email>` with a TTL.
- Treat a missing key as "no pending challenge" and anything unreadable as
  an unexpected error.
"""

from __future__ import annotations

import json
from typing import Final

from redis.asyncio import Redis
from redis.exceptions import RedisError

from rota_auth.domain.data_stores import (
    LoginAttemptNotFoundError,
    TwoFACodeStore,
    UnexpectedStoreError,
)
from rota_auth.domain.email import Email
from rota_auth.domain.errors import ValidationError
from rota_auth.domain.ids import LoginAttemptId
from rota_auth.domain.two_fa_code import TwoFACode

TWO_FA_CODE_KEY_PREFIX: Final[str] = "two_fa_code:"


def _key(email: Email) -> str:
    return f"{TWO_FA_CODE_KEY_PREFIX}{email.expose_secret()}"


class RedisTwoFACodeStore(TwoFACodeStore):
    def __init__(self, *, client: Redis, ttl_seconds: int = 600) -> None:
        self._client = client
        self._ttl = ttl_seconds

    async def put(self, email: Email, login_attempt_id: LoginAttemptId, code: TwoFACode) -> None:
        payload = json.dumps([login_attempt_id.expose_secret(), code.expose_secret()])
        try:
            # Plain SET overwrites, which is what makes the latest attempt win.
            await self._client.set(_key(email), payload, ex=self._ttl)
        except RedisError as e:
            raise UnexpectedStoreError("failed to set 2FA code in Redis") from e

    async def get(self, email: Email) -> tuple[LoginAttemptId, TwoFACode]:
        try:
            raw = await self._client.get(_key(email))
        except RedisError as e:
            raise UnexpectedStoreError("failed to get 2FA code from Redis") from e
        if raw is None:
            raise LoginAttemptNotFoundError("login attempt id not found")

        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            login_attempt_id, code = json.loads(raw)
            return LoginAttemptId.parse(login_attempt_id), TwoFACode.parse(code)
        except (ValueError, TypeError, ValidationError) as e:
            raise UnexpectedStoreError("failed to deserialise 2FA tuple") from e

    async def remove(self, email: Email) -> bool:
        try:
            # DEL is atomic; only one caller sees a count of 1.
            return bool(await self._client.delete(_key(email)))
        except RedisError as e:
            raise UnexpectedStoreError("failed to delete 2FA code from Redis") from e
