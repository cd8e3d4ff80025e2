"""
rota_auth.services.data_stores.redis_banned_token_store

Revocation deny-list on Redis.

Responsibilities:
- Store revoked tokens under the `banned_token:` prefix with a native TTL.
- Distinguish "not revoked" from "Redis unavailable" (the latter raises).
"""

from __future__ import annotations

from typing import Final

from redis.asyncio import Redis
from redis.exceptions import RedisError

from rota_auth.domain.data_stores import BannedTokenStore, UnexpectedStoreError

BANNED_TOKEN_KEY_PREFIX: Final[str] = "banned_token:"


def _key(token: str) -> str:
    return f"{BANNED_TOKEN_KEY_PREFIX}{token}"


class RedisBannedTokenStore(BannedTokenStore):
    def __init__(self, *, client: Redis, default_ttl_seconds: int = 600) -> None:
        self._client = client
        self._default_ttl = default_ttl_seconds

    async def revoke(self, token: str, *, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        try:
            # SET is idempotent; a repeat revoke just refreshes the TTL.
            await self._client.set(_key(token), 1, ex=ttl)
        except RedisError as e:
            raise UnexpectedStoreError("failed to set banned token in Redis") from e

    async def is_revoked(self, token: str) -> bool:
        try:
            return bool(await self._client.exists(_key(token)))
        except RedisError as e:
            raise UnexpectedStoreError("failed to check banned token in Redis") from e


# --- Module Notes -----------------------------------------------------------
# Shares a keyspace with the 2FA code store; the prefixes keep them apart.
