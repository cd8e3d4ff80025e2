"""
tests.conftest

Shared fixtures for the auth test suite.

Responsibilities:
- Cheap Argon2 parameters so hashing-heavy tests stay fast.
- A controllable clock for TTL-driven stores.
- An in-process async Redis double implementing the commands the stores use.
- A fully wired `AuthService` over in-memory backends.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from rota_auth.auth.hashing import HashingConfig, PasswordHashingService
from rota_auth.auth.jwt import JwtConfig, TokenService
from rota_auth.email_clients.mock import MockEmailClient
from rota_auth.services.auth_service import AuthService
from rota_auth.services.data_stores import (
    HashmapUserStore,
    MemoryBannedTokenStore,
    MemoryTwoFACodeStore,
)
from rota_auth.settings import Settings

TEST_JWT_SECRET = "test-secret"
FAST_HASHING = HashingConfig(time_cost=1, memory_cost=1024, parallelism=1, workers=1)


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """
    Mimics `redis.asyncio.Redis(decode_responses=True)` for SET/GET/EXISTS/DEL/PING.
    Keys expire against the injected clock. Setting `fail = True` makes every
    command raise a redis connection error; `yield_each = True` suspends the
    caller once per command, like a real network round trip.
    """

    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float | None]] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail = False
        self.yield_each = False

    async def _round_trip(self) -> None:
        if self.yield_each:
            await asyncio.sleep(0)
        self._check()

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("connection refused")

    def _live(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, deadline = entry
        if deadline is not None and self._clock() >= deadline:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: Any, ex: int | None = None) -> bool:
        await self._round_trip()
        deadline = self._clock() + ex if ex is not None else None
        self._data[key] = (str(value), deadline)
        self.ttls[key] = ex
        return True

    async def get(self, key: str) -> str | None:
        await self._round_trip()
        return self._live(key)

    async def exists(self, *keys: str) -> int:
        await self._round_trip()
        return sum(1 for k in keys if self._live(k) is not None)

    async def delete(self, *keys: str) -> int:
        await self._round_trip()
        removed = 0
        for k in keys:
            if self._live(k) is not None:
                removed += 1
            self._data.pop(k, None)
        return removed

    async def ping(self) -> bool:
        await self._round_trip()
        return True

    async def aclose(self) -> None:
        return None

    def raw_set(self, key: str, value: str) -> None:
        self._data[key] = (value, None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_redis(clock: FakeClock) -> FakeRedis:
    return FakeRedis(clock)


@pytest.fixture
def hasher():
    svc = PasswordHashingService(FAST_HASHING)
    yield svc
    svc.close()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        env="test",
        jwt_secret=TEST_JWT_SECRET,
        user_store_backend="memory",
        cache_backend="memory",
        email_backend="mock",
        hash_time_cost=1,
        hash_memory_cost=1024,
        hash_workers=1,
    )


@pytest.fixture
def user_store(hasher: PasswordHashingService) -> HashmapUserStore:
    return HashmapUserStore(hasher=hasher)


@pytest.fixture
def banned_tokens() -> MemoryBannedTokenStore:
    return MemoryBannedTokenStore()


@pytest.fixture
def two_fa_codes() -> MemoryTwoFACodeStore:
    return MemoryTwoFACodeStore()


@pytest.fixture
def email_client() -> MockEmailClient:
    return MockEmailClient()


@pytest.fixture
def tokens(banned_tokens: MemoryBannedTokenStore) -> TokenService:
    cfg = JwtConfig(alg="HS256", secret=TEST_JWT_SECRET, ttl=timedelta(seconds=600))
    return TokenService(cfg=cfg, banned_tokens=banned_tokens)


@pytest.fixture
def auth_service(
    user_store: HashmapUserStore,
    banned_tokens: MemoryBannedTokenStore,
    two_fa_codes: MemoryTwoFACodeStore,
    email_client: MockEmailClient,
    hasher: PasswordHashingService,
    tokens: TokenService,
) -> AuthService:
    return AuthService(
        user_store=user_store,
        banned_token_store=banned_tokens,
        two_fa_code_store=two_fa_codes,
        email_client=email_client,
        hasher=hasher,
        tokens=tokens,
    )
