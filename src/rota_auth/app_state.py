"""
rota_auth.app_state

Process-wide composition of stores, clients and the auth service.

Responsibilities:
- Build every backend selected by `Settings` exactly once at startup.
- Own shutdown of pooled resources (DB engine, Redis client, HTTP client, hash pool).
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine

from rota_auth.auth.hashing import HashingConfig, PasswordHashingService
from rota_auth.auth.jwt import JwtConfig, TokenService
from rota_auth.db.init_db import init_db
from rota_auth.db.session import create_engine, create_sessionmaker
from rota_auth.domain.data_stores import (
    BannedTokenStore,
    EmailClient,
    TwoFACodeStore,
    UserStore,
)
from rota_auth.email_clients.mock import MockEmailClient
from rota_auth.email_clients.postmark import PostmarkConfig, PostmarkEmailClient
from rota_auth.services.auth_service import AuthService
from rota_auth.services.data_stores import (
    HashmapUserStore,
    MemoryBannedTokenStore,
    MemoryTwoFACodeStore,
    RedisBannedTokenStore,
    RedisTwoFACodeStore,
    SqlUserStore,
)
from rota_auth.settings import Settings


@dataclass(slots=True)
class AppState:
    settings: Settings
    user_store: UserStore
    banned_token_store: BannedTokenStore
    two_fa_code_store: TwoFACodeStore
    email_client: EmailClient
    hasher: PasswordHashingService
    tokens: TokenService
    auth_service: AuthService
    engine: AsyncEngine | None = None
    redis: Redis | None = None
    http: httpx.AsyncClient | None = None
    _closed: bool = field(default=False, repr=False)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.http is not None:
            await self.http.aclose()
        if self.redis is not None:
            await self.redis.aclose()
        if self.engine is not None:
            await self.engine.dispose()
        self.hasher.close()


async def build_app_state(
    settings: Settings,
    *,
    user_store: UserStore | None = None,
    banned_token_store: BannedTokenStore | None = None,
    two_fa_code_store: TwoFACodeStore | None = None,
    email_client: EmailClient | None = None,
) -> AppState:
    """
    Explicit overrides win over the backends named in settings (tests inject
    in-memory stores or a recording email client this way).
    """

    hasher = PasswordHashingService(HashingConfig.from_settings(settings))

    engine: AsyncEngine | None = None
    if user_store is None:
        if settings.user_store_backend == "sql":
            engine = create_engine(settings)
            if settings.env in ("dev", "test"):
                await init_db(engine)
            user_store = SqlUserStore(session_factory=create_sessionmaker(engine), hasher=hasher)
        else:
            user_store = HashmapUserStore(hasher=hasher)

    redis: Redis | None = None
    if settings.cache_backend == "redis" and (
        banned_token_store is None or two_fa_code_store is None
    ):
        # One connection pool shared by both stores; key prefixes keep them apart.
        redis = Redis.from_url(settings.redis_url, decode_responses=True)
    if banned_token_store is None:
        banned_token_store = (
            RedisBannedTokenStore(client=redis, default_ttl_seconds=settings.token_ttl_seconds)
            if redis is not None
            else MemoryBannedTokenStore(default_ttl_seconds=settings.token_ttl_seconds)
        )
    if two_fa_code_store is None:
        two_fa_code_store = (
            RedisTwoFACodeStore(client=redis, ttl_seconds=settings.two_fa_code_ttl_seconds)
            if redis is not None
            else MemoryTwoFACodeStore(ttl_seconds=settings.two_fa_code_ttl_seconds)
        )

    http: httpx.AsyncClient | None = None
    if email_client is None:
        if settings.email_backend == "postmark":
            http = httpx.AsyncClient()
            email_client = PostmarkEmailClient(cfg=PostmarkConfig.from_settings(settings), http=http)
        else:
            email_client = MockEmailClient()

    tokens = TokenService(cfg=JwtConfig.from_settings(settings), banned_tokens=banned_token_store)
    auth_service = AuthService(
        user_store=user_store,
        banned_token_store=banned_token_store,
        two_fa_code_store=two_fa_code_store,
        email_client=email_client,
        hasher=hasher,
        tokens=tokens,
        two_fa_email_subject=settings.two_fa_email_subject,
    )
    return AppState(
        settings=settings,
        user_store=user_store,
        banned_token_store=banned_token_store,
        two_fa_code_store=two_fa_code_store,
        email_client=email_client,
        hasher=hasher,
        tokens=tokens,
        auth_service=auth_service,
        engine=engine,
        redis=redis,
        http=http,
    )


# --- Module Notes -----------------------------------------------------------
# Stores injected by the caller are not closed by `aclose`; their owner manages them.
