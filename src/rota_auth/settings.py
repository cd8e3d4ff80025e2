"""
rota_auth.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, Postmark token).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Read once at process start and passed by injection into the signer,
    the stores and the email client. Never mutated after construction.
    """

    model_config = SettingsConfigDict(env_prefix="ROTA_AUTH_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "rota-auth"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Sessions
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(default="dev-secret-change-me", min_length=1, repr=False)
    jwt_cookie_name: str = "jwt"
    token_ttl_seconds: int = Field(default=600, ge=1)

    # 2FA
    two_fa_code_ttl_seconds: int = Field(default=600, ge=1)
    two_fa_email_subject: str = "Rota Manager 2FA Code"

    # Persistence
    user_store_backend: Literal["memory", "sql"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./rota_auth.db"

    # Revocation list + 2FA challenges
    cache_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://127.0.0.1:6379/0"

    # Outbound email
    email_backend: Literal["mock", "postmark"] = "mock"
    postmark_base_url: str = "https://api.postmarkapp.com/email"
    postmark_auth_token: str = Field(default="", repr=False)
    email_sender: str = "no-reply@rota-manager.local"
    email_timeout_seconds: float = 10.0

    # Argon2id cost parameters (memory in KiB).
    hash_time_cost: int = Field(default=2, ge=1)
    hash_memory_cost: int = Field(default=15000, ge=8)
    hash_parallelism: int = Field(default=1, ge=1)
    hash_workers: int = Field(default=2, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# TTLs live here rather than as module constants so tests can shrink them
# without monkeypatching.
