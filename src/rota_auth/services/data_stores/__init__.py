"""
rota_auth.services.data_stores

Concrete store backends.

Responsibilities:
- In-memory implementations for tests and local development.
- SQL (credentials) and Redis (revocation, 2FA) implementations for deployment.
"""

from rota_auth.services.data_stores.hashmap_user_store import HashmapUserStore
from rota_auth.services.data_stores.memory_banned_token_store import MemoryBannedTokenStore
from rota_auth.services.data_stores.memory_two_fa_code_store import MemoryTwoFACodeStore
from rota_auth.services.data_stores.redis_banned_token_store import RedisBannedTokenStore
from rota_auth.services.data_stores.redis_two_fa_code_store import RedisTwoFACodeStore
from rota_auth.services.data_stores.sql_user_store import SqlUserStore

__all__ = [
    "HashmapUserStore",
    "MemoryBannedTokenStore",
    "MemoryTwoFACodeStore",
    "RedisBannedTokenStore",
    "RedisTwoFACodeStore",
    "SqlUserStore",
]
