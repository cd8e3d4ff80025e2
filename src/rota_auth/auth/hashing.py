"""
rota_auth.auth.hashing

Argon2id password hashing service.

Responsibilities:
- Hash passwords with a fresh random salt and fixed cost parameters.
- Verify candidates against stored hashes (constant-time inside argon2).
- Keep the CPU-bound work on a dedicated thread pool so the event loop and the
  default executor stay free for concurrent requests.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from argon2 import PasswordHasher, Type
from argon2.exceptions import Argon2Error, InvalidHashError, VerifyMismatchError

from rota_auth.domain.errors import PasswordHashingError, PasswordMismatchError
from rota_auth.domain.password import Password
from rota_auth.domain.password_hash import MalformedHashError, PasswordHash
from rota_auth.settings import Settings


@dataclass(frozen=True, slots=True)
class HashingConfig:
    time_cost: int = 2
    memory_cost: int = 15000  # KiB
    parallelism: int = 1
    workers: int = 2

    @classmethod
    def from_settings(cls, settings: Settings) -> HashingConfig:
        return cls(
            time_cost=settings.hash_time_cost,
            memory_cost=settings.hash_memory_cost,
            parallelism=settings.hash_parallelism,
            workers=settings.hash_workers,
        )


class PasswordHashingService:
    def __init__(self, cfg: HashingConfig | None = None) -> None:
        cfg = cfg or HashingConfig()
        self._hasher = PasswordHasher(
            time_cost=cfg.time_cost,
            memory_cost=cfg.memory_cost,
            parallelism=cfg.parallelism,
            type=Type.ID,
        )
        self._pool = ThreadPoolExecutor(
            max_workers=cfg.workers, thread_name_prefix="password-hash"
        )

    async def hash(self, password: Password) -> PasswordHash:
        loop = asyncio.get_running_loop()
        try:
            encoded = await loop.run_in_executor(
                self._pool, self._hasher.hash, password.expose_secret()
            )
            return PasswordHash.parse(encoded)
        except (Argon2Error, MalformedHashError) as e:
            raise PasswordHashingError("failed to compute password hash") from e

    async def verify(self, expected: PasswordHash, candidate: Password) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                self._pool,
                self._hasher.verify,
                expected.expose_secret(),
                candidate.expose_secret(),
            )
        except VerifyMismatchError as e:
            raise PasswordMismatchError("password does not match") from e
        except (InvalidHashError, Argon2Error) as e:
            raise PasswordHashingError("failed to verify password hash") from e

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)


# --- Module Notes -----------------------------------------------------------
# argon2-cffi releases the GIL during hashing, so a small thread pool gives real
# parallelism without a process pool.
