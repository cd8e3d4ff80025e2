from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

from rota_auth.domain.data_stores import LoginAttemptNotFoundError, TwoFACodeStore
from rota_auth.domain.email import Email
from rota_auth.domain.ids import LoginAttemptId
from rota_auth.domain.two_fa_code import TwoFACode


class MemoryTwoFACodeStore(TwoFACodeStore):
    """
    In-process pending challenges, one per email. Expired entries are treated
    as absent and dropped on read.
    """

    def __init__(
        self,
        *,
        ttl_seconds: int = 600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._codes: dict[Email, tuple[LoginAttemptId, TwoFACode, float]] = {}
        self._write_lock = asyncio.Lock()

    async def put(self, email: Email, login_attempt_id: LoginAttemptId, code: TwoFACode) -> None:
        async with self._write_lock:
            self._codes[email] = (login_attempt_id, code, self._clock() + self._ttl)

    async def get(self, email: Email) -> tuple[LoginAttemptId, TwoFACode]:
        entry = self._codes.get(email)
        if entry is None:
            raise LoginAttemptNotFoundError("login attempt id not found")
        login_attempt_id, code, deadline = entry
        if self._clock() >= deadline:
            async with self._write_lock:
                # Only drop it if a concurrent put hasn't replaced it meanwhile.
                if self._codes.get(email) is entry:
                    del self._codes[email]
            raise LoginAttemptNotFoundError("login attempt id not found")
        return login_attempt_id, code

    async def remove(self, email: Email) -> bool:
        async with self._write_lock:
            return self._codes.pop(email, None) is not None
