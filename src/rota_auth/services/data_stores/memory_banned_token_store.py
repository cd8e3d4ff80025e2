from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

from rota_auth.domain.data_stores import BannedTokenStore


class MemoryBannedTokenStore(BannedTokenStore):
    """
    In-process deny-list. Entries carry a deadline; a read after it passes
    treats the entry as absent, and every `revoke` sweeps out all expired
    entries, so memory tracks live revocations rather than every token ever
    revoked.
    """

    def __init__(
        self,
        *,
        default_ttl_seconds: int = 600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._deadlines: dict[str, float] = {}
        self._write_lock = asyncio.Lock()

    async def revoke(self, token: str, *, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        async with self._write_lock:
            now = self._clock()
            self._purge_expired(now)
            deadline = now + ttl
            # Re-revoking never shortens an existing entry.
            self._deadlines[token] = max(deadline, self._deadlines.get(token, deadline))

    async def is_revoked(self, token: str) -> bool:
        deadline = self._deadlines.get(token)
        if deadline is None:
            return False
        if self._clock() >= deadline:
            self._deadlines.pop(token, None)
            return False
        return True

    async def purge_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        async with self._write_lock:
            return self._purge_expired(self._clock())

    def _purge_expired(self, now: float) -> int:
        # Caller holds the write lock.
        expired = [token for token, deadline in self._deadlines.items() if now >= deadline]
        for token in expired:
            del self._deadlines[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._deadlines)
