from __future__ import annotations

import asyncio

from rota_auth.domain.data_stores import (
    PasswordVerifier,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserStore,
)
from rota_auth.domain.email import Email
from rota_auth.domain.user import User


class HashmapUserStore(UserStore):
    """In-memory credential store for tests and local development."""

    def __init__(self, *, hasher: PasswordVerifier) -> None:
        super().__init__(hasher=hasher)
        self._users: dict[Email, User] = {}
        self._write_lock = asyncio.Lock()

    async def add(self, user: User) -> None:
        async with self._write_lock:
            if user.email in self._users:
                raise UserAlreadyExistsError("user already exists")
            self._users[user.email] = user

    async def get(self, email: Email) -> User:
        try:
            return self._users[email]
        except KeyError:
            raise UserNotFoundError("user not found") from None

    async def delete(self, email: Email) -> None:
        async with self._write_lock:
            if self._users.pop(email, None) is None:
                raise UserNotFoundError("user not found")
