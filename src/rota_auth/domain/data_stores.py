"""
rota_auth.domain.data_stores

Store interfaces consumed by the authentication service.

Responsibilities:
- Define the async contracts for the credential, revocation and 2FA challenge stores.
- Define the store error taxonomy shared by every backend.
- Define the message-delivery contract used to dispatch 2FA codes.

Every backend (in-memory, SQL, Redis) must raise exactly these errors so that
implementations are interchangeable.
"""

from __future__ import annotations

import abc
from typing import Protocol

from rota_auth.domain.email import Email
from rota_auth.domain.errors import PasswordHashingError, PasswordMismatchError
from rota_auth.domain.ids import LoginAttemptId
from rota_auth.domain.password import Password
from rota_auth.domain.password_hash import PasswordHash
from rota_auth.domain.two_fa_code import TwoFACode
from rota_auth.domain.user import User


class DataStoreError(Exception):
    pass


class UnexpectedStoreError(DataStoreError):
    """
    Backend I/O failure or corrupt stored data. Raised `from` the backend
    exception at the point of detection; never means "absent" or "not revoked".
    """


class UserAlreadyExistsError(DataStoreError):
    pass


class UserNotFoundError(DataStoreError):
    pass


class InvalidCredentialsError(DataStoreError):
    pass


class LoginAttemptNotFoundError(DataStoreError):
    pass


class PasswordVerifier(Protocol):
    async def verify(self, expected: PasswordHash, candidate: Password) -> None: ...


class UserStore(abc.ABC):
    """
    Durable identity records keyed by email. Email uniqueness is enforced by
    the backend, not by callers checking first.
    """

    def __init__(self, *, hasher: PasswordVerifier) -> None:
        self._hasher = hasher

    @abc.abstractmethod
    async def add(self, user: User) -> None:
        """Raises `UserAlreadyExistsError` if the email is taken."""

    @abc.abstractmethod
    async def get(self, email: Email) -> User:
        """Raises `UserNotFoundError`."""

    @abc.abstractmethod
    async def delete(self, email: Email) -> None:
        """Raises `UserNotFoundError`."""

    async def validate(self, email: Email, password: Password) -> None:
        """
        Raises `UserNotFoundError` or `InvalidCredentialsError`. Callers facing
        users must collapse both into one outcome.
        """

        user = await self.get(email)
        try:
            await self._hasher.verify(user.hash, password)
        except PasswordMismatchError as e:
            raise InvalidCredentialsError("invalid credentials") from e
        except PasswordHashingError as e:
            # A broken hash is not a wrong password.
            raise UnexpectedStoreError("failed to verify password hash") from e


class BannedTokenStore(abc.ABC):
    """Deny-list of session tokens revoked before their natural expiry."""

    @abc.abstractmethod
    async def revoke(self, token: str, *, ttl_seconds: int | None = None) -> None:
        """
        Idempotent. `ttl_seconds` is the token's remaining lifetime; when omitted
        the store uses the full session TTL.
        """

    @abc.abstractmethod
    async def is_revoked(self, token: str) -> bool:
        """Raises `UnexpectedStoreError` if the backend cannot answer."""


class TwoFACodeStore(abc.ABC):
    """At most one pending 2FA challenge per email; entries expire on their own."""

    @abc.abstractmethod
    async def put(self, email: Email, login_attempt_id: LoginAttemptId, code: TwoFACode) -> None:
        """Replaces any pending challenge for `email`."""

    @abc.abstractmethod
    async def get(self, email: Email) -> tuple[LoginAttemptId, TwoFACode]:
        """Raises `LoginAttemptNotFoundError` when absent or expired."""

    @abc.abstractmethod
    async def remove(self, email: Email) -> bool:
        """
        Idempotent. Returns whether a pending challenge was deleted; concurrent
        redemptions of one challenge see `True` exactly once.
        """


class DeliveryError(Exception):
    """The message could not be handed to the delivery provider."""


class EmailClient(Protocol):
    async def send_email(self, recipient: Email, subject: str, content: str) -> None:
        """Raises `DeliveryError`."""
        ...


# --- Module Notes -----------------------------------------------------------
# Concrete backends live in `rota_auth.services.data_stores` and
# `rota_auth.email_clients`.
