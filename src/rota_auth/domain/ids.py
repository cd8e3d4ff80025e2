"""
rota_auth.domain.ids

UUID-backed identifiers.

Responsibilities:
- `UserId`: account identity, generated at signup, foreign key for owned resources.
- `LoginAttemptId`: identity of one pending 2FA challenge; treated as a secret
  because holding it is half of what redeems the challenge.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from rota_auth.domain.errors import ValidationError
from rota_auth.domain.secret import SecretValue


def _parse_uuid(raw: str | uuid.UUID, *, code: str, label: str) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError(code, f"Invalid {label}") from e


@dataclass(frozen=True, slots=True)
class UserId:
    value: uuid.UUID

    @classmethod
    def parse(cls, raw: str | uuid.UUID) -> UserId:
        return cls(_parse_uuid(raw, code="invalid_user_id", label="user id"))

    @classmethod
    def generate(cls) -> UserId:
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)


class LoginAttemptId(SecretValue):
    __slots__ = ()

    @classmethod
    def parse(cls, raw: str) -> LoginAttemptId:
        parsed = _parse_uuid(raw, code="invalid_login_attempt_id", label="login attempt id")
        # Canonical form, so equality against generated ids ignores hex case and braces.
        return cls(str(parsed))

    @classmethod
    def generate(cls) -> LoginAttemptId:
        return cls(str(uuid.uuid4()))
