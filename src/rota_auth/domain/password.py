"""
rota_auth.domain.password

Raw password value type.

Responsibilities:
- Enforce length bounds in Unicode code points (not bytes).
- Keep the raw secret out of reprs and logs.
"""

from __future__ import annotations

from typing import Final

from rota_auth.domain.errors import ValidationError
from rota_auth.domain.secret import SecretValue

MIN_PASSWORD_CHARS: Final[int] = 8
MAX_PASSWORD_CHARS: Final[int] = 128


class Password(SecretValue):
    __slots__ = ()

    @classmethod
    def parse(cls, raw: str) -> Password:
        # len() on str counts code points, which is what the bounds are defined over.
        count = len(raw)
        if count < MIN_PASSWORD_CHARS:
            raise ValidationError(
                "invalid_password",
                f"Too short. Should be {MIN_PASSWORD_CHARS} to {MAX_PASSWORD_CHARS} characters.",
            )
        if count > MAX_PASSWORD_CHARS:
            raise ValidationError(
                "invalid_password",
                f"Too long. Should be {MIN_PASSWORD_CHARS} to {MAX_PASSWORD_CHARS} characters.",
            )
        return cls(raw)


# --- Module Notes -----------------------------------------------------------
# Passwords exist only for the duration of a signup/login call; only
# `PasswordHash` is ever persisted.
