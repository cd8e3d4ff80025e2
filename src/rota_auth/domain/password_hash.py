from __future__ import annotations

import argon2
from argon2.exceptions import InvalidHashError

from rota_auth.domain.secret import SecretValue


class MalformedHashError(ValueError):
    """
    A stored hash does not parse. This signals data corruption, never bad
    user input, so stores surface it as an unexpected error.
    """


class PasswordHash(SecretValue):
    """Argon2 hash in PHC string format (`$argon2id$v=19$m=...,t=...,p=...$salt$digest`)."""

    __slots__ = ()

    @classmethod
    def parse(cls, raw: str) -> PasswordHash:
        try:
            argon2.extract_parameters(raw)
        except InvalidHashError as e:
            raise MalformedHashError("failed to parse password hash") from e
        return cls(raw)
