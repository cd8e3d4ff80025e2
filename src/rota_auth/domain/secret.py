"""
rota_auth.domain.secret

Base class for value types that wrap a sensitive string.

Responsibilities:
- Keep the raw value inside a `pydantic.SecretStr` so default formatting is redacted.
- Require an explicit `expose_secret()` call to read the raw value.
- Compare and hash by the exposed value (and concrete type), not by identity.
"""

from __future__ import annotations

from pydantic import SecretStr


class SecretValue:
    __slots__ = ("_secret",)

    def __init__(self, raw: str) -> None:
        # Subclasses only call this from their validating constructors.
        self._secret = SecretStr(raw)

    def expose_secret(self) -> str:
        return self._secret.get_secret_value()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.expose_secret() == other.expose_secret()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.expose_secret()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}('**********')"

    __str__ = __repr__
