from __future__ import annotations

import re
import secrets

from rota_auth.domain.errors import ValidationError
from rota_auth.domain.secret import SecretValue

# ASCII digits only; `\d` would also accept other Unicode decimal digits.
_CODE_RE = re.compile(r"[0-9]{6}")


class TwoFACode(SecretValue):
    __slots__ = ()

    @classmethod
    def parse(cls, raw: str) -> TwoFACode:
        if not isinstance(raw, str) or _CODE_RE.fullmatch(raw) is None:
            raise ValidationError("invalid_two_fa_code", "Code is invalid")
        return cls(raw)

    @classmethod
    def generate(cls) -> TwoFACode:
        return cls(f"{secrets.randbelow(1_000_000):06d}")
