from __future__ import annotations

from dataclasses import dataclass, field

from rota_auth.domain.email import Email
from rota_auth.domain.ids import UserId
from rota_auth.domain.password_hash import PasswordHash


@dataclass(frozen=True, slots=True)
class User:
    """
    Identity record. Created on signup, read on every login, deleted on
    account deletion.
    """

    email: Email
    hash: PasswordHash
    requires_2fa: bool
    id: UserId = field(default_factory=UserId.generate)
