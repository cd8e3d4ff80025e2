"""
rota_auth.db.models

Relational schema for account identities.

Responsibilities:
- Define the `users` table: UUID primary key, unique email, Argon2 hash, 2FA flag.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, String, Text, UniqueConstraint, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from rota_auth.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    requires_2fa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    # Email uniqueness is the store's conflict signal (IntegrityError -> already exists).
    __table_args__ = (UniqueConstraint("email", name="users_email_unique"),)


# --- Module Notes -----------------------------------------------------------
# Owned resources (projects, members, shifts) reference `users.id` from their
# own tables and cascade on delete there.
