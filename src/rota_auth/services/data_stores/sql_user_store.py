"""
rota_auth.services.data_stores.sql_user_store

Durable credential store on SQLAlchemy async (SQLite or PostgreSQL).

Responsibilities:
- Map `User` to/from `UserRecord` rows.
- Translate the unique-email constraint into `UserAlreadyExistsError`.
- Wrap every other database failure, and any row that no longer parses, as
  `UnexpectedStoreError` with the original exception chained.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rota_auth.db.models import UserRecord
from rota_auth.domain.data_stores import (
    PasswordVerifier,
    UnexpectedStoreError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserStore,
)
from rota_auth.domain.email import Email
from rota_auth.domain.errors import ValidationError
from rota_auth.domain.ids import UserId
from rota_auth.domain.password_hash import MalformedHashError, PasswordHash
from rota_auth.domain.user import User
from rota_auth.observability.logging import get_logger

log = get_logger(__name__)


class SqlUserStore(UserStore):
    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        hasher: PasswordVerifier,
    ) -> None:
        super().__init__(hasher=hasher)
        self._session_factory = session_factory

    async def add(self, user: User) -> None:
        record = UserRecord(
            id=user.id.value,
            email=user.email.expose_secret(),
            password_hash=user.hash.expose_secret(),
            requires_2fa=user.requires_2fa,
        )
        # One session per operation; nothing here spans multiple store calls.
        async with self._session_factory() as session:
            try:
                session.add(record)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise UserAlreadyExistsError("user already exists") from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise UnexpectedStoreError("failed to insert user") from e
        log.debug("user_added", user_id=str(user.id))

    async def get(self, email: Email) -> User:
        stmt = select(UserRecord).where(UserRecord.email == email.expose_secret())
        async with self._session_factory() as session:
            try:
                record = (await session.execute(stmt)).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise UnexpectedStoreError("failed to fetch user") from e
        if record is None:
            raise UserNotFoundError("user not found")
        return _to_user(record)

    async def delete(self, email: Email) -> None:
        stmt = delete(UserRecord).where(UserRecord.email == email.expose_secret())
        async with self._session_factory() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise UnexpectedStoreError("failed to delete user") from e
        if result.rowcount == 0:
            raise UserNotFoundError("user not found")


def _to_user(record: UserRecord) -> User:
    try:
        return User(
            id=UserId.parse(record.id),
            email=Email.parse(record.email),
            hash=PasswordHash.parse(record.password_hash),
            requires_2fa=bool(record.requires_2fa),
        )
    except (ValidationError, MalformedHashError) as e:
        # Stored data that no longer parses is corruption, not caller error.
        raise UnexpectedStoreError("stored user record is malformed") from e


# --- Module Notes -----------------------------------------------------------
# Account deletion cascades to owned projects through foreign keys declared by
# the scheduling tables, not from here.
