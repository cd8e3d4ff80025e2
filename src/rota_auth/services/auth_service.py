"""
rota_auth.services.auth_service

Authentication use cases (decision owner).

Responsibilities:
- Signup, login (with optional 2FA challenge), 2FA verification.
- Logout and account deletion, both revoking the presented session token.
- Token verification for other services.
- Map store/hashing/delivery failures to the smallest safe caller-facing error.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from pydantic import SecretStr

from rota_auth.auth.hashing import PasswordHashingService
from rota_auth.auth.jwt import Claims, JwtValidationError, TokenService, TokenSigningError
from rota_auth.domain.data_stores import (
    BannedTokenStore,
    DeliveryError,
    EmailClient,
    InvalidCredentialsError,
    LoginAttemptNotFoundError,
    TwoFACodeStore,
    UnexpectedStoreError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserStore,
)
from rota_auth.domain.email import Email
from rota_auth.domain.errors import (
    AccountExistsError,
    AccountNotFoundError,
    IncorrectCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    MissingTokenError,
    PasswordHashingError,
    UnexpectedError,
    ValidationError,
)
from rota_auth.domain.ids import LoginAttemptId
from rota_auth.domain.password import Password
from rota_auth.domain.two_fa_code import TwoFACode
from rota_auth.domain.user import User
from rota_auth.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Authenticated:
    """Login finished; `token` is the session token."""

    token: str


@dataclass(frozen=True, slots=True)
class AwaitingTwoFactor:
    """Primary credentials were correct; a code was sent. Never carries the code."""

    login_attempt_id: LoginAttemptId


LoginResult = Authenticated | AwaitingTwoFactor


def _reveal(value: str | SecretStr) -> str:
    return value.get_secret_value() if isinstance(value, SecretStr) else value


class AuthService:
    def __init__(
        self,
        *,
        user_store: UserStore,
        banned_token_store: BannedTokenStore,
        two_fa_code_store: TwoFACodeStore,
        email_client: EmailClient,
        hasher: PasswordHashingService,
        tokens: TokenService,
        two_fa_email_subject: str = "Rota Manager 2FA Code",
    ) -> None:
        self._users = user_store
        self._banned_tokens = banned_token_store
        self._two_fa_codes = two_fa_code_store
        self._email = email_client
        self._hasher = hasher
        self._tokens = tokens
        self._two_fa_subject = two_fa_email_subject

    async def signup(
        self, *, email: str, password: str | SecretStr, requires_2fa: bool
    ) -> User:
        try:
            parsed_email = Email.parse(email)
            parsed_password = Password.parse(_reveal(password))
        except ValidationError as e:
            raise InvalidInputError(e) from e

        try:
            password_hash = await self._hasher.hash(parsed_password)
        except PasswordHashingError as e:
            raise UnexpectedError("failed to hash password during signup") from e

        user = User(email=parsed_email, hash=password_hash, requires_2fa=requires_2fa)
        try:
            await self._users.add(user)
        except UserAlreadyExistsError as e:
            raise AccountExistsError() from e
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to store new user") from e

        log.info("signup_succeeded", user_id=str(user.id), requires_2fa=requires_2fa)
        return user

    async def login(self, *, email: str, password: str | SecretStr) -> LoginResult:
        try:
            parsed_email = Email.parse(email)
            parsed_password = Password.parse(_reveal(password))
        except ValidationError as e:
            raise InvalidInputError(e) from e

        try:
            await self._users.validate(parsed_email, parsed_password)
            # Not atomic with validate: a concurrent delete lands here as not-found.
            user = await self._users.get(parsed_email)
        except (UserNotFoundError, InvalidCredentialsError) as e:
            log.debug(
                "login_rejected",
                email=parsed_email.masked(),
                reason=type(e).__name__,
            )
            raise IncorrectCredentialsError() from e
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to validate user credentials") from e

        if user.requires_2fa:
            return await self._start_two_factor(user.email)
        return Authenticated(token=self._issue(user.email))

    async def _start_two_factor(self, email: Email) -> AwaitingTwoFactor:
        login_attempt_id = LoginAttemptId.generate()
        code = TwoFACode.generate()

        try:
            await self._two_fa_codes.put(email, login_attempt_id, code)
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to store 2FA code") from e

        try:
            await self._email.send_email(email, self._two_fa_subject, code.expose_secret())
        except DeliveryError as e:
            # The stored challenge is unreachable without the attempt id and expires on its own.
            raise UnexpectedError("failed to send 2FA code") from e

        log.info("two_fa_challenge_issued", email=email.masked())
        return AwaitingTwoFactor(login_attempt_id=login_attempt_id)

    async def verify_2fa(
        self, *, email: str, login_attempt_id: str, two_fa_code: str | SecretStr
    ) -> str:
        try:
            parsed_email = Email.parse(email)
            parsed_attempt_id = LoginAttemptId.parse(login_attempt_id)
            parsed_code = TwoFACode.parse(_reveal(two_fa_code))
        except ValidationError as e:
            raise InvalidInputError(e) from e

        try:
            expected_attempt_id, expected_code = await self._two_fa_codes.get(parsed_email)
        except LoginAttemptNotFoundError as e:
            raise IncorrectCredentialsError() from e
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to fetch 2FA code") from e

        # Both fields are always compared in constant time; callers can't tell
        # which one was wrong.
        id_matches = hmac.compare_digest(
            parsed_attempt_id.expose_secret(), expected_attempt_id.expose_secret()
        )
        code_matches = hmac.compare_digest(
            parsed_code.expose_secret(), expected_code.expose_secret()
        )
        if not (id_matches and code_matches):
            log.debug("two_fa_rejected", email=parsed_email.masked())
            raise IncorrectCredentialsError()

        token = self._issue(parsed_email)

        # Removal after issuance decides the winner: of concurrent redemptions only
        # one removes the challenge, the rest discard their token. A crash in
        # between leaves the code redeemable only until its TTL runs out.
        try:
            removed = await self._two_fa_codes.remove(parsed_email)
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to remove 2FA code") from e
        if not removed:
            log.debug("two_fa_already_redeemed", email=parsed_email.masked())
            raise IncorrectCredentialsError()

        log.info("two_fa_verified", email=parsed_email.masked())
        return token

    async def verify_token(self, token: str | None) -> Claims:
        _, claims = await self._session(token)
        return claims

    async def _session(self, token: str | None) -> tuple[str, Claims]:
        if not token:
            raise MissingTokenError()
        try:
            return token, await self._tokens.validate(token)
        except JwtValidationError as e:
            raise InvalidTokenError() from e
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to check token revocation") from e

    async def logout(self, token: str | None) -> None:
        """
        Not idempotent: a second logout with the same token finds it revoked
        and fails with `InvalidTokenError`.
        """

        session_token, claims = await self._session(token)
        await self._revoke(session_token, claims)
        log.info("logout_succeeded", jti=claims.jti)

    async def delete_account(self, token: str | None) -> Email:
        session_token, claims = await self._session(token)

        try:
            email = Email.parse(claims.sub)
        except ValidationError as e:
            # A correctly signed token with a bad subject means we minted garbage.
            raise UnexpectedError("token subject is not a valid email") from e

        try:
            await self._users.delete(email)
        except UserNotFoundError as e:
            raise AccountNotFoundError() from e
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to delete user") from e

        await self._revoke(session_token, claims)
        log.info("account_deleted", email=email.masked())
        return email

    def _issue(self, email: Email) -> str:
        try:
            return self._tokens.issue(email)
        except TokenSigningError as e:
            raise UnexpectedError("failed to create session token") from e

    async def _revoke(self, token: str, claims: Claims) -> None:
        try:
            await self._banned_tokens.revoke(
                token, ttl_seconds=self._tokens.remaining_lifetime(claims)
            )
        except UnexpectedStoreError as e:
            raise UnexpectedError("failed to revoke token") from e


# --- Module Notes -----------------------------------------------------------
# Each store call takes and releases its own lock; no use case here is atomic
# across stores, and every interleaving resolves to one of the errors above.
