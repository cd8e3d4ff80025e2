"""
rota_auth.domain.errors

Error taxonomy for the authentication core.

Responsibilities:
- `ValidationError`: a raw value failed to parse into a domain type.
- `AuthAPIError` family: the outcomes the orchestrator reports to callers.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """
    Malformed caller input. `code` is stable for programmatic checks;
    `message` is safe to return to the caller.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class PasswordMismatchError(Exception):
    """Candidate password does not match the stored hash."""


class PasswordHashingError(Exception):
    """Hash computation or verification failed for a reason other than a mismatch."""


class AuthAPIError(Exception):
    """Base class for errors surfaced by `AuthService`."""

    message = "Authentication error"

    def __str__(self) -> str:
        return self.message


class InvalidInputError(AuthAPIError):
    def __init__(self, error: ValidationError) -> None:
        super().__init__(error.message)
        self.error = error
        self.message = error.message


class IncorrectCredentialsError(AuthAPIError):
    # Unknown account, wrong password and 2FA mismatch all collapse here.
    message = "Incorrect credentials"


class AccountExistsError(AuthAPIError):
    message = "User already exists"


class AccountNotFoundError(AuthAPIError):
    message = "User not found"


class MissingTokenError(AuthAPIError):
    message = "Missing token"


class InvalidTokenError(AuthAPIError):
    message = "Invalid token"


class UnexpectedError(AuthAPIError):
    """
    Store I/O failure, corrupt stored data, hashing/signing failure or email
    delivery failure. Always raised `from` the underlying cause.
    """

    message = "Unexpected error"

    def __init__(self, context: str) -> None:
        super().__init__(context)
        self.context = context


# --- Module Notes -----------------------------------------------------------
# `UnexpectedError.context` is for server-side logs only; the API renders the
# generic class message.
