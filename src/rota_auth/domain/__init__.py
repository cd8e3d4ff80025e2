"""
rota_auth.domain

Domain value types, store interfaces and the error taxonomy.

Responsibilities:
- Parse-only constructors for every credential-bearing value.
- Abstract store contracts shared by all backends.
"""

from rota_auth.domain.data_stores import (
    BannedTokenStore,
    DataStoreError,
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
    AuthAPIError,
    IncorrectCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    MissingTokenError,
    PasswordHashingError,
    PasswordMismatchError,
    UnexpectedError,
    ValidationError,
)
from rota_auth.domain.ids import LoginAttemptId, UserId
from rota_auth.domain.password import Password
from rota_auth.domain.password_hash import MalformedHashError, PasswordHash
from rota_auth.domain.two_fa_code import TwoFACode
from rota_auth.domain.user import User

__all__ = [
    "AccountExistsError",
    "AccountNotFoundError",
    "AuthAPIError",
    "BannedTokenStore",
    "DataStoreError",
    "DeliveryError",
    "Email",
    "EmailClient",
    "IncorrectCredentialsError",
    "InvalidCredentialsError",
    "InvalidInputError",
    "InvalidTokenError",
    "LoginAttemptId",
    "LoginAttemptNotFoundError",
    "MalformedHashError",
    "MissingTokenError",
    "Password",
    "PasswordHash",
    "PasswordHashingError",
    "PasswordMismatchError",
    "TwoFACode",
    "TwoFACodeStore",
    "UnexpectedError",
    "UnexpectedStoreError",
    "User",
    "UserAlreadyExistsError",
    "UserId",
    "UserNotFoundError",
    "UserStore",
    "ValidationError",
]
