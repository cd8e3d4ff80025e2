"""
rota_auth.api.errors

Rendering of `AuthAPIError` into HTTP responses.

Responsibilities:
- Map each error kind to a status code and a `{"error": ...}` body.
- Log expected failures at debug and unexpected ones at error with the full
  causal chain; never put internal detail in the response.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from rota_auth.domain.errors import (
    AccountExistsError,
    AccountNotFoundError,
    AuthAPIError,
    IncorrectCredentialsError,
    InvalidInputError,
    InvalidTokenError,
    MissingTokenError,
    UnexpectedError,
)
from rota_auth.observability.logging import get_logger

log = get_logger(__name__)

_STATUS: dict[type[AuthAPIError], int] = {
    InvalidInputError: HTTP_400_BAD_REQUEST,
    MissingTokenError: HTTP_400_BAD_REQUEST,
    IncorrectCredentialsError: HTTP_401_UNAUTHORIZED,
    InvalidTokenError: HTTP_401_UNAUTHORIZED,
    AccountNotFoundError: HTTP_404_NOT_FOUND,
    AccountExistsError: HTTP_409_CONFLICT,
    UnexpectedError: HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: AuthAPIError) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS:
            return _STATUS[cls]
    return HTTP_500_INTERNAL_SERVER_ERROR


async def auth_api_error_handler(request: Request, exc: AuthAPIError) -> JSONResponse:
    status = status_for(exc)
    if status >= HTTP_500_INTERNAL_SERVER_ERROR:
        log.error(
            "request_failed",
            error=type(exc).__name__,
            context=getattr(exc, "context", None),
            exc_info=exc,
        )
        message = UnexpectedError.message
    else:
        log.debug("request_rejected", error=type(exc).__name__, status=status)
        message = exc.message
    return JSONResponse(status_code=status, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthAPIError, auth_api_error_handler)
