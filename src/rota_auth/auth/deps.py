"""
rota_auth.auth.deps

FastAPI dependency functions for session tokens.

Responsibilities:
- Pull the caller's session token from a bearer header or the session cookie.
- Leave validation to `AuthService` so every route reports the same errors.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from rota_auth.api.deps import settings_dep
from rota_auth.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def session_token(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> str | None:
    # Bearer header wins; browsers fall back to the http-only cookie set at login.
    if creds is not None and creds.credentials:
        return creds.credentials
    return request.cookies.get(settings.jwt_cookie_name) or None
