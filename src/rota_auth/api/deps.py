"""
rota_auth.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the auth service.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from rota_auth.app_state import AppState
from rota_auth.services.auth_service import AuthService
from rota_auth.settings import Settings


def app_state(request: Request) -> AppState:
    # Built on app startup in `rota_auth.api.app.create_app`.
    return request.app.state.auth  # type: ignore[attr-defined]


def settings_dep(request: Request) -> Settings:
    return app_state(request).settings


def auth_service_dep(request: Request) -> AuthService:
    return app_state(request).auth_service


# --- Module Notes -----------------------------------------------------------
# Settings come from app state (not `get_settings()`) so an app built with
# explicit test settings never reads the environment.
