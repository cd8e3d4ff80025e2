"""
rota_auth.api.app

FastAPI app factory for the Rota auth service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Build and dispose the shared `AppState` (stores, clients, hash pool).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from fastapi import FastAPI

from rota_auth import __version__
from rota_auth.api.errors import register_error_handlers
from rota_auth.api.routers.auth import router as auth_router
from rota_auth.api.routers.health import router as health_router
from rota_auth.app_state import build_app_state
from rota_auth.domain.data_stores import (
    BannedTokenStore,
    EmailClient,
    TwoFACodeStore,
    UserStore,
)
from rota_auth.observability.logging import configure_logging, get_logger
from rota_auth.observability.middleware import RequestContextMiddleware
from rota_auth.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    user_store: UserStore | None = None,
    banned_token_store: BannedTokenStore | None = None,
    two_fa_code_store: TwoFACodeStore | None = None,
    email_client: EmailClient | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="Rota Auth Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)

    @app.on_event("startup")
    async def _startup() -> None:
        log.info(
            "startup",
            env=settings.env,
            user_store=settings.user_store_backend,
            cache=settings.cache_backend,
            email=settings.email_backend,
        )
        app.state.auth = await build_app_state(
            settings,
            user_store=user_store,
            banned_token_store=banned_token_store,
            two_fa_code_store=two_fa_code_store,
            email_client=email_client,
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        state = getattr(app.state, "auth", None)
        if state is not None:
            await state.aclose()
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# Routes reach the composed services only through `rota_auth.api.deps`.
