"""
rota_auth.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that touches the SQL user store and Redis when configured.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text

from rota_auth.api.deps import app_state
from rota_auth.app_state import AppState

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(state: AppState = Depends(app_state)) -> dict[str, str]:
    # In-memory backends are always ready; pooled backends must answer.
    if state.engine is not None:
        async with state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    if state.redis is not None:
        await state.redis.ping()
    return {"status": "ready"}
