"""FastAPI application factory."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI

from .metrics import instrument_app, router as metrics_router
from .routers import split
from .schemas import HealthResponse
from .settings import APISettings, get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("samplesplit").setLevel(settings.log_level.upper())
    app = FastAPI(title=settings.app_name, version=settings.version)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz(current: APISettings = Depends(get_settings)) -> HealthResponse:
        return HealthResponse(ok=True, version=current.version, timestamp=datetime.now(timezone.utc))

    app.include_router(split.router)
    app.include_router(metrics_router)
    return instrument_app(app)


app = create_app()
