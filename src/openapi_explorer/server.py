"""Starlette application setup for the OpenAPI Explorer."""

from __future__ import annotations

import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .api import mount_api
from .config import Settings
from .service import ExplorerService

logger = logging.getLogger(__name__)


def build_app(settings: Settings, service: Optional[ExplorerService] = None) -> Starlette:
    service = service or ExplorerService(settings)

    app = Starlette()
    app.state.service = service
    _attach_cors(app, settings)
    _attach_healthcheck(app)
    mount_api(app, service)

    logger.info("Built %s application", settings.service_name)
    return app


def _attach_healthcheck(app: Starlette) -> None:
    async def healthcheck(_request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.add_route("/health", healthcheck, methods=["GET"])


def _attach_cors(app: Starlette, settings: Settings) -> None:
    origins = settings.allowed_origins()
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
