"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from workspace_access.api.router import api_router
from workspace_access.common.exceptions import register_exception_handlers
from workspace_access.common.logging import log_context, setup_logging
from workspace_access.common.middleware import register_middleware
from workspace_access.infra.db.engine import dispose_engine
from workspace_access.infra.db.session import init_models
from workspace_access.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await init_models(settings)
        logger.info(
            "app.startup",
            extra=log_context(
                app_version=settings.app_version, database_echo=settings.database_echo
            ),
        )
        try:
            yield
        finally:
            await dispose_engine()
            logger.info("app.shutdown")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a configured FastAPI application."""

    settings = settings or get_settings()
    setup_logging(settings)

    docs_enabled = settings.api_docs_enabled
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.debug,
        lifespan=_create_lifespan(settings),
    )
    app.state.settings = settings

    register_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


__all__ = ["create_app"]
