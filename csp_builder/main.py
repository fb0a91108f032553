"""FastAPI application exposing the CSP builder core."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from csp_builder.api.directive_routes import router as directive_router
from csp_builder.api.policy_routes import router as policy_router
from csp_builder.config.loader import load_settings, register_reload_handler
from csp_builder.core.catalog import get_catalog, reset_catalog_cache
from csp_builder.health import router as health_router
from csp_builder.logging_config import setup_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    settings = load_settings()
    setup_logging(log_level=settings.log_level, json_format=settings.log_json)
    register_reload_handler()

    # Fail at startup rather than on the first request
    reset_catalog_cache()
    catalog = get_catalog()
    logger.info("csp_builder_started", directives=len(catalog), port=settings.listen_port)

    yield

    logger.info("csp_builder_stopped")


app = FastAPI(title="CSP Builder", lifespan=lifespan)

app.include_router(health_router)
app.include_router(directive_router)
app.include_router(policy_router)
