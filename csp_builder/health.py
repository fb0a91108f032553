"""Health endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from csp_builder.core.catalog import CatalogError, get_catalog

logger = structlog.get_logger()
router = APIRouter()


@router.get("/health")
async def health():
    """Health check: healthy when the directive catalog is loadable."""
    try:
        catalog = get_catalog()
    except CatalogError as exc:
        logger.error("health_catalog_error", error=str(exc))
        return JSONResponse(status_code=503, content={"status": "degraded", "catalog": "invalid"})
    return {"status": "healthy", "directives": len(catalog)}
