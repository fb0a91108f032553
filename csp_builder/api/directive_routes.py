"""Read-only endpoints over the directive catalog."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from csp_builder.core.catalog import get_catalog
from csp_builder.models.policy import DirectiveInfo

router = APIRouter(prefix="/api/directives", tags=["directives"])


@router.get("", response_model=list[DirectiveInfo])
async def list_directives():
    """All supported directives, default-src first."""
    return [DirectiveInfo.from_spec(spec) for spec in get_catalog()]


@router.get("/{name}", response_model=DirectiveInfo)
async def get_directive(name: str):
    """One directive by name."""
    spec = get_catalog().get(name)
    if spec is None:
        raise HTTPException(status_code=404, detail="Directive not found")
    return DirectiveInfo.from_spec(spec)
