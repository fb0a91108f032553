"""Stateless endpoints that parse, load and build CSP header values.

Every request works on a fresh policy; nothing is kept between requests.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException

from csp_builder.config.loader import get_settings
from csp_builder.core.catalog import get_catalog
from csp_builder.core.explain import explanation_entries
from csp_builder.core.parser import is_loadable, parse_policy
from csp_builder.core.policy import create_policy
from csp_builder.core.serializer import serialize
from csp_builder.models.policy import (
    BuildRequest,
    HeaderRequest,
    ParsedDirectiveOut,
    ParseResponse,
    PolicyResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/policy", tags=["policy"])


def _check_length(*texts: str) -> None:
    limit = get_settings().max_header_length
    for text in texts:
        if len(text) > limit:
            logger.warning("header_too_long", length=len(text), limit=limit)
            raise HTTPException(status_code=413, detail=f"Header exceeds {limit} characters")


@router.post("/parse", response_model=ParseResponse)
async def parse_header(body: HeaderRequest):
    """Parse a header without loading it; ``loadable`` gates a commit action."""
    _check_length(body.header)
    parsed = parse_policy(body.header)
    catalog = get_catalog()
    return ParseResponse(
        directives=[ParsedDirectiveOut(name=p.name, values=p.values) for p in parsed],
        loadable=is_loadable(parsed),
        unknown=[p.name for p in parsed if p.name not in catalog],
    )


@router.post("/load", response_model=PolicyResponse)
async def load_header(body: HeaderRequest):
    """Load a header into a fresh policy and return its normalized form."""
    _check_length(body.header)
    policy = create_policy()
    result = policy.load_header(body.header)
    return PolicyResponse.from_policy(
        policy, serialize(policy), explanation_entries(policy), unknown=result.unknown
    )


@router.post("/build", response_model=PolicyResponse)
async def build_policy(body: BuildRequest):
    """Apply edits to an optional base header and return the result."""
    _check_length(body.base, *(item.value for item in (*body.add, *body.remove)))
    policy = create_policy()
    unknown: list[str] = []
    if body.base:
        unknown.extend(policy.load_header(body.base).unknown)

    def _note(name: str, status) -> None:
        if status is None and name not in unknown:
            unknown.append(name)

    for item in body.add:
        _note(item.directive, policy.add_value(item.directive, item.value))
    for item in body.remove:
        _note(item.directive, policy.remove_value(item.directive, item.value))
    for name in body.enable:
        _note(name, policy.set_enabled(name, True))
    for name in body.disable:
        _note(name, policy.set_enabled(name, False))

    header = serialize(policy)
    logger.info("policy_built", directives=len(policy.to_dict()), length=len(header))
    return PolicyResponse.from_policy(policy, header, explanation_entries(policy), unknown=unknown)
