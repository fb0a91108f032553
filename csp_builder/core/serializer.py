"""Render policy state as a CSP header value."""

from __future__ import annotations

from csp_builder.core.policy import DirectiveState, Policy


def serialize_directive(state: DirectiveState) -> str:
    """One clause, or "" when the directive contributes nothing.

    Only own values are written; inheritance from default-src is left to
    the browser.
    """
    if not state.is_set:
        return ""
    if state.spec.is_boolean:
        return state.name
    return f"{state.name} {' '.join(state.values)}"


def serialize(policy: Policy) -> str:
    """Build the header value, e.g. ``default-src 'self'; img-src 'self' https:``."""
    parts = [clause for clause in (serialize_directive(state) for state in policy) if clause]
    return "; ".join(parts)
