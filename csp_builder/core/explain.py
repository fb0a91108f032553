"""Human-readable explanation of what a policy allows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from csp_builder.core.catalog import DEFAULT_SRC
from csp_builder.core.policy import DirectiveState, Policy

NONE = "'none'"
SELF = "'self'"
UNSAFE_INLINE = "'unsafe-inline'"
UNSAFE_EVAL = "'unsafe-eval'"
STRICT_DYNAMIC = "'strict-dynamic'"

_NONCE_PREFIXES = ("nonce-", "'nonce-")
_HASH_PREFIXES = ("'sha256-", "'sha384-", "'sha512-")

INHERITED_SUFFIX = " (inherited from default-src)"


@dataclass(frozen=True)
class Explanation:
    """One explanation line, tied to the directive it describes."""

    directive: str
    icon: str
    text: str
    inherited: bool = False


def describe_sources(values: Sequence[str], sources_label: str = "from these domains") -> list[str]:
    """Clauses describing a set of source expressions, in fixed order."""
    clauses: list[str] = []
    if SELF in values:
        clauses.append("from the same origin")
    schemes = [v for v in values if v.endswith(":")]
    if schemes:
        clauses.append(f"via {', '.join(schemes)} schemes")
    if UNSAFE_INLINE in values:
        clauses.append("as inline code (unsafe)")
    if UNSAFE_EVAL in values:
        clauses.append("using dynamic code evaluation (unsafe)")
    if STRICT_DYNAMIC in values:
        clauses.append("from trusted script-loaded sources")
    if any(v.startswith(_NONCE_PREFIXES) for v in values):
        clauses.append("with specific nonce validation")
    if any(v.startswith(_HASH_PREFIXES) for v in values):
        clauses.append("with specific hash validation")
    bare = [
        v for v in values
        if not v.startswith("'") and not v.endswith(":") and not v.startswith(_NONCE_PREFIXES)
    ]
    if bare:
        clauses.append(f"{sources_label}: {', '.join(bare)}")
    return clauses


def explain_directive(state: DirectiveState) -> Explanation | None:
    """Explain one directive, or None when it has nothing to say."""
    spec = state.spec
    if spec.is_boolean:
        text = spec.enabled_text if state.is_set else spec.disabled_text
        return Explanation(directive=spec.name, icon=spec.icon, text=text or spec.name)

    values = state.effective_values
    if not values:
        return None
    inherited = state.is_inherited

    if NONE in values:
        text = spec.blocked or f"{spec.display_label} are blocked entirely"
    else:
        verb = spec.verb or f"{spec.display_label} can be loaded"
        clauses = describe_sources(values, spec.sources_label)
        text = f"{verb} {', '.join(clauses)}" if clauses else verb
    if inherited:
        text += INHERITED_SUFFIX
    return Explanation(directive=spec.name, icon=spec.icon, text=text, inherited=inherited)


def explanation_entries(policy: Policy) -> list[Explanation]:
    """Explanations in policy order. default-src is never explained itself."""
    entries: list[Explanation] = []
    for state in policy:
        if state.name == DEFAULT_SRC:
            continue
        entry = explain_directive(state)
        if entry is not None:
            entries.append(entry)
    return entries


def explain(policy: Policy) -> list[str]:
    return [entry.text for entry in explanation_entries(policy)]
