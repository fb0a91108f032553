"""Mutable policy state: one value set per catalog directive.

A :class:`Policy` is created fully populated from the catalog, with every
directive empty and ``default-src`` first. Fetch directives hold a read-only
reference to the policy's ``default-src`` state and resolve inheritance on
demand, so status and effective values are never stale after a mutation.

Mutators never raise on unknown directive names or duplicate/absent values;
they log and return ``None`` (unknown) or the directive's resulting status.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from csp_builder.core.catalog import DEFAULT_SRC, DirectiveCatalog, DirectiveSpec, get_catalog
from csp_builder.core.parser import ParsedDirective, parse_policy

logger = structlog.get_logger()

# Sole member of an enabled boolean directive's value set
ENABLED = "enabled"


class DirectiveStatus(str, Enum):
    """Display status of a directive."""

    OWN = "own"
    INHERITED = "inherited"
    EMPTY = "empty"
    ENABLED = "enabled"
    DISABLED = "disabled"


class DirectiveState:
    """Current values of one directive within a policy."""

    def __init__(self, spec: DirectiveSpec, fallback: DirectiveState | None = None) -> None:
        self.spec = spec
        self._values: set[str] = set()
        self._fallback = fallback

    def __repr__(self) -> str:
        return f"DirectiveState({self.name!r}, values={list(self.values)!r})"

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def values(self) -> tuple[str, ...]:
        """Own values in code-point order."""
        return tuple(sorted(self._values))

    @property
    def is_set(self) -> bool:
        return bool(self._values)

    @property
    def is_inherited(self) -> bool:
        return not self._values and self._fallback is not None and self._fallback.is_set

    @property
    def effective_values(self) -> tuple[str, ...]:
        """Own values, else default-src's values for a fetch directive."""
        if self._values:
            return self.values
        if self.is_inherited:
            return self._fallback.values
        return ()

    @property
    def status(self) -> DirectiveStatus:
        if self.spec.is_boolean:
            return DirectiveStatus.ENABLED if self._values else DirectiveStatus.DISABLED
        if self._values:
            return DirectiveStatus.OWN
        if self.is_inherited:
            return DirectiveStatus.INHERITED
        return DirectiveStatus.EMPTY

    def add(self, value: str) -> bool:
        """Add a value; returns False when it was already present."""
        if self.spec.is_boolean:
            if self._values:
                return False
            self._values = {ENABLED}
            return True
        if value in self._values:
            return False
        self._values.add(value)
        return True

    def discard(self, value: str) -> bool:
        """Remove a value; returns False when it was absent."""
        if value not in self._values:
            return False
        self._values.discard(value)
        return True

    def replace(self, values: Iterable[str]) -> None:
        if self.spec.is_boolean:
            self._values = {ENABLED}
        else:
            self._values = set(values)

    def clear(self) -> None:
        self._values = set()


@dataclass
class LoadResult:
    """Outcome of loading parsed directives into a policy."""

    applied: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    statuses: dict[str, DirectiveStatus] = field(default_factory=dict)


class Policy:
    """Ordered collection of :class:`DirectiveState`, one per catalog entry."""

    def __init__(self, catalog: DirectiveCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else get_catalog()
        default = DirectiveState(self.catalog[DEFAULT_SRC])
        self._default = default
        self._states: dict[str, DirectiveState] = {default.name: default}
        for spec in self.catalog:
            if spec is default.spec:
                continue
            self._states[spec.name] = DirectiveState(spec, fallback=default if spec.inherits else None)

    def __iter__(self) -> Iterator[DirectiveState]:
        return iter(self._states.values())

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, name: str) -> DirectiveState:
        state = self.get(name)
        if state is None:
            raise KeyError(name)
        return state

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def get(self, name: str) -> DirectiveState | None:
        spec = self.catalog.get(name)
        if spec is None:
            return None
        return self._states.get(spec.name)

    @property
    def default_src(self) -> DirectiveState:
        return self._default

    def _lookup(self, name: str, action: str) -> DirectiveState | None:
        state = self.get(name)
        if state is None:
            logger.warning("unknown_directive", directive=name, action=action)
        return state

    # --- Mutators ---

    def add_value(self, name: str, value: str) -> DirectiveStatus | None:
        """Add ``value`` to a directive. Duplicates are ignored."""
        state = self._lookup(name, "add")
        if state is None:
            return None
        value = value.strip()
        if not value:
            return state.status
        if state.add(value):
            logger.debug("directive_value_added", directive=state.name, value=value)
        return state.status

    def remove_value(self, name: str, value: str) -> DirectiveStatus | None:
        """Remove ``value`` from a directive. Absent values are ignored."""
        state = self._lookup(name, "remove")
        if state is None:
            return None
        value = value.strip()
        if state.discard(value):
            logger.debug("directive_value_removed", directive=state.name, value=value)
        return state.status

    def set_enabled(self, name: str, enabled: bool) -> DirectiveStatus | None:
        """Toggle a boolean directive. List directives are left untouched."""
        state = self._lookup(name, "toggle")
        if state is None:
            return None
        if state.spec.is_boolean:
            if enabled:
                state.add(ENABLED)
            else:
                state.clear()
        return state.status

    def clear_all(self) -> None:
        """Empty every directive; the directives themselves remain."""
        for state in self._states.values():
            state.clear()

    def load_parsed(self, parsed: Iterable[ParsedDirective | Mapping[str, Any]]) -> LoadResult:
        """Replace the values of each known directive named in ``parsed``.

        A boolean directive that appears at all becomes enabled, whatever
        tokens follow its name. Unknown names are skipped. Directives not
        named in ``parsed`` keep their values.
        """
        result = LoadResult()
        for item in parsed:
            name, values = _coerce_parsed(item)
            state = self.get(name)
            if state is None:
                logger.debug("parsed_directive_skipped", directive=name)
                result.unknown.append(name)
                continue
            state.replace(values)
            result.applied.append(state.name)
        result.statuses = self.statuses()
        logger.info("policy_loaded", applied=len(result.applied), unknown=len(result.unknown))
        return result

    def load_header(self, text: str) -> LoadResult:
        """Clear the policy, then load a raw header value into it."""
        self.clear_all()
        return self.load_parsed(parse_policy(text))

    # --- Read projections ---

    def statuses(self) -> dict[str, DirectiveStatus]:
        return {state.name: state.status for state in self._states.values()}

    def to_dict(self) -> dict[str, list[str]]:
        """Own values of every directive that has any, in policy order."""
        return {state.name: list(state.values) for state in self._states.values() if state.is_set}


def _coerce_parsed(item: ParsedDirective | Mapping[str, Any] | tuple[str, Any]) -> tuple[str, list[str]]:
    if isinstance(item, ParsedDirective):
        return item.name, item.values
    if isinstance(item, Mapping):
        name, values = item.get("name", ""), item.get("values")
    else:
        name, values = item
    if values is None:
        values = []
    elif isinstance(values, str):
        # A bare string is a single token
        values = [values]
    return str(name), list(values)


# --- Functional interface ---


def create_policy(catalog: DirectiveCatalog | None = None) -> Policy:
    """Create an empty policy with one directive per catalog entry."""
    return Policy(catalog)


def add_value(policy: Policy, name: str, value: str) -> DirectiveStatus | None:
    return policy.add_value(name, value)


def remove_value(policy: Policy, name: str, value: str) -> DirectiveStatus | None:
    return policy.remove_value(name, value)


def set_enabled(policy: Policy, name: str, enabled: bool) -> DirectiveStatus | None:
    return policy.set_enabled(name, enabled)


def clear_all(policy: Policy) -> None:
    policy.clear_all()


def load_parsed(policy: Policy, parsed: Iterable[ParsedDirective | Mapping[str, Any]]) -> LoadResult:
    return policy.load_parsed(parsed)


def load_header(policy: Policy, text: str) -> LoadResult:
    return policy.load_header(text)
