"""Directive catalog: the read-only table of supported CSP directives.

Each entry is a frozen :class:`DirectiveSpec` carrying both the data a
builder UI needs (description, suggestions, prefix templates) and a small
capability descriptor (kind, inheritance eligibility, label, icon and the
explanation phrases). Everything downstream dispatches on these fields
instead of matching directive names.

The table lives in ``config/directives.yaml`` and is loaded once per process.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = structlog.get_logger()

DEFAULT_SRC = "default-src"


class CatalogError(ValueError):
    """The directive catalog file is missing or malformed."""


class DirectiveKind(str, Enum):
    """How a directive's value is expressed on the wire."""

    LIST = "list"
    BOOLEAN = "boolean"


class Suggestion(BaseModel):
    """A well-known value offered for a directive."""

    model_config = ConfigDict(frozen=True)

    value: str
    description: str


class PrefixTemplate(BaseModel):
    """A value prefix the user completes (nonce or hash)."""

    model_config = ConfigDict(frozen=True)

    prefix: str
    description: str


class DirectiveSpec(BaseModel):
    """One supported directive and its behavior."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: DirectiveKind
    description: str
    suggestions: tuple[Suggestion, ...] = ()
    prefix_templates: tuple[PrefixTemplate, ...] = ()

    inherits: bool = False
    label: str = ""
    link_text: str = ""
    icon: str = "•"
    verb: str = ""
    blocked: str = ""
    sources_label: str = "from these domains"
    enabled_text: str = ""
    disabled_text: str = ""

    @model_validator(mode="after")
    def _check_kind(self) -> DirectiveSpec:
        if self.kind is DirectiveKind.BOOLEAN:
            if self.suggestions or self.prefix_templates:
                raise ValueError(f"boolean directive {self.name} cannot carry values")
            if self.inherits:
                raise ValueError(f"boolean directive {self.name} cannot inherit")
        return self

    @property
    def is_boolean(self) -> bool:
        return self.kind is DirectiveKind.BOOLEAN

    @property
    def display_label(self) -> str:
        return self.label or self.name


class _CatalogFile(BaseModel):
    directives: list[DirectiveSpec] = Field(default_factory=list)


class DirectiveCatalog:
    """Ordered, name-keyed lookup over :class:`DirectiveSpec` entries.

    Lookup is case-insensitive on the directive name, since CSP directive
    names are. ``default-src`` always iterates first.
    """

    def __init__(self, specs: list[DirectiveSpec]) -> None:
        by_name: dict[str, DirectiveSpec] = {}
        for spec in specs:
            key = spec.name.lower()
            if key in by_name:
                raise CatalogError(f"duplicate directive in catalog: {spec.name}")
            by_name[key] = spec
        if DEFAULT_SRC not in by_name:
            raise CatalogError(f"catalog must define {DEFAULT_SRC}")
        default = by_name.pop(DEFAULT_SRC)
        self._specs: dict[str, DirectiveSpec] = {DEFAULT_SRC: default, **by_name}

    def get(self, name: str) -> DirectiveSpec | None:
        """Return the spec for ``name``, or None when unsupported."""
        return self._specs.get(name.strip().lower())

    def __getitem__(self, name: str) -> DirectiveSpec:
        spec = self.get(name)
        if spec is None:
            raise KeyError(name)
        return spec

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[DirectiveSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def names(self) -> list[str]:
        return [spec.name for spec in self._specs.values()]

    def fetch_directives(self) -> list[str]:
        """Names of directives that fall back to default-src."""
        return [spec.name for spec in self._specs.values() if spec.inherits]


def load_catalog(path: Path | str) -> DirectiveCatalog:
    """Load and validate a catalog YAML file."""
    path = Path(path)
    if not path.exists():
        logger.error("directive_catalog_not_found", path=str(path))
        raise CatalogError(f"directive catalog not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            raw: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise CatalogError(f"catalog root must be a mapping: {path}")
    try:
        parsed = _CatalogFile.model_validate(raw)
    except ValidationError as exc:
        raise CatalogError(f"invalid directive catalog {path}: {exc}") from exc
    catalog = DirectiveCatalog(parsed.directives)
    logger.info("catalog_loaded", path=str(path), directives=len(catalog))
    return catalog


# Cached catalog
_catalog: DirectiveCatalog | None = None


def get_catalog() -> DirectiveCatalog:
    """Return the process-wide catalog, loading it on first use."""
    global _catalog
    if _catalog is None:
        from csp_builder.config.loader import get_settings

        _catalog = load_catalog(get_settings().catalog_file)
    return _catalog


def reset_catalog_cache() -> None:
    """Reset the catalog cache (for testing and config reload)."""
    global _catalog
    _catalog = None
