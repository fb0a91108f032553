"""CSP policy model: catalog, parse, state, serialize, explain."""

from csp_builder.core.catalog import (
    CatalogError,
    DirectiveCatalog,
    DirectiveKind,
    DirectiveSpec,
    get_catalog,
    load_catalog,
    reset_catalog_cache,
)
from csp_builder.core.explain import Explanation, explain, explanation_entries
from csp_builder.core.parser import ParsedDirective, describe_parsed, is_loadable, parse_policy
from csp_builder.core.policy import (
    ENABLED,
    DirectiveState,
    DirectiveStatus,
    LoadResult,
    Policy,
    add_value,
    clear_all,
    create_policy,
    load_header,
    load_parsed,
    remove_value,
    set_enabled,
)
from csp_builder.core.serializer import serialize
from csp_builder.core.tokenizer import split_clauses, tokenize_clause

__all__ = [
    "CatalogError",
    "DirectiveCatalog",
    "DirectiveKind",
    "DirectiveSpec",
    "DirectiveState",
    "DirectiveStatus",
    "ENABLED",
    "Explanation",
    "LoadResult",
    "ParsedDirective",
    "Policy",
    "add_value",
    "clear_all",
    "create_policy",
    "describe_parsed",
    "explain",
    "explanation_entries",
    "get_catalog",
    "is_loadable",
    "load_catalog",
    "load_header",
    "load_parsed",
    "parse_policy",
    "remove_value",
    "reset_catalog_cache",
    "serialize",
    "set_enabled",
    "split_clauses",
    "tokenize_clause",
]
