"""Parse CSP header text into ordered (directive, values) pairs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from csp_builder.core.tokenizer import split_clauses, tokenize_clause


class ParsedDirective(BaseModel):
    """One directive clause as written in the header."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[str] = Field(default_factory=list)


def parse_policy(text: str) -> list[ParsedDirective]:
    """Parse a CSP header value.

    Directive names are kept verbatim and are not checked against the
    catalog. Repeated directives are all returned, in order. Empty or
    whitespace-only input yields an empty list.

    Example:
        >>> parse_policy("default-src 'self'; upgrade-insecure-requests")
        [ParsedDirective(name="default-src", values=["'self'"]),
         ParsedDirective(name="upgrade-insecure-requests", values=[])]
    """
    parsed: list[ParsedDirective] = []
    for clause in split_clauses(text):
        tokens = tokenize_clause(clause)
        if not tokens:
            continue
        parsed.append(ParsedDirective(name=tokens[0], values=tokens[1:]))
    return parsed


def is_loadable(parsed: list[ParsedDirective]) -> bool:
    """Whether a parse result is worth committing into a policy."""
    return len(parsed) > 0


def describe_parsed(parsed: list[ParsedDirective]) -> list[str]:
    """Preview lines of the form ``name: value, value``."""
    return [f"{item.name}: {', '.join(item.values)}".rstrip() for item in parsed]
