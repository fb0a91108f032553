"""Quote-aware tokenizing of CSP header text."""

from __future__ import annotations

_QUOTE = "'"
_ESCAPE = "\\"


def split_clauses(text: str) -> list[str]:
    """Split a policy on ``;`` into trimmed, non-empty directive clauses."""
    if not text:
        return []
    return [part.strip() for part in text.split(";") if part.strip()]


def tokenize_clause(text: str) -> list[str]:
    """Split one directive clause into tokens.

    Unquoted whitespace separates tokens. A single-quoted span is kept whole,
    quotes included, even when it contains whitespace. A quote preceded by a
    backslash does not open or close a span. An unterminated quote runs to
    the end of the text.

        >>> tokenize_clause("script-src 'self' https://cdn.example.com")
        ["script-src", "'self'", "https://cdn.example.com"]
    """
    tokens: list[str] = []
    current: list[str] = []
    in_quote = False
    prev = ""
    for char in text:
        if char == _QUOTE and prev != _ESCAPE:
            in_quote = not in_quote
            current.append(char)
        elif char.isspace() and not in_quote:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
        prev = char
    if current:
        tokens.append("".join(current))
    return tokens
