"""Tests for clause splitting and quote-aware tokenizing."""

from __future__ import annotations

from csp_builder.core.tokenizer import split_clauses, tokenize_clause


# ── tokenize_clause ──────────────────────────────────────────────────────


class TestTokenizeClause:
    def test_simple_clause(self):
        assert tokenize_clause("script-src 'self' https:") == ["script-src", "'self'", "https:"]

    def test_unquoted_space_still_separates(self):
        assert tokenize_clause("'self' https://a b.com") == ["'self'", "https://a", "b.com"]

    def test_quoted_span_keeps_whitespace(self):
        assert tokenize_clause("script-src 'a b' c") == ["script-src", "'a b'", "c"]

    def test_quotes_are_kept_in_token(self):
        assert tokenize_clause("'nonce-abc123'") == ["'nonce-abc123'"]

    def test_escaped_quote_does_not_toggle(self):
        assert tokenize_clause("a\\'b c") == ["a\\'b", "c"]

    def test_unterminated_quote_runs_to_end(self):
        assert tokenize_clause("script-src 'self https:") == ["script-src", "'self https:"]

    def test_empty_string(self):
        assert tokenize_clause("") == []

    def test_whitespace_only(self):
        assert tokenize_clause("   ") == []


class TestTokenizeWhitespace:
    """Whitespace outside quotes collapses without empty tokens."""

    def test_leading_and_trailing(self):
        assert tokenize_clause("  img-src data:  ") == ["img-src", "data:"]

    def test_consecutive_spaces(self):
        assert tokenize_clause("img-src    'self'     data:") == ["img-src", "'self'", "data:"]

    def test_tabs_and_newlines(self):
        assert tokenize_clause("img-src\t'self'\ndata:") == ["img-src", "'self'", "data:"]


# ── split_clauses ────────────────────────────────────────────────────────


class TestSplitClauses:
    def test_splits_on_semicolon(self):
        assert split_clauses("default-src 'self'; script-src 'none'") == [
            "default-src 'self'",
            "script-src 'none'",
        ]

    def test_drops_empty_pieces(self):
        assert split_clauses(";; default-src 'self' ;  ;") == ["default-src 'self'"]

    def test_only_separators(self):
        assert split_clauses(" ; ; ") == []

    def test_empty(self):
        assert split_clauses("") == []
