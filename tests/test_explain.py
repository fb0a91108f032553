"""Tests for the policy explanation text."""

from __future__ import annotations

from csp_builder.core.explain import describe_sources, explain, explanation_entries
from csp_builder.core.serializer import serialize

UIR_OFF = "HTTP requests will not be automatically upgraded to HTTPS"
BAMC_OFF = "Mixed content (HTTP content on HTTPS pages) will not be explicitly blocked"


def _line_for(policy, directive):
    for entry in explanation_entries(policy):
        if entry.directive == directive:
            return entry.text
    return None


class TestBooleanExplanations:
    def test_fresh_policy_only_reports_booleans(self, policy):
        assert explain(policy) == [UIR_OFF, BAMC_OFF]

    def test_enabled_booleans(self, policy):
        policy.set_enabled("upgrade-insecure-requests", True)
        policy.set_enabled("block-all-mixed-content", True)
        assert explain(policy) == [
            "HTTP requests will be automatically upgraded to HTTPS",
            "Mixed content (HTTP content on HTTPS pages) will be blocked",
        ]


class TestInheritance:
    def test_inherited_same_origin(self, policy):
        policy.add_value("default-src", "'self'")
        assert "script-src" not in serialize(policy)
        assert _line_for(policy, "script-src") == (
            "Can load and execute scripts from the same origin (inherited from default-src)"
        )

    def test_default_src_never_explained(self, policy):
        policy.add_value("default-src", "'self'")
        assert _line_for(policy, "default-src") is None

    def test_all_fetch_directives_explained(self, policy, catalog):
        policy.add_value("default-src", "https:")
        explained = [e.directive for e in explanation_entries(policy)]
        expected = [
            spec.name for spec in catalog
            if spec.inherits or spec.is_boolean
        ]
        assert explained == expected

    def test_non_fetch_directive_silent(self, policy):
        policy.add_value("default-src", "'self'")
        assert _line_for(policy, "frame-ancestors") is None
        assert _line_for(policy, "form-action") is None

    def test_own_values_not_marked_inherited(self, policy):
        policy.add_value("default-src", "'self'")
        policy.add_value("img-src", "https:")
        assert _line_for(policy, "img-src") == "Can load images via https: schemes"

    def test_inherited_none(self, policy):
        policy.add_value("default-src", "'none'")
        assert _line_for(policy, "img-src") == "Images are blocked entirely (inherited from default-src)"

    def test_entry_flags_inherited(self, policy):
        policy.add_value("default-src", "'self'")
        entry = next(e for e in explanation_entries(policy) if e.directive == "script-src")
        assert entry.inherited is True
        assert entry.icon == "📜"


class TestNoneShortCircuit:
    def test_object_src_none_ignores_other_tokens(self, policy):
        for value in ("'none'", "'self'", "https:", "plugins.example.com"):
            policy.add_value("object-src", value)
        assert _line_for(policy, "object-src") == "Plugins are blocked entirely"

    def test_frame_ancestors_none(self, policy):
        policy.add_value("frame-ancestors", "'none'")
        assert _line_for(policy, "frame-ancestors") == "Parent frames cannot be embedded anywhere"

    def test_trusted_types_none(self, policy):
        policy.add_value("trusted-types", "'none'")
        assert _line_for(policy, "trusted-types") == "Trusted Types policies are blocked"


class TestClauses:
    def test_all_clauses_in_order(self, policy):
        for value in (
            "cdn.example.com", "https:", "data:", "'unsafe-inline'", "'unsafe-eval'",
            "'strict-dynamic'", "'nonce-abc'", "'sha256-xyz'", "'self'",
        ):
            policy.add_value("script-src", value)
        assert _line_for(policy, "script-src") == (
            "Can load and execute scripts from the same origin, via data:, https: schemes, "
            "as inline code (unsafe), using dynamic code evaluation (unsafe), "
            "from trusted script-loaded sources, with specific nonce validation, "
            "with specific hash validation, from these domains: cdn.example.com"
        )

    def test_unquoted_nonce_is_not_a_domain(self, policy):
        policy.add_value("script-src", "nonce-abc123")
        assert _line_for(policy, "script-src") == "Can load and execute scripts with specific nonce validation"

    def test_sha384_and_sha512(self):
        assert describe_sources(["'sha384-a'"]) == ["with specific hash validation"]
        assert describe_sources(["'sha512-a'"]) == ["with specific hash validation"]

    def test_domains_listed_sorted(self, policy):
        policy.add_value("img-src", "https://a.example.com")
        policy.add_value("img-src", "*.b.example.com")
        assert _line_for(policy, "img-src") == (
            "Can load images from these domains: *.b.example.com, https://a.example.com"
        )

    def test_directive_specific_verbs(self, policy):
        policy.add_value("connect-src", "'self'")
        policy.add_value("form-action", "'self'")
        policy.add_value("frame-ancestors", "'self'")
        assert _line_for(policy, "connect-src") == "Can make network requests from the same origin"
        assert _line_for(policy, "form-action") == "Can submit forms from the same origin"
        assert _line_for(policy, "frame-ancestors") == "Can be embedded from the same origin"

    def test_sandbox_tokens(self, policy):
        policy.add_value("sandbox", "allow-scripts")
        policy.add_value("sandbox", "allow-forms")
        assert _line_for(policy, "sandbox") == "Sandbox allows these capabilities: allow-forms, allow-scripts"

    def test_no_recognized_clause_uses_verb_alone(self, policy):
        policy.add_value("script-src", "'unsafe-hashes'")
        assert _line_for(policy, "script-src") == "Can load and execute scripts"


class TestExplainIsPure:
    def test_repeatable_and_side_effect_free(self, policy):
        policy.add_value("default-src", "'self'")
        before = policy.to_dict()
        assert explain(policy) == explain(policy)
        assert policy.to_dict() == before

    def test_follows_policy_order(self, policy):
        policy.add_value("sandbox", "allow-forms")
        policy.add_value("img-src", "data:")
        directives = [e.directive for e in explanation_entries(policy)]
        assert directives == ["img-src", "upgrade-insecure-requests", "block-all-mixed-content", "sandbox"]
