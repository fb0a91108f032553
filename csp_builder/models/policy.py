"""Pydantic models for the policy API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from csp_builder.core.catalog import DirectiveSpec
from csp_builder.core.explain import Explanation
from csp_builder.core.policy import DirectiveStatus, Policy


class SuggestionOut(BaseModel):
    value: str
    description: str


class PrefixTemplateOut(BaseModel):
    prefix: str
    description: str


class DirectiveInfo(BaseModel):
    """Catalog entry as exposed to clients."""

    name: str
    kind: str
    description: str
    label: str
    link_text: str
    icon: str
    inherits: bool
    suggestions: list[SuggestionOut] = Field(default_factory=list)
    prefix_templates: list[PrefixTemplateOut] = Field(default_factory=list)

    @classmethod
    def from_spec(cls, spec: DirectiveSpec) -> DirectiveInfo:
        return cls(
            name=spec.name,
            kind=spec.kind.value,
            description=spec.description,
            label=spec.display_label,
            link_text=spec.link_text or spec.name,
            icon=spec.icon,
            inherits=spec.inherits,
            suggestions=[SuggestionOut(value=s.value, description=s.description) for s in spec.suggestions],
            prefix_templates=[
                PrefixTemplateOut(prefix=p.prefix, description=p.description) for p in spec.prefix_templates
            ],
        )


class HeaderRequest(BaseModel):
    """Request body carrying a raw CSP header value."""

    header: str = ""


class ParsedDirectiveOut(BaseModel):
    name: str
    values: list[str]


class ParseResponse(BaseModel):
    directives: list[ParsedDirectiveOut]
    loadable: bool
    unknown: list[str] = Field(default_factory=list)


class DirectiveValue(BaseModel):
    """A (directive, value) pair to add or remove."""

    directive: str
    value: str


class BuildRequest(BaseModel):
    """Edits applied to a policy, in field order: base, add, remove, enable, disable."""

    base: str = ""
    add: list[DirectiveValue] = Field(default_factory=list)
    remove: list[DirectiveValue] = Field(default_factory=list)
    enable: list[str] = Field(default_factory=list)
    disable: list[str] = Field(default_factory=list)


class DirectiveStateOut(BaseModel):
    name: str
    kind: str
    values: list[str]
    status: DirectiveStatus


class ExplanationOut(BaseModel):
    directive: str
    icon: str
    text: str
    inherited: bool


class PolicyResponse(BaseModel):
    """Serialized header plus the per-directive state and explanation."""

    header: str
    directives: list[DirectiveStateOut]
    explanation: list[ExplanationOut]
    unknown: list[str] = Field(default_factory=list)

    @classmethod
    def from_policy(
        cls,
        policy: Policy,
        header: str,
        explanation: list[Explanation],
        unknown: list[str] | None = None,
    ) -> PolicyResponse:
        return cls(
            header=header,
            directives=[
                DirectiveStateOut(
                    name=state.name,
                    kind=state.spec.kind.value,
                    values=list(state.values),
                    status=state.status,
                )
                for state in policy
            ],
            explanation=[
                ExplanationOut(directive=e.directive, icon=e.icon, text=e.text, inherited=e.inherited)
                for e in explanation
            ],
            unknown=list(unknown or []),
        )
