"""
Sanitize component - content filters for untrusted drawing fields.

Provides markup, SVG, plain-text and URL filtering.

Invariants:
- I1: Non-string input yields an empty string
- I2: Dangerous tags are removed with their content
- I3: No attribute outside the allow-list survives
- I4: Text is bounded before it is filtered
- I5: Only allow-listed URL prefixes are returned
"""

from __future__ import annotations

from typing import Any

from ._impl import (
    DEFAULT_CONFIG,
    HTML_POLICY,
    SVG_POLICY,
    TEXT_POLICY,
    SanitizerConfig,
    policy_from_rules,
    sanitize_html,
    sanitize_svg,
    sanitize_text,
    sanitize_url,
    url_policy_from_rules,
)
from .models import (
    SanitizeHtmlInput,
    SanitizeOutput,
    SanitizeSvgInput,
    SanitizeTextInput,
    SanitizeUrlInput,
)
from .ports import RulesPort


def build_config(rules: RulesPort | None) -> SanitizerConfig:
    """Build filter config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    return SanitizerConfig(
        html=policy_from_rules(rules.get_filter_rules("html"), HTML_POLICY),
        text=policy_from_rules(rules.get_filter_rules("text"), TEXT_POLICY),
        svg=policy_from_rules(rules.get_filter_rules("svg"), SVG_POLICY),
        urls=url_policy_from_rules(rules.get_url_rules()),
    )


def _output(original: Any, value: str) -> SanitizeOutput:
    return SanitizeOutput(value=value, changed=value != original)


# --- Component Entry Points ---


def run_sanitize_html(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """Filter a rich-text fragment."""
    config = build_config(rules)
    return _output(inp.value, sanitize_html(inp.value, config.html))


def run_sanitize_svg(
    inp: SanitizeSvgInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """Filter an SVG preview."""
    config = build_config(rules)
    return _output(inp.value, sanitize_svg(inp.value, config.svg))


def run_sanitize_text(
    inp: SanitizeTextInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """Normalize a free-form text field."""
    config = build_config(rules)
    return _output(inp.value, sanitize_text(inp.value, inp.max_length, config.text))


def run_sanitize_url(
    inp: SanitizeUrlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """Sanitize a link."""
    config = build_config(rules)
    return _output(inp.value, sanitize_url(inp.value, config.urls))


def run(
    inp: SanitizeHtmlInput | SanitizeSvgInput | SanitizeTextInput | SanitizeUrlInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeOutput:
    """
    Main entry point for the sanitize component.

    Dispatches to the filter matching the input type.
    """
    if isinstance(inp, SanitizeHtmlInput):
        return run_sanitize_html(inp, rules=rules)
    elif isinstance(inp, SanitizeSvgInput):
        return run_sanitize_svg(inp, rules=rules)
    elif isinstance(inp, SanitizeTextInput):
        return run_sanitize_text(inp, rules=rules)
    elif isinstance(inp, SanitizeUrlInput):
        return run_sanitize_url(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
