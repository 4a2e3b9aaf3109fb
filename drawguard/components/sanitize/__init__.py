"""
Sanitize component - content filters for untrusted drawing fields.
"""

from ._impl import (
    DEFAULT_CONFIG,
    DEFAULT_TEXT_MAX,
    HTML_POLICY,
    SVG_POLICY,
    TEXT_POLICY,
    URL_POLICY,
    SanitizerConfig,
    UrlPolicy,
    policy_from_rules,
    sanitize_html,
    sanitize_svg,
    sanitize_text,
    sanitize_url,
    strip_control_chars,
    url_policy_from_rules,
)
from .component import (
    build_config,
    run,
    run_sanitize_html,
    run_sanitize_svg,
    run_sanitize_text,
    run_sanitize_url,
)
from .models import (
    SanitizeHtmlInput,
    SanitizeOutput,
    SanitizeSvgInput,
    SanitizeTextInput,
    SanitizeUrlInput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_sanitize_html",
    "run_sanitize_svg",
    "run_sanitize_text",
    "run_sanitize_url",
    "build_config",
    # Input models
    "SanitizeHtmlInput",
    "SanitizeSvgInput",
    "SanitizeTextInput",
    "SanitizeUrlInput",
    # Output models
    "SanitizeOutput",
    # Ports
    "RulesPort",
    # Filters
    "sanitize_html",
    "sanitize_svg",
    "sanitize_text",
    "sanitize_url",
    "strip_control_chars",
    # Configuration
    "DEFAULT_CONFIG",
    "DEFAULT_TEXT_MAX",
    "HTML_POLICY",
    "SVG_POLICY",
    "TEXT_POLICY",
    "URL_POLICY",
    "SanitizerConfig",
    "UrlPolicy",
    "policy_from_rules",
    "url_policy_from_rules",
]
