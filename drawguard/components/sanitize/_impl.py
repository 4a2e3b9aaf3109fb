"""
Content filters for untrusted drawing fields.

Provides the markup, vector-markup, plain-text and reference (URL) filters.

Key behaviors:
- Non-string input always yields an empty string
- Markup is filtered as a tree: dangerous tags lose their whole subtree,
  unknown tags are unwrapped, no attribute survives outside the allow-list
- Plain text is stripped of control characters and truncated before filtering
- URLs are accepted only from an allow-list of prefixes
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from drawguard.core.markup import FilterPolicy, clean_markup
from drawguard.rules.models import FilterRules, UrlRules

# --- Constants ---

DEFAULT_TEXT_MAX = 1000

# NUL-0x08, VT, FF, 0x0E-0x1F and DEL; newline, tab and CR are kept
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

# Tag names are lowercase because the tokenizer lowercases them
DANGEROUS_TAGS: frozenset[str] = frozenset(
    [
        "script",
        "iframe",
        "object",
        "embed",
        "link",
        "style",
        "form",
        "input",
        "button",
        "select",
        "textarea",
        "svg",
        "foreignobject",
    ]
)

DANGEROUS_ATTRS: frozenset[str] = frozenset(
    [
        "onload",
        "onclick",
        "onerror",
        "onmouseover",
        "onfocus",
        "onblur",
        "onchange",
        "onsubmit",
        "onreset",
        "onkeydown",
        "onkeyup",
        "onkeypress",
        "href",
        "src",
        "action",
        "formaction",
    ]
)

HTML_POLICY = FilterPolicy(
    allowed_tags=frozenset(["b", "i", "u", "em", "strong", "p", "br", "span", "div"]),
    forbidden_tags=DANGEROUS_TAGS,
    forbidden_attrs=DANGEROUS_ATTRS,
)

TEXT_POLICY = FilterPolicy(
    allowed_tags=frozenset(["b", "i", "u", "em", "strong", "br", "span"]),
    forbidden_tags=DANGEROUS_TAGS,
    forbidden_attrs=DANGEROUS_ATTRS | {"style"},
)

SVG_POLICY = FilterPolicy(
    allowed_tags=frozenset(
        [
            "svg",
            "g",
            "rect",
            "circle",
            "ellipse",
            "line",
            "polyline",
            "polygon",
            "path",
            "text",
            "tspan",
        ]
    ),
    allowed_attrs=frozenset(
        [
            "x",
            "y",
            "width",
            "height",
            "cx",
            "cy",
            "r",
            "rx",
            "ry",
            "x1",
            "y1",
            "x2",
            "y2",
            "points",
            "d",
            "fill",
            "stroke",
            "stroke-width",
            "opacity",
            "transform",
            "font-size",
            "font-family",
            "text-anchor",
            "dominant-baseline",
        ]
    ),
    forbidden_tags=frozenset(
        [
            "script",
            "foreignobject",
            "iframe",
            "object",
            "embed",
            "use",
            "image",
            "style",
            "link",
            "defs",
            "symbol",
            "marker",
            "clippath",
            "mask",
            "filter",
        ]
    ),
    forbidden_attrs=frozenset(
        [
            "onload",
            "onclick",
            "onerror",
            "onmouseover",
            "onfocus",
            "onblur",
            "href",
            "xlink:href",
            "src",
            "action",
            "style",
            "class",
            "id",
        ]
    ),
)


# --- Configuration ---


@dataclass(frozen=True)
class UrlPolicy:
    """Scheme deny-list and prefix allow-list for references."""

    blocked_schemes: tuple[str, ...] = ("javascript:", "data:", "vbscript:")
    allowed_prefixes: tuple[str, ...] = ("http://", "https://", "mailto:", "/", "./", "../")


URL_POLICY = UrlPolicy()


@dataclass(frozen=True)
class SanitizerConfig:
    """Filter configuration, one policy per grammar."""

    html: FilterPolicy = HTML_POLICY
    text: FilterPolicy = TEXT_POLICY
    svg: FilterPolicy = SVG_POLICY
    urls: UrlPolicy = field(default_factory=UrlPolicy)


DEFAULT_CONFIG = SanitizerConfig()


def policy_from_rules(rules: FilterRules | None, base: FilterPolicy) -> FilterPolicy:
    """
    Narrow a built-in policy with configured lists.

    Allowed lists are intersected with the base policy and forbidden lists
    are added to it, so configuration can never widen a filter.
    """
    if rules is None:
        return base
    return FilterPolicy(
        allowed_tags=base.allowed_tags & {t.lower() for t in rules.allowed_tags},
        allowed_attrs=base.allowed_attrs & {a.lower() for a in rules.allowed_attrs},
        forbidden_tags=base.forbidden_tags | {t.lower() for t in rules.forbidden_tags},
        forbidden_attrs=base.forbidden_attrs | {a.lower() for a in rules.forbidden_attrs},
        void_tags=base.void_tags,
    )


def url_policy_from_rules(rules: UrlRules | None, base: UrlPolicy = URL_POLICY) -> UrlPolicy:
    """Narrow the built-in URL policy with configured lists."""
    if rules is None:
        return base
    blocked = list(base.blocked_schemes)
    blocked.extend(s.lower() for s in rules.blocked_schemes if s.lower() not in blocked)
    allowed = tuple(p for p in base.allowed_prefixes if p in {x.lower() for x in rules.allowed_prefixes})
    return UrlPolicy(blocked_schemes=tuple(blocked), allowed_prefixes=allowed)


# --- Markup Filters ---


def sanitize_html(value: Any, policy: FilterPolicy = HTML_POLICY) -> str:
    """Filter a rich-text fragment down to inline emphasis and block grouping."""
    if not isinstance(value, str):
        return ""
    return clean_markup(value, policy).strip()


def sanitize_svg(value: Any, policy: FilterPolicy = SVG_POLICY) -> str:
    """Filter an SVG document down to purely geometric primitives."""
    if not isinstance(value, str):
        return ""
    return clean_markup(value, policy).strip()


# --- Plain Text ---


def strip_control_chars(value: str) -> str:
    """Remove ASCII control characters except newline, tab and carriage return."""
    return CONTROL_CHAR_PATTERN.sub("", value)


def sanitize_text(
    value: Any,
    max_length: int = DEFAULT_TEXT_MAX,
    policy: FilterPolicy = TEXT_POLICY,
) -> str:
    """
    Normalize a free-form text field.

    Control characters are removed and the result truncated to max_length
    before markup filtering, then surrounding whitespace is trimmed. The
    filtered output is held to max_length as well, since escaping can
    lengthen it.
    """
    if not isinstance(value, str):
        return ""

    truncated = strip_control_chars(value)[:max_length]
    return clean_markup(truncated, policy, max_length).strip()


# --- References ---


def sanitize_url(value: Any, policy: UrlPolicy = URL_POLICY) -> str:
    """
    Sanitize a link, returning an empty string if it is not allowed.

    Scheme-relative references (//host) are rejected along with unknown
    schemes and bare strings.
    """
    if not isinstance(value, str):
        return ""

    trimmed = value.strip()
    lowered = trimmed.lower()

    if lowered.startswith(policy.blocked_schemes):
        return ""
    if lowered.startswith(("//", "/\\")):
        return ""
    if lowered.startswith(policy.allowed_prefixes):
        return trimmed
    return ""
