"""
Sanitize component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# --- Input Models ---


@dataclass(frozen=True)
class SanitizeHtmlInput:
    """Input for filtering a rich-text fragment."""

    value: Any


@dataclass(frozen=True)
class SanitizeSvgInput:
    """Input for filtering an SVG preview."""

    value: Any


@dataclass(frozen=True)
class SanitizeTextInput:
    """Input for normalizing a free-form text field."""

    value: Any
    max_length: int = 1000


@dataclass(frozen=True)
class SanitizeUrlInput:
    """Input for sanitizing a link."""

    value: Any


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeOutput:
    """Output for any filter."""

    value: str
    changed: bool
    success: bool = True
