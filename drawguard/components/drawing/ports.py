"""
Drawing component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from drawguard.rules.models import FilesRules, FilterRules, LimitsRules, UrlRules


class RulesPort(Protocol):
    """Port for accessing drawing sanitization rules."""

    def get_filter_rules(self, grammar: str) -> FilterRules | None:
        """Get rules for 'html', 'text' or 'svg'."""
        ...

    def get_url_rules(self) -> UrlRules | None:
        """Get URL scheme rules."""
        ...

    def get_limits(self) -> LimitsRules | None:
        """Get size limits."""
        ...

    def get_files_rules(self) -> FilesRules | None:
        """Get attached file payload rules."""
        ...
