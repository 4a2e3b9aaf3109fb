"""
Sanitize component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from drawguard.rules.models import FilterRules, UrlRules


class RulesPort(Protocol):
    """Port for accessing filter rules configuration."""

    def get_filter_rules(self, grammar: str) -> FilterRules | None:
        """Get rules for 'html', 'text' or 'svg'."""
        ...

    def get_url_rules(self) -> UrlRules | None:
        """Get URL scheme rules."""
        ...
