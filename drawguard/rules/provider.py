"""
Rules provider - serves a loaded Rules model through the component rules ports.
"""

from __future__ import annotations

from drawguard.rules.models import FilesRules, FilterRules, LimitsRules, Rules, UrlRules


class StaticRulesProvider:
    """Rules port backed by an already loaded Rules model."""

    def __init__(self, rules: Rules) -> None:
        self._rules = rules

    def get_filter_rules(self, grammar: str) -> FilterRules | None:
        return {
            "html": self._rules.html,
            "text": self._rules.text,
            "svg": self._rules.svg,
        }.get(grammar)

    def get_url_rules(self) -> UrlRules | None:
        return self._rules.urls

    def get_limits(self) -> LimitsRules | None:
        return self._rules.limits

    def get_files_rules(self) -> FilesRules | None:
        return self._rules.files
