"""Execution scaffold injection."""

from __future__ import annotations

import re

from plc.config import ScaffoldConfig, ScaffoldRule


class ScaffoldBuilder:
    """Adds a directive for each scaffold category the prompt lacks.

    Each :class:`ScaffoldRule` lists trigger patterns (case-insensitive
    regexes). A rule is satisfied when any pattern matches the context or the
    query; unsatisfied rules contribute their directive, in rule order.
    """

    def __init__(self, config: ScaffoldConfig | None = None) -> None:
        self.config = config or ScaffoldConfig()
        self._matchers: list[tuple[ScaffoldRule, re.Pattern[str]]] = [
            (
                rule,
                re.compile(
                    "|".join(f"(?:{pattern})" for pattern in rule.patterns),
                    flags=re.IGNORECASE,
                ),
            )
            for rule in self.config.rules
        ]

    def missing(self, query: str, context: str) -> list[ScaffoldRule]:
        combined = context + "\n" + query.strip()
        return [rule for rule, matcher in self._matchers if not matcher.search(combined)]

    def build(self, query: str, context: str) -> list[str]:
        """Return directive lines for missing categories (empty if none)."""
        return [rule.directive for rule in self.missing(query, context)]

    def render(self, query: str, context: str) -> str:
        directives = self.build(query, context)
        return "\n".join(directives) if directives else self.config.placeholder
