"""Config data model for the rule engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_DIALECT, DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class RulesmithConfig:
    """Resolved engine config."""

    dialect: str = DEFAULT_DIALECT
    context_radius: int = DEFAULT_CONTEXT_RADIUS
    max_depth: int = DEFAULT_MAX_DEPTH
    facts: dict[str, Any] = field(default_factory=dict)

    def merged_facts(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """Default facts with *overrides* layered on top."""
        return {**self.facts, **(overrides or {})}
