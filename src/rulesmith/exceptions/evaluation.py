"""Structured rule-definition exceptions."""

from __future__ import annotations

from rulesmith.exceptions.base import RulesmithError


class RuleDefinitionError(RulesmithError, ValueError):
    """Raised when a combinator/operator rule definition is malformed."""
