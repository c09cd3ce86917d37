"""Configuration-related exceptions."""

from __future__ import annotations

from rulesmith.exceptions.base import RulesmithError


class ConfigError(RulesmithError, ValueError):
    """Raised when engine configuration is invalid."""
