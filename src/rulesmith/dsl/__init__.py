"""Surface-syntax front ends: parse, compile, serialize and validate rules."""

from __future__ import annotations

from rulesmith.dsl.registry import DIALECTS, Dialect, get_dialect
from rulesmith.dsl.validation import ValidationResult

__all__ = ["DIALECTS", "Dialect", "ValidationResult", "get_dialect"]
