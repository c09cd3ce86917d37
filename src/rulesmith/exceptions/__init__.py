"""Shared exception hierarchy for Rulesmith."""

from __future__ import annotations

from .base import RulesmithError
from .config import ConfigError
from .context import CyclicFactError, FactError, FrozenFactError, UndefinedFactError
from .dsl import (
    DslError,
    DslSyntaxError,
    JsonDecodeError,
    StructuralMismatchError,
    UnsupportedConstructError,
    UnsupportedOperatorError,
)
from .evaluation import RuleDefinitionError
from .operators import ArithmeticOperandError, CardinalityError, OperandError

__all__ = [
    "ArithmeticOperandError",
    "CardinalityError",
    "ConfigError",
    "CyclicFactError",
    "DslError",
    "DslSyntaxError",
    "FactError",
    "FrozenFactError",
    "JsonDecodeError",
    "OperandError",
    "RuleDefinitionError",
    "RulesmithError",
    "StructuralMismatchError",
    "UndefinedFactError",
    "UnsupportedConstructError",
    "UnsupportedOperatorError",
]
