"""Rulesmith package."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from rulesmith.builder import BuilderProperty, BuilderVariable, RuleBuilder
from rulesmith.core.context import Context
from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.rule import Rule, RuleSet
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.dsl.registry import get_dialect

__all__ = [
    "BuilderProperty",
    "BuilderVariable",
    "Context",
    "FieldResolver",
    "Rule",
    "RuleBuilder",
    "RuleSet",
    "Variable",
    "VariableProperty",
    "__version__",
    "get_dialect",
]

try:
    __version__ = version("rulesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
