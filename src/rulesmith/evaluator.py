"""Evaluate combinator/operator rule definitions loaded from dicts, JSON or YAML.

A definition is either a combinator node::

    {"combinator": "and", "value": [<definition>, ...]}

or an operator node::

    {"field": "metrics.score", "operator": "greaterThan", "value": 80}

A string ``value`` that names a fact present in the evaluated values (or a
dotted path whose root is present) is read as a field reference rather
than a literal.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from rulesmith.constants.evaluator import COMBINATORS, RANGE_OPERATORS, UNARY_OPERATORS
from rulesmith.core.context import Context
from rulesmith.core.field_resolver import FieldResolver
from rulesmith.core.operator import Proposition
from rulesmith.core.rule import Rule
from rulesmith.dsl.operands import literal
from rulesmith.exceptions import RuleDefinitionError
from rulesmith.operators import OPERATOR_CLASSES, Not
from rulesmith.types.operators import OperatorKind

logger = logging.getLogger(__name__)

_COMBINATOR_KINDS: frozenset[OperatorKind] = frozenset(OperatorKind(name) for name in COMBINATORS)


class RuleEvaluator:
    """Build and evaluate a rule from its structured definition."""

    def __init__(self, definition: Mapping[str, Any]) -> None:
        if not isinstance(definition, Mapping):
            raise RuleDefinitionError("Rule definition must be a mapping")
        self.definition = definition

    @classmethod
    def from_dict(cls, definition: Mapping[str, Any]) -> RuleEvaluator:
        return cls(definition)

    @classmethod
    def from_json(cls, text: str) -> RuleEvaluator:
        return cls(_load_json(text, "rule definition"))

    @classmethod
    def from_json_file(cls, path: str | Path) -> RuleEvaluator:
        return cls.from_json(_read_text(path))

    @classmethod
    def from_yaml(cls, text: str) -> RuleEvaluator:
        return cls(_load_yaml(text, "rule definition"))

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> RuleEvaluator:
        return cls.from_yaml(_read_text(path))

    def to_rule(self, values: Mapping[str, Any] | None = None) -> Rule:
        """Compile the definition; *values* decide which string values are field references."""
        facts = values or {}
        return Rule(_build(self.definition, facts, FieldResolver()))

    def evaluate(self, values: Mapping[str, Any] | None = None) -> bool:
        facts = dict(values or {})
        result = self.to_rule(facts).evaluate(Context(facts))
        logger.debug("Rule definition evaluated to %s", result)
        return result

    def evaluate_json(self, text: str) -> bool:
        return self.evaluate(_load_json(text, "values"))

    def evaluate_json_file(self, path: str | Path) -> bool:
        return self.evaluate_json(_read_text(path))

    def evaluate_yaml(self, text: str) -> bool:
        return self.evaluate(_load_yaml(text, "values"))

    def evaluate_yaml_file(self, path: str | Path) -> bool:
        return self.evaluate_yaml(_read_text(path))


def _build(definition: Any, values: Mapping[str, Any], resolver: FieldResolver) -> Proposition:
    if not isinstance(definition, Mapping):
        raise RuleDefinitionError("Invalid rule structure")
    if "combinator" in definition:
        return _build_combinator(definition, values, resolver)
    if "operator" in definition:
        return _build_operator(definition, values, resolver)
    raise RuleDefinitionError("Invalid rule structure")


def _build_combinator(definition: Mapping[str, Any], values: Mapping[str, Any], resolver: FieldResolver) -> Proposition:
    combinator = definition["combinator"]
    if not isinstance(combinator, str) or combinator not in COMBINATORS:
        raise RuleDefinitionError(f"Invalid combinator: {combinator}")
    children = definition.get("value")
    if not isinstance(children, list):
        raise RuleDefinitionError(f"Combinator '{combinator}' needs a list of rules as its value")
    if combinator == "not":
        if len(children) != 1:
            raise RuleDefinitionError("Logical NOT must have exactly one argument")
        return Not(_build(children[0], values, resolver))
    if not children:
        raise RuleDefinitionError(f"Combinator '{combinator}' needs at least one rule")
    cls = OPERATOR_CLASSES[OperatorKind(combinator)]
    return cls(*(_build(child, values, resolver) for child in children))  # type: ignore[return-value]


def _build_operator(definition: Mapping[str, Any], values: Mapping[str, Any], resolver: FieldResolver) -> Proposition:
    name = definition["operator"]
    try:
        kind = OperatorKind(name)
    except ValueError:
        raise RuleDefinitionError(f"Unknown operator: {name}") from None
    cls = OPERATOR_CLASSES[kind]
    if kind in _COMBINATOR_KINDS or not issubclass(cls, Proposition):
        raise RuleDefinitionError(f"Operator '{name}' does not produce a boolean condition")

    field = definition.get("field")
    if isinstance(field, int) and not isinstance(field, bool):
        field = str(field)
    if not isinstance(field, str) or not field:
        raise RuleDefinitionError(f"Operator '{name}' needs a 'field'")
    subject = resolver.resolve(field)

    if name in UNARY_OPERATORS:
        return cls(subject)
    value = definition.get("value")
    if name in RANGE_OPERATORS:
        if not isinstance(value, list) or len(value) != 2:
            raise RuleDefinitionError(f"Operator '{name}' needs a [low, high] value")
        return cls(subject, _operand(value[0], values, resolver), _operand(value[1], values, resolver))
    return cls(subject, _operand(value, values, resolver))


def _operand(value: Any, values: Mapping[str, Any], resolver: FieldResolver) -> Any:
    if isinstance(value, str) and value and value.split(".", 1)[0] in values:
        return resolver.resolve(value)
    return literal(value)


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise RuleDefinitionError(f"Cannot read {path}: {exc}") from exc


def _load_json(text: str, what: str) -> Any:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuleDefinitionError(f"Invalid JSON {what}: {exc}") from exc
    return _require_mapping(data, what)


def _load_yaml(text: str, what: str) -> Any:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuleDefinitionError(f"Invalid YAML {what}: {exc}") from exc
    return _require_mapping(data, what)


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise RuleDefinitionError(f"The {what} must be a mapping")
    return data
