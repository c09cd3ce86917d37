"""Tests for the structured rule-definition evaluator and its JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from jsonschema import Draft202012Validator

from rulesmith.core.rule import Rule
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.evaluator import RuleEvaluator
from rulesmith.exceptions import RuleDefinitionError
from rulesmith.operators import And, EqualTo, GreaterThan


ADULT_US: dict[str, Any] = {
    "combinator": "and",
    "value": [
        {"field": "age", "operator": "greaterThan", "value": 17},
        {"field": "country", "operator": "equalTo", "value": "US"},
    ],
}


@pytest.fixture(scope="module")
def schema_validator(schemas_root: Path) -> Draft202012Validator:
    schema = json.loads((schemas_root / "rule_definition.schema.json").read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def test_evaluates_combinator_tree() -> None:
    evaluator = RuleEvaluator.from_dict(ADULT_US)

    assert evaluator.evaluate({"age": 25, "country": "US"})
    assert not evaluator.evaluate({"age": 25, "country": "CA"})
    assert not evaluator.evaluate({"age": 16, "country": "US"})


def test_to_rule_builds_operator_tree() -> None:
    rule = RuleEvaluator(ADULT_US).to_rule({"age": 1})

    assert isinstance(rule, Rule)
    assert rule.condition == And(
        GreaterThan(Variable("age"), Variable(None, 17)),
        EqualTo(Variable("country"), Variable(None, "US")),
    )


def test_string_value_naming_a_fact_is_a_field_reference() -> None:
    definition = {"field": "score", "operator": "greaterThan", "value": "threshold"}
    evaluator = RuleEvaluator(definition)

    assert evaluator.evaluate({"score": 5, "threshold": 3})
    assert not evaluator.evaluate({"score": 2, "threshold": 3})


def test_dotted_value_resolves_through_nested_facts() -> None:
    definition = {"field": "user.age", "operator": "greaterThanOrEqualTo", "value": "limits.min"}
    values = {"user": {"age": 20}, "limits": {"min": 18}}

    rule = RuleEvaluator(definition).to_rule(values)

    subject, bound = rule.condition.get_operands()
    assert isinstance(subject, VariableProperty)
    assert isinstance(bound, VariableProperty)
    assert bound.path == "limits.min"
    assert RuleEvaluator(definition).evaluate(values)


def test_string_value_without_matching_fact_stays_literal() -> None:
    definition = {"field": "status", "operator": "equalTo", "value": "threshold"}

    assert RuleEvaluator(definition).evaluate({"status": "threshold"})


@pytest.mark.parametrize(
    ("definition", "values", "expected"),
    [
        ({"field": "email", "operator": "isNull"}, {}, True),
        ({"field": "tags", "operator": "isEmpty"}, {"tags": []}, True),
        ({"field": "age", "operator": "between", "value": [18, 65]}, {"age": 70}, False),
        ({"field": "role", "operator": "in", "value": ["admin", "owner"]}, {"role": "owner"}, True),
        ({"field": "name", "operator": "matches", "value": "^J"}, {"name": "Jane"}, True),
        ({"field": "day", "operator": "after", "value": "2024-01-01"}, {"day": "2024-06-01"}, True),
        (
            {"combinator": "not", "value": [{"field": "banned", "operator": "equalTo", "value": True}]},
            {"banned": False},
            True,
        ),
        (
            {
                "combinator": "xor",
                "value": [
                    {"field": "a", "operator": "equalTo", "value": 1},
                    {"field": "b", "operator": "equalTo", "value": 1},
                ],
            },
            {"a": 1, "b": 1},
            False,
        ),
        ({"field": "tags", "operator": "containsSubset", "value": ["a", "b"]}, {"tags": ["b", "a", "c"]}, True),
        ({"field": "tags", "operator": "setDoesNotContain", "value": "z"}, {"tags": ["a"]}, True),
    ],
    ids=[
        "is-null",
        "is-empty",
        "between",
        "in",
        "matches",
        "after",
        "not",
        "xor",
        "contains-subset",
        "set-does-not-contain",
    ],
)
def test_operator_catalog(definition: dict[str, Any], values: dict[str, Any], expected: bool) -> None:
    assert RuleEvaluator(definition).evaluate(values) is expected


@pytest.mark.parametrize(
    ("definition", "message"),
    [
        ({"combinator": "maybe", "value": []}, "Invalid combinator: maybe"),
        ({"combinator": "not", "value": [ADULT_US, ADULT_US]}, "Logical NOT must have exactly one argument"),
        ({"combinator": "and", "value": []}, "needs at least one rule"),
        ({"combinator": "or", "value": {"field": "a"}}, "needs a list of rules"),
        ({"field": "a", "operator": "bogus", "value": 1}, "Unknown operator: bogus"),
        ({"field": "a", "operator": "stringLength"}, "does not produce a boolean condition"),
        ({"field": "a", "operator": "and", "value": 1}, "does not produce a boolean condition"),
        ({"operator": "equalTo", "value": 1}, "needs a 'field'"),
        ({"field": "a", "operator": "between", "value": 5}, r"needs a \[low, high\] value"),
        ({"value": 1}, "Invalid rule structure"),
        ({"combinator": "and", "value": [42]}, "Invalid rule structure"),
    ],
    ids=[
        "bad-combinator",
        "not-arity",
        "empty-and",
        "non-list",
        "unknown-operator",
        "value-operator",
        "combinator-as-operator",
        "missing-field",
        "bad-range",
        "no-keys",
        "non-mapping-child",
    ],
)
def test_invalid_definitions(definition: dict[str, Any], message: str) -> None:
    with pytest.raises(RuleDefinitionError, match=message):
        RuleEvaluator(definition).evaluate({})


def test_constructor_requires_mapping() -> None:
    with pytest.raises(RuleDefinitionError, match="must be a mapping"):
        RuleEvaluator([ADULT_US])  # type: ignore[arg-type]


def test_json_and_yaml_sources(tmp_path: Path) -> None:
    json_file = tmp_path / "rule.json"
    json_file.write_text(json.dumps(ADULT_US), encoding="utf-8")
    yaml_file = tmp_path / "rule.yaml"
    yaml_file.write_text(
        "combinator: or\n"
        "value:\n"
        "  - field: age\n"
        "    operator: lessThan\n"
        "    value: 13\n"
        "  - field: age\n"
        "    operator: greaterThan\n"
        "    value: 64\n",
        encoding="utf-8",
    )
    facts_file = tmp_path / "facts.yaml"
    facts_file.write_text("age: 70\ncountry: US\n", encoding="utf-8")

    from_json = RuleEvaluator.from_json_file(json_file)
    from_yaml = RuleEvaluator.from_yaml_file(yaml_file)

    assert from_json.evaluate_json('{"age": 30, "country": "US"}')
    assert from_json.evaluate_yaml_file(facts_file)
    assert from_yaml.evaluate_yaml("age: 10\n")
    assert not from_yaml.evaluate_json('{"age": 30}')


@pytest.mark.parametrize(
    ("loader", "text", "message"),
    [
        (RuleEvaluator.from_json, '{"combinator": ', "Invalid JSON rule definition"),
        (RuleEvaluator.from_json, "[1, 2]", "The rule definition must be a mapping"),
        (RuleEvaluator.from_yaml, "a: [1", "Invalid YAML rule definition"),
        (RuleEvaluator.from_yaml, "- 1\n", "The rule definition must be a mapping"),
    ],
    ids=["json-syntax", "json-array", "yaml-syntax", "yaml-list"],
)
def test_malformed_sources(loader, text: str, message: str) -> None:
    with pytest.raises(RuleDefinitionError, match=message):
        loader(text)


def test_malformed_values_are_reported() -> None:
    evaluator = RuleEvaluator(ADULT_US)

    with pytest.raises(RuleDefinitionError, match="Invalid JSON values"):
        evaluator.evaluate_json("{")
    with pytest.raises(RuleDefinitionError, match="The values must be a mapping"):
        evaluator.evaluate_yaml("just text")


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(RuleDefinitionError, match="Cannot read"):
        RuleEvaluator.from_json_file(tmp_path / "missing.json")


def test_schema_accepts_valid_definitions(schema_validator: Draft202012Validator) -> None:
    definitions = [
        ADULT_US,
        {"field": "email", "operator": "isNull"},
        {"combinator": "not", "value": [{"field": 3, "operator": "in", "value": [1, 2]}]},
        {"field": "d", "operator": "isBetweenDates", "value": ["2024-01-01", "2024-12-31"]},
    ]

    for definition in definitions:
        assert list(schema_validator.iter_errors(definition)) == []


@pytest.mark.parametrize(
    "definition",
    [
        {"combinator": "not", "value": [ADULT_US, ADULT_US]},
        {"combinator": "and", "value": []},
        {"combinator": "maybe", "value": [ADULT_US]},
        {"field": "a", "operator": "bogus"},
        {"field": "", "operator": "equalTo", "value": 1},
        {"field": "a", "operator": "between", "value": [1]},
        {"field": "a", "operator": "equalTo", "value": 1, "extra": True},
    ],
    ids=["not-arity", "empty-and", "bad-combinator", "bad-operator", "empty-field", "short-range", "extra-key"],
)
def test_schema_rejects_invalid_definitions(
    schema_validator: Draft202012Validator, definition: dict[str, Any]
) -> None:
    assert list(schema_validator.iter_errors(definition))
