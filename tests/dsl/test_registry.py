"""Tests for the dialect registry and cross-dialect behavior."""

from __future__ import annotations

import pytest

from rulesmith.core.context import Context
from rulesmith.core.rule import Rule
from rulesmith.dsl.registry import DIALECTS, Dialect, get_dialect
from rulesmith.exceptions import ConfigError


def test_every_registered_name_builds(dialect: Dialect) -> None:
    assert dialect.name in DIALECTS
    assert dialect.validator.dialect == dialect.name


def test_get_dialect_normalizes_name() -> None:
    assert get_dialect("  SQL ").name == "sql"


def test_unknown_dialect_is_a_config_error() -> None:
    with pytest.raises(ConfigError, match="Unknown dialect 'xpath'"):
        get_dialect("xpath")


def test_get_dialect_passes_max_depth() -> None:
    shallow = get_dialect("sql", max_depth=1)

    assert shallow.validate("(a = 1)")
    assert not shallow.validate("((a = 1))")


def test_headline_rule_has_the_same_tree_in_every_dialect(adult_us_rules: dict[str, str]) -> None:
    trees = {name: get_dialect(name).compile(text) for name, text in adult_us_rules.items()}

    first = trees.pop("natural")
    assert all(tree == first for tree in trees.values())


def test_headline_rule_round_trips_in_its_dialect(dialect: Dialect, adult_us_rules: dict[str, str]) -> None:
    text = adult_us_rules[dialect.name]

    assert dialect.serialize(dialect.compile(text)) == text


def test_headline_rule_evaluates_identically(dialect: Dialect, adult_us_rules: dict[str, str]) -> None:
    rule = dialect.to_rule(adult_us_rules[dialect.name])

    assert rule.evaluate(Context({"age": 25, "country": "US"}))
    assert not rule.evaluate(Context({"age": 25, "country": "CA"}))
    assert not rule.evaluate(Context({"age": 16, "country": "US"}))


@pytest.mark.parametrize(
    ("source", "target"),
    [("natural", "sql"), ("sql", "ldap"), ("ldap", "mongo"), ("mongo", "graphql"), ("graphql", "natural")],
    ids=["natural-sql", "sql-ldap", "ldap-mongo", "mongo-graphql", "graphql-natural"],
)
def test_conversion_between_dialects(source: str, target: str, adult_us_rules: dict[str, str]) -> None:
    converted = get_dialect(target).serialize(get_dialect(source).compile(adult_us_rules[source]))

    assert converted == adult_us_rules[target]


def test_to_rule_attaches_action() -> None:
    seen: list[str] = []

    rule = get_dialect("sql").to_rule("age BETWEEN 18 AND 65", lambda ctx: seen.append("hit"))

    assert isinstance(rule, Rule)
    assert rule.execute(Context({"age": 30}))
    assert not rule.execute(Context({"age": 70}))
    assert seen == ["hit"]


def test_serialize_accepts_rules_and_operators() -> None:
    sql = get_dialect("sql")
    rule = sql.to_rule("age > 1")

    assert sql.serialize(rule) == sql.serialize(rule.condition) == "age > 1"


def test_validator_reports_syntax_but_not_compile_errors() -> None:
    mongo = get_dialect("mongo")

    assert mongo.validate({"age": {"$bogus": 1}})
    result = mongo.validate_with_errors('{"age": {"$in": 5}}')
    assert not result.valid
    assert result.error_messages == ["age: '$in' requires a list"]


def test_validator_context_window_follows_radius() -> None:
    sql = get_dialect("sql", context_radius=3)

    result = sql.validate_with_errors("name = 'unterminated")

    assert result.first_error is not None
    assert result.first_error.position == 7
    assert result.first_error.context == " = 'un"
