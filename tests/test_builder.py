"""Tests for the fluent rule builder."""

from __future__ import annotations

import pytest

from rulesmith import RuleBuilder
from rulesmith.core.context import Context
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.dsl.registry import get_dialect
from rulesmith.exceptions import RuleDefinitionError
from rulesmith.operators import And, ContainsSubset, EqualTo, GreaterThan, IsEmpty


def test_variables_are_cached_by_name() -> None:
    rb = RuleBuilder()

    assert rb["age"] is rb["age"]
    assert "age" in rb
    assert "name" not in rb


def test_deleting_a_variable_drops_the_cache_entry() -> None:
    rb = RuleBuilder()
    first = rb["age"]

    del rb["age"]

    assert "age" not in rb
    assert rb["age"] is not first


def test_assigned_value_applies_when_fact_is_missing() -> None:
    rb = RuleBuilder()
    rb["limit"] = 10
    rule = rb.create(rb["total"].less_than(rb["limit"]))

    assert rule.evaluate(Context({"total": 5}))
    assert not rule.evaluate(Context({"total": 5, "limit": 3}))


def test_fluent_comparison_builds_plain_ir() -> None:
    rb = RuleBuilder()

    condition = rb["age"].greater_than(17)

    assert condition == GreaterThan(Variable("age"), Variable(None, 17))


def test_properties_chain_and_cache() -> None:
    rb = RuleBuilder()
    city = rb["user"]["address"]["city"]

    assert city is rb["user"]["address"]["city"]
    assert city == VariableProperty(VariableProperty(Variable("user"), "address"), "city")
    assert city.path == "user.address.city"


def test_logical_helpers_combine_conditions() -> None:
    rb = RuleBuilder()
    rule = rb.create(
        rb.logical_and(
            rb["age"].greater_than_or_equal_to(18),
            rb.logical_or(
                rb["user"]["roles"].set_contains("admin"),
                rb.logical_not(rb["user"]["name"].starts_with_insensitive("guest")),
            ),
        )
    )

    assert rule.evaluate(Context({"age": 30, "user": {"roles": ["admin"], "name": "Guest1"}}))
    assert rule.evaluate(Context({"age": 30, "user": {"roles": [], "name": "ada"}}))
    assert not rule.evaluate(Context({"age": 30, "user": {"roles": [], "name": "GUEST"}}))
    assert not rule.evaluate(Context({"age": 12, "user": {"roles": ["admin"], "name": "ada"}}))


def test_logical_xor_needs_exactly_one() -> None:
    rb = RuleBuilder()
    condition = rb.logical_xor(rb["a"].equal_to(1), rb["b"].equal_to(1))

    assert condition.evaluate(Context({"a": 1, "b": 2}))
    assert not condition.evaluate(Context({"a": 1, "b": 1}))


def test_math_methods_chain_into_comparisons() -> None:
    rb = RuleBuilder()
    condition = rb["price"].multiply(rb["quantity"]).subtract(5).greater_than(100)

    assert condition.evaluate(Context({"price": 20, "quantity": 6}))
    assert not condition.evaluate(Context({"price": 20, "quantity": 5}))


@pytest.mark.parametrize(
    ("build", "facts", "expected"),
    [
        (lambda rb: rb["x"].negate().abs(), {"x": 4}, 4),
        (lambda rb: rb["x"].divide(4).floor(), {"x": 10}, 2),
        (lambda rb: rb["x"].divide(4).ceil(), {"x": 10}, 3),
        (lambda rb: rb["x"].modulo(4), {"x": 10}, 2),
        (lambda rb: rb["x"].exponentiate(2), {"x": 3}, 9),
        (lambda rb: rb["x"].round(1), {"x": 2.345}, 2.3),
        (lambda rb: rb["xs"].max(), {"xs": [3, 9, 4]}, 9),
        (lambda rb: rb["xs"].min(), {"xs": [3, 9, 4]}, 3),
        (lambda rb: rb["a"].union(rb["b"]), {"a": [1, 2], "b": [2, 3]}, [1, 2, 3]),
        (lambda rb: rb["a"].intersect([2, 3]), {"a": [1, 2, 3]}, [2, 3]),
        (lambda rb: rb["a"].complement([2]), {"a": [1, 2, 3]}, [1, 3]),
        (lambda rb: rb["a"].symmetric_difference([2, 4]), {"a": [1, 2]}, [1, 4]),
    ],
    ids=[
        "abs",
        "floor",
        "ceil",
        "modulo",
        "exponentiate",
        "round",
        "max",
        "min",
        "union",
        "intersect",
        "complement",
        "symmetric-difference",
    ],
)
def test_value_methods_resolve(build, facts: dict[str, object], expected: object) -> None:
    rb = RuleBuilder()

    assert build(rb).prepare_value(Context(facts)).value == expected


def test_set_predicates() -> None:
    rb = RuleBuilder()
    tags = Context({"tags": ["a", "b", "c"]})

    assert rb["tags"].contains_subset(["a", "c"]).evaluate(tags)
    assert rb["tags"].does_not_contain_subset(["a", "z"]).evaluate(tags)
    assert rb["tags"].set_does_not_contain("z").evaluate(tags)
    assert isinstance(rb["tags"].contains_subset(["a"]), ContainsSubset)


def test_string_methods() -> None:
    rb = RuleBuilder()
    context = Context({"email": "Ada@Example.org"})

    assert rb["email"].string_contains("@").evaluate(context)
    assert rb["email"].string_contains_insensitive("example").evaluate(context)
    assert rb["email"].string_does_not_contain("!").evaluate(context)
    assert rb["email"].ends_with(".org").evaluate(context)
    assert rb["email"].ends_with_insensitive(".ORG").evaluate(context)
    assert not rb["email"].starts_with("ada").evaluate(context)


def test_operator_by_name() -> None:
    rb = RuleBuilder()

    condition = rb.operator("isEmpty", rb["notes"])

    assert isinstance(condition, IsEmpty)
    assert condition.evaluate(Context({"notes": ""}))


def test_operator_by_unknown_name_raises() -> None:
    with pytest.raises(RuleDefinitionError, match="Unknown operator: sortOf"):
        RuleBuilder().operator("sortOf", 1)


def test_create_rejects_value_operator() -> None:
    rb = RuleBuilder()

    with pytest.raises(RuleDefinitionError, match="must be a proposition"):
        rb.create(rb["x"].add(1))


def test_built_rule_serializes_like_compiled_rule() -> None:
    rb = RuleBuilder()
    condition = rb.logical_and(rb["age"].greater_than(17), rb["country"].equal_to("NL"))
    dialect = get_dialect("sql")

    assert isinstance(condition, And)
    assert dialect.compile(dialect.serialize(condition)) == condition
    assert condition.get_operands()[1] == EqualTo(Variable("country"), Variable(None, "NL"))
