"""Tests for the GraphQL-filter grammar."""

from __future__ import annotations

import pytest

from rulesmith.core.context import Context
from rulesmith.core.variables import Variable, VariableProperty
from rulesmith.dsl.graphql import GraphQLCompiler, GraphQLParser, GraphQLSerializer, GraphQLValidator
from rulesmith.dsl.graphql.nodes import ComparisonNode, ListNode, LogicalNode, NullNode, RangeNode, TypeNode
from rulesmith.exceptions import (
    DslSyntaxError,
    JsonDecodeError,
    UnsupportedConstructError,
    UnsupportedOperatorError,
)
from rulesmith.operators import (
    And,
    EqualTo,
    GreaterThanOrEqualTo,
    IsNull,
    IsString,
    LessThan,
    Not,
    Xor,
)


def _compile(source):
    return GraphQLCompiler().compile(GraphQLParser().parse(source))


def test_implicit_and_matches_explicit_and() -> None:
    implicit = _compile({"age": {"gte": 18}, "country": "US"})
    explicit = _compile({"AND": [{"age": {"gte": 18}}, {"country": "US"}]})

    assert implicit == explicit
    assert implicit == And(
        GreaterThanOrEqualTo(Variable("age"), Variable(None, 18)),
        EqualTo(Variable("country"), Variable(None, "US")),
    )


def test_accepts_json_text() -> None:
    assert GraphQLParser().parse('{"age": {"gte": 18}}') == ComparisonNode("age", "gte", 18)


def test_nested_objects_flatten_to_dotted_paths() -> None:
    condition = _compile({"user": {"address": {"city": "Paris"}}})

    (subject, _) = condition.get_operands()
    assert isinstance(subject, VariableProperty)
    assert subject.path == "user.address.city"
    assert condition.evaluate(Context({"user": {"address": {"city": "Paris"}}}))


def test_object_without_operator_keys_is_a_deeper_path() -> None:
    assert GraphQLParser().parse({"age": {"foo": 2}}) == ComparisonNode("age.foo", "eq", 2)
    assert GraphQLParser().parse({"age": {"gte": 1, "foo": 2}}) == LogicalNode(
        "AND", (ComparisonNode("age", "gte", 1), ComparisonNode("age", "foo", 2))
    )


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ({"role": {"in": ["a", "b"]}}, ListNode("role", "in", ("a", "b"))),
        ({"age": {"between": [18, 65]}}, RangeNode("age", 18, 65)),
        ({"deleted": {"isNull": False}}, NullNode("deleted", False)),
        ({"name": {"isType": "string"}}, TypeNode("name", "string")),
        ({"NOT": {"status": "banned"}}, LogicalNode("NOT", (ComparisonNode("status", "eq", "banned"),))),
    ],
    ids=["in", "between", "is-null", "is-type", "not"],
)
def test_parses_operator_shapes(source: dict, expected: object) -> None:
    assert GraphQLParser().parse(source) == expected


def test_null_and_type_checks_compile() -> None:
    assert _compile({"deleted": {"isNull": True}}) == IsNull(Variable("deleted"))
    assert _compile({"deleted": {"isNull": False}}) == Not(IsNull(Variable("deleted")))
    assert _compile({"name": {"isType": "string"}}) == IsString(Variable("name"))


def test_several_operators_on_one_field_evaluate_as_range() -> None:
    condition = _compile({"age": {"gte": 18, "lt": 65}})

    assert condition == And(
        GreaterThanOrEqualTo(Variable("age"), Variable(None, 18)),
        LessThan(Variable("age"), Variable(None, 65)),
    )
    assert condition.evaluate(Context({"age": 40}))
    assert not condition.evaluate(Context({"age": 65}))


@pytest.mark.parametrize(
    "text",
    [
        '{"age": {"gte": 18}, "country": "US"}',
        '{"age": {"gte": 18, "lt": 65}}',
        '{"OR": [{"role": "admin"}, {"age": {"gt": 65}}]}',
        '{"NOT": {"status": "banned"}}',
        '{"deleted": {"isNull": false}}',
        '{"deleted": {"isNull": true}}',
        '{"age": {"between": [18, 65]}}',
        '{"role": {"notIn": ["guest", "bot"]}}',
        '{"name": {"containsInsensitive": "smith"}}',
        '{"name": {"isType": "string"}}',
        '{"AND": [{"OR": [{"a": 1}, {"b": 2}]}, {"c": 3}]}',
    ],
    ids=[
        "implicit-and",
        "field-range",
        "or",
        "not",
        "not-null",
        "null",
        "between",
        "not-in",
        "insensitive",
        "type",
        "compound-and",
    ],
)
def test_canonical_documents_round_trip(text: str) -> None:
    assert GraphQLSerializer().serialize(_compile(text)) == text


def test_explicit_and_of_simple_conditions_serializes_implicitly() -> None:
    condition = _compile({"AND": [{"age": {"gte": 18}}, {"country": "US"}]})

    assert GraphQLSerializer().to_document(condition) == {"age": {"gte": 18}, "country": "US"}


def test_clashing_operators_fall_back_to_explicit_and() -> None:
    condition = And(
        GreaterThanOrEqualTo(Variable("age"), Variable(None, 18)),
        GreaterThanOrEqualTo(Variable("age"), Variable(None, 21)),
    )

    assert GraphQLSerializer().to_document(condition) == {"AND": [{"age": {"gte": 18}}, {"age": {"gte": 21}}]}


def test_serializer_rejects_unsupported_operators() -> None:
    condition = Xor(EqualTo(Variable("a"), Variable(None, 1)), EqualTo(Variable("b"), Variable(None, 2)))

    with pytest.raises(UnsupportedOperatorError, match="GraphQL filter"):
        GraphQLSerializer().serialize(condition)


@pytest.mark.parametrize(
    ("source", "message"),
    [
        ({}, "must not be empty"),
        ({"AND": {"a": 1}}, "AND requires a non-empty list"),
        ({"OR": []}, "OR requires a non-empty list"),
        ({"NOT": [1]}, "NOT operands must be filter objects"),
        ({"age": {"in": 5}}, "'in' requires a list"),
        ({"age": {"between": [1]}}, r"requires a \[min, max\] pair"),
        ({"deleted": {"isNull": "yes"}}, "requires a boolean"),
        ("[1, 2]", "Query must be an object"),
    ],
    ids=["empty", "and-object", "empty-or", "not-list", "in-scalar", "short-range", "null-string", "array"],
)
def test_rejects_malformed_filters(source, message: str) -> None:
    with pytest.raises(DslSyntaxError, match=message):
        GraphQLParser().parse(source)


def test_malformed_json_is_a_distinct_error() -> None:
    with pytest.raises(JsonDecodeError) as excinfo:
        GraphQLParser().parse('{"age": ')

    assert excinfo.value.position == 8
    assert isinstance(excinfo.value, DslSyntaxError)


@pytest.mark.parametrize(
    ("source", "message"),
    [
        ({"age": {"gte": 1, "foo": 2}}, "Unsupported GraphQL filter operator 'foo'"),
        ({"name": {"isType": "widget"}}, "Unsupported type 'widget'"),
        ({"name": {"match": "("}}, "Invalid regular expression"),
    ],
    ids=["unknown-operator", "unknown-type", "bad-regex"],
)
def test_compile_errors(source: dict, message: str) -> None:
    with pytest.raises(UnsupportedConstructError, match=message):
        _compile(source)


def test_validator_does_not_compile() -> None:
    validator = GraphQLValidator()

    assert validator.validate({"age": {"gte": 1, "foo": 2}})
    assert not validator.validate('{"age": ')


def test_nesting_beyond_max_depth_is_rejected() -> None:
    source = {"NOT": {"NOT": {"a": 1}}}

    assert GraphQLParser(max_depth=3).parse(source)
    with pytest.raises(DslSyntaxError, match="maximum depth of 2"):
        GraphQLParser(max_depth=2).parse(source)
