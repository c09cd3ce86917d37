"""Tests for the fact store."""

from __future__ import annotations

import pytest

from rulesmith.core.context import Context
from rulesmith.exceptions import CyclicFactError, FrozenFactError, UndefinedFactError


def test_literal_facts_are_returned_unchanged() -> None:
    context = Context({"age": 25, "tags": ["a", "b"]})

    assert context.get("age") == 25
    assert context["tags"] == ["a", "b"]


def test_undefined_fact_raises_with_key_in_message() -> None:
    context = Context()

    with pytest.raises(UndefinedFactError, match='Fact "missing" is not defined.'):
        context.get("missing")


def test_undefined_fact_error_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        Context()["missing"]


def test_plain_factory_is_invoked_on_every_lookup() -> None:
    calls: list[int] = []

    def counter() -> int:
        calls.append(1)
        return len(calls)

    context = Context({"count": counter})

    assert context.get("count") == 1
    assert context.get("count") == 2


def test_factory_receives_the_context() -> None:
    context = Context({"price": 10, "quantity": 3})
    context["total"] = lambda ctx: ctx["price"] * ctx["quantity"]

    assert context.get("total") == 30


def test_shared_factory_is_memoized_and_identical() -> None:
    context = Context()
    context["user"] = Context.share(lambda: {"name": "ada"})

    first = context.get("user")
    second = context.get("user")

    assert first is second


def test_resolved_shared_fact_is_frozen() -> None:
    context = Context({"token": Context.share(lambda: object())})
    context.get("token")

    with pytest.raises(FrozenFactError, match='Cannot override frozen fact "token".'):
        context.set("token", "other")


def test_unresolved_shared_fact_can_be_replaced() -> None:
    context = Context({"token": Context.share(lambda: "a")})

    context.set("token", "b")

    assert context.get("token") == "b"


def test_shared_fact_resolving_itself_fails_fast() -> None:
    context = Context()
    context["loop"] = Context.share(lambda ctx: ctx.get("loop"))

    with pytest.raises(CyclicFactError, match="loop"):
        context.get("loop")


def test_protected_callable_is_returned_without_invocation() -> None:
    def greet() -> str:
        return "hello"

    context = Context({"greet": Context.protect(greet)})

    assert context.get("greet") is greet


def test_classes_and_plain_objects_are_literals() -> None:
    class Account:
        pass

    instance = Account()
    context = Context({"cls": Account, "obj": instance})

    assert context.get("cls") is Account
    assert context.get("obj") is instance


def test_raw_returns_uninvoked_definition() -> None:
    factory = Context.share(lambda: 42)
    context = Context({"answer": factory})
    context.get("answer")

    assert context.raw("answer") is factory


def test_raw_of_missing_key_raises() -> None:
    with pytest.raises(UndefinedFactError):
        Context().raw("nope")


def test_keys_preserve_insertion_order() -> None:
    context = Context({"b": 1, "a": 2})
    context["c"] = 3

    assert context.keys() == ["b", "a", "c"]
    assert list(context) == ["b", "a", "c"]
    assert len(context) == 3


def test_remove_unfreezes_key() -> None:
    context = Context({"token": Context.share(lambda: 1)})
    context.get("token")

    del context["token"]
    context["token"] = 2

    assert not context.has("missing")
    assert context.get("token") == 2
    assert "token" in context
