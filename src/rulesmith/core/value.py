"""Resolved runtime values with typed comparison helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SCALAR_TYPES: tuple[type, ...] = (type(None), bool, int, float, str, bytes)


def is_member(needle: Any, haystack: list | tuple | set | frozenset) -> bool:
    """Membership that treats an unhashable needle as absent from a set."""
    if isinstance(haystack, (set, frozenset)):
        try:
            return needle in haystack
        except TypeError:
            return False
    return needle in haystack


class Value:
    """A concrete value produced by ``prepare_value``."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Value({self.value!r})"

    def get_value(self) -> Any:
        return self.value

    def as_set(self) -> list[Any]:
        """Distinct members in first-seen order.

        Lists, tuples and sets contribute their elements and mappings their
        values; None is the empty set and any other value a singleton.
        """
        value = self.value
        if value is None:
            items: list[Any] = []
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = list(value)
        elif isinstance(value, Mapping):
            items = list(value.values())
        else:
            items = [value]
        distinct: list[Any] = []
        for item in items:
            if item not in distinct:
                distinct.append(item)
        return distinct

    def equal_to(self, other: Value) -> bool:
        return bool(self.value == other.value)

    def same_as(self, other: Value) -> bool:
        """Identity equality; equal scalars of the same type count as identical."""
        left, right = self.value, other.value
        if left is right:
            return True
        if isinstance(left, _SCALAR_TYPES) and type(left) is type(right):
            return bool(left == right)
        return False

    def greater_than(self, other: Value) -> bool:
        """Ordering between incomparable types is false rather than an error."""
        try:
            return bool(self.value > other.value)
        except TypeError:
            return False

    def less_than(self, other: Value) -> bool:
        try:
            return bool(self.value < other.value)
        except TypeError:
            return False

    def greater_than_or_equal_to(self, other: Value) -> bool:
        try:
            return bool(self.value >= other.value)
        except TypeError:
            return False

    def less_than_or_equal_to(self, other: Value) -> bool:
        try:
            return bool(self.value <= other.value)
        except TypeError:
            return False

    def contains(self, other: Value) -> bool:
        """Substring test for strings, membership for containers."""
        haystack = self.value
        if isinstance(haystack, str):
            return isinstance(other.value, str) and other.value in haystack
        if isinstance(haystack, Mapping):
            return other.value in haystack.values()
        if isinstance(haystack, (list, tuple, set, frozenset)):
            return is_member(other.value, haystack)
        return False

    def string_contains(self, other: Value, insensitive: bool = False) -> bool:
        pair = self._strings(other, insensitive)
        return pair is not None and pair[1] in pair[0]

    def starts_with(self, other: Value, insensitive: bool = False) -> bool:
        pair = self._strings(other, insensitive)
        return pair is not None and pair[0].startswith(pair[1])

    def ends_with(self, other: Value, insensitive: bool = False) -> bool:
        pair = self._strings(other, insensitive)
        return pair is not None and pair[0].endswith(pair[1])

    def _strings(self, other: Value, insensitive: bool) -> tuple[str, str] | None:
        if not isinstance(self.value, str) or not isinstance(other.value, str):
            return None
        if insensitive:
            return self.value.casefold(), other.value.casefold()
        return self.value, other.value
