"""String operators: substring, prefix/suffix, regex and length."""

from __future__ import annotations

import re
from functools import lru_cache

from rulesmith.core.context import Context
from rulesmith.core.operator import Proposition, ValueOperator, resolve
from rulesmith.core.value import Value
from rulesmith.exceptions.operators import OperandError
from rulesmith.types.operators import Cardinality, OperatorKind


class _StringPredicate(Proposition):
    cardinality = Cardinality.BINARY

    def _pair(self, context: Context) -> tuple[Value, Value]:
        left, right = self.get_operands()
        return resolve(left, context), resolve(right, context)


class Contains(_StringPredicate):
    kind = OperatorKind.CONTAINS

    def evaluate(self, context: Context) -> bool:
        haystack, needle = self._pair(context)
        return haystack.contains(needle)


class ContainsInsensitive(_StringPredicate):
    kind = OperatorKind.CONTAINS_INSENSITIVE

    def evaluate(self, context: Context) -> bool:
        haystack, needle = self._pair(context)
        return haystack.string_contains(needle, insensitive=True)


class DoesNotContain(_StringPredicate):
    kind = OperatorKind.DOES_NOT_CONTAIN

    def evaluate(self, context: Context) -> bool:
        haystack, needle = self._pair(context)
        return not haystack.contains(needle)


class DoesNotContainInsensitive(_StringPredicate):
    kind = OperatorKind.DOES_NOT_CONTAIN_INSENSITIVE

    def evaluate(self, context: Context) -> bool:
        haystack, needle = self._pair(context)
        return not haystack.string_contains(needle, insensitive=True)


class StartsWith(_StringPredicate):
    kind = OperatorKind.STARTS_WITH

    def evaluate(self, context: Context) -> bool:
        subject, prefix = self._pair(context)
        return subject.starts_with(prefix)


class StartsWithInsensitive(_StringPredicate):
    kind = OperatorKind.STARTS_WITH_INSENSITIVE

    def evaluate(self, context: Context) -> bool:
        subject, prefix = self._pair(context)
        return subject.starts_with(prefix, insensitive=True)


class EndsWith(_StringPredicate):
    kind = OperatorKind.ENDS_WITH

    def evaluate(self, context: Context) -> bool:
        subject, suffix = self._pair(context)
        return subject.ends_with(suffix)


class EndsWithInsensitive(_StringPredicate):
    kind = OperatorKind.ENDS_WITH_INSENSITIVE

    def evaluate(self, context: Context) -> bool:
        subject, suffix = self._pair(context)
        return subject.ends_with(suffix, insensitive=True)


class Matches(_StringPredicate):
    """``re.search`` of a Python pattern; flags are written inline, e.g. ``(?i)``."""

    kind = OperatorKind.MATCHES

    def evaluate(self, context: Context) -> bool:
        subject, pattern = self._pair(context)
        return _search(subject.value, pattern.value)


class DoesNotMatch(_StringPredicate):
    kind = OperatorKind.DOES_NOT_MATCH

    def evaluate(self, context: Context) -> bool:
        subject, pattern = self._pair(context)
        return not _search(subject.value, pattern.value)


class StringLength(ValueOperator):
    kind = OperatorKind.STRING_LENGTH
    cardinality = Cardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (value,) = self.values(context)
        return Value(len(value) if isinstance(value, str) else 0)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _search(subject: object, pattern: object) -> bool:
    if not isinstance(subject, str) or not isinstance(pattern, str):
        return False
    try:
        compiled = compile_pattern(pattern)
    except re.error as exc:
        raise OperandError(f"Invalid regular expression {pattern!r}: {exc}") from exc
    return compiled.search(subject) is not None
