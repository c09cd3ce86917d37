"""Variables and property access against runtime facts.

A :class:`Variable` names a fact (or carries a literal); a
:class:`VariableProperty` reads one field below a parent operand. Property
lookup classifies the parent value once per access and tries, in order, an
invocable member, a public attribute and an indexed lookup before falling
back to the default.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rulesmith.core.context import Context
from rulesmith.core.operator import VariableOperand
from rulesmith.core.value import Value

# Exact builtin types expose no members to rule fields; only indexing applies.
# Subclasses (a dict with properties, say) go through the member lookup first.
_PLAIN_TYPES: frozenset[type] = frozenset(
    {type(None), bool, int, float, complex, str, bytes, dict, list, tuple, set, frozenset}
)


class Access(Enum):
    """How a property name is read from a parent value."""

    INVOCABLE = "invocable"
    FIELD_ACCESSIBLE = "field"
    INDEXABLE = "indexable"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Found:
    """A successful lookup; the wrapped value may itself be ``None``."""

    value: Any


def lookup_member(subject: Any, name: str) -> tuple[Access, Found | None]:
    """Classify *subject* for *name* and read the member if one applies."""
    if type(subject) not in _PLAIN_TYPES and not name.startswith("_"):
        if hasattr(subject, name):
            member = getattr(subject, name)
            if callable(member):
                return Access.INVOCABLE, Found(member())
            return Access.FIELD_ACCESSIBLE, Found(member)

    found = _index(subject, name)
    if found is not None:
        return Access.INDEXABLE, found
    return Access.PLAIN, None


def _index(subject: Any, name: str) -> Found | None:
    if isinstance(subject, (str, bytes)) or not hasattr(subject, "__getitem__"):
        return None
    if isinstance(subject, Mapping):
        return Found(subject[name]) if name in subject else None
    if isinstance(subject, Sequence):
        if name.lstrip("-").isdigit():
            index = int(name)
            if -len(subject) <= index < len(subject):
                return Found(subject[index])
        return None
    try:
        return Found(subject[name])
    except (KeyError, IndexError, TypeError):
        return None


class Variable(VariableOperand):
    """A named fact reference, or an anonymous literal when *name* is None."""

    def __init__(self, name: str | None = None, value: Any = None) -> None:
        self.name = name
        self.value = value

    @property
    def path(self) -> str | None:
        return self.name

    def prepare_value(self, context: Context) -> Value:
        if self.name is not None and context.has(self.name):
            return Value(context.get(self.name))
        if isinstance(self.value, VariableOperand):
            return self.value.prepare_value(context)
        return Value(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variable):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.name is None:
            return f"Variable(value={self.value!r})"
        return f"Variable({self.name!r})"


class VariableProperty(VariableOperand):
    """Field access one level below a parent variable or property."""

    def __init__(self, parent: VariableOperand, name: str, default: Any = None) -> None:
        self.parent = parent
        self.name = name
        self.default = default

    @property
    def path(self) -> str:
        """Full dotted path from the root variable, e.g. ``user.address.city``."""
        parent_path = getattr(self.parent, "path", None)
        return f"{parent_path}.{self.name}" if parent_path else self.name

    def prepare_value(self, context: Context) -> Value:
        subject = self.parent.prepare_value(context).value
        _, found = lookup_member(subject, self.name)
        if found is None:
            return Value(self.default)
        return Value(found.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariableProperty):
            return NotImplemented
        return self.parent == other.parent and self.name == other.name and self.default == other.default

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"VariableProperty({self.path!r})"


def is_field(operand: Any) -> bool:
    """True for a named variable or a property chain."""
    return isinstance(operand, VariableProperty) or (isinstance(operand, Variable) and operand.name is not None)


def is_literal(operand: Any) -> bool:
    """True for an anonymous variable or a raw value that is not an IR node."""
    if isinstance(operand, Variable):
        return operand.name is None and not isinstance(operand.value, VariableOperand)
    return not isinstance(operand, VariableOperand) and not hasattr(operand, "get_operands")


def literal_value(operand: Any) -> Any:
    """Unwrap an anonymous variable to its bound literal."""
    if isinstance(operand, Variable):
        return operand.value
    return operand
