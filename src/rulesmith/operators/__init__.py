"""Leaf operator catalog, indexed by :class:`OperatorKind`."""

from __future__ import annotations

from rulesmith.core.operator import Operator
from rulesmith.types.operators import OperatorKind

from .arithmetic import (
    Abs,
    Add,
    Ceil,
    Divide,
    Exponentiate,
    Floor,
    Max,
    Min,
    Modulo,
    Multiply,
    Negate,
    Round,
    Subtract,
)
from .comparison import (
    Between,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    LessThan,
    LessThanOrEqualTo,
    NotEqualTo,
    NotIn,
    NotSameAs,
    SameAs,
)
from .dates import After, Before, IsBetweenDates
from .logical import And, Nand, Nor, Not, Or, Xor
from .sets import (
    Complement,
    ContainsSubset,
    DoesNotContainSubset,
    Intersect,
    SetContains,
    SetDoesNotContain,
    SymmetricDifference,
    Union,
)
from .strings import (
    Contains,
    ContainsInsensitive,
    DoesNotContain,
    DoesNotContainInsensitive,
    DoesNotMatch,
    EndsWith,
    EndsWithInsensitive,
    Matches,
    StartsWith,
    StartsWithInsensitive,
    StringLength,
)
from .type_checks import ArrayCount, IsArray, IsBoolean, IsEmpty, IsNull, IsNumeric, IsString

OPERATOR_CLASSES: dict[OperatorKind, type[Operator]] = {
    cls.kind: cls
    for cls in (
        EqualTo,
        NotEqualTo,
        GreaterThan,
        GreaterThanOrEqualTo,
        LessThan,
        LessThanOrEqualTo,
        SameAs,
        NotSameAs,
        Between,
        In,
        NotIn,
        And,
        Or,
        Not,
        Xor,
        Nand,
        Nor,
        Contains,
        ContainsInsensitive,
        DoesNotContain,
        DoesNotContainInsensitive,
        StartsWith,
        StartsWithInsensitive,
        EndsWith,
        EndsWithInsensitive,
        Matches,
        DoesNotMatch,
        StringLength,
        IsNull,
        IsArray,
        IsBoolean,
        IsNumeric,
        IsString,
        IsEmpty,
        ArrayCount,
        After,
        Before,
        IsBetweenDates,
        Add,
        Subtract,
        Multiply,
        Divide,
        Modulo,
        Exponentiate,
        Negate,
        Floor,
        Ceil,
        Abs,
        Round,
        Max,
        Min,
        Union,
        Intersect,
        Complement,
        SymmetricDifference,
        ContainsSubset,
        DoesNotContainSubset,
        SetContains,
        SetDoesNotContain,
    )
}

__all__ = [
    "OPERATOR_CLASSES",
    "Abs",
    "Add",
    "After",
    "And",
    "ArrayCount",
    "Before",
    "Between",
    "Ceil",
    "Complement",
    "Contains",
    "ContainsInsensitive",
    "ContainsSubset",
    "Divide",
    "DoesNotContain",
    "DoesNotContainInsensitive",
    "DoesNotContainSubset",
    "DoesNotMatch",
    "EndsWith",
    "EndsWithInsensitive",
    "EqualTo",
    "Exponentiate",
    "Floor",
    "GreaterThan",
    "GreaterThanOrEqualTo",
    "In",
    "Intersect",
    "IsArray",
    "IsBetweenDates",
    "IsBoolean",
    "IsEmpty",
    "IsNull",
    "IsNumeric",
    "IsString",
    "LessThan",
    "LessThanOrEqualTo",
    "Matches",
    "Max",
    "Min",
    "Modulo",
    "Multiply",
    "Nand",
    "Negate",
    "Nor",
    "Not",
    "NotEqualTo",
    "NotIn",
    "NotSameAs",
    "Or",
    "Round",
    "SameAs",
    "SetContains",
    "SetDoesNotContain",
    "StartsWith",
    "StartsWithInsensitive",
    "StringLength",
    "Subtract",
    "SymmetricDifference",
    "Union",
    "Xor",
]
