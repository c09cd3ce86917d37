"""Shared type aliases and enums."""

from __future__ import annotations

from .common import JsonObject, JsonScalar, JsonValue
from .operators import Cardinality, OperatorKind

__all__ = ["Cardinality", "JsonObject", "JsonScalar", "JsonValue", "OperatorKind"]
