"""Shared input handling for the structured document-query grammars."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from rulesmith.constants.config import DEFAULT_CONTEXT_RADIUS
from rulesmith.dsl.text import error_context
from rulesmith.exceptions.dsl import DslSyntaxError, JsonDecodeError


def decode_json(text: str) -> Any:
    """Strictly decode *text*; malformed JSON raises :class:`JsonDecodeError`."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonDecodeError(
            f"Invalid JSON: {exc.msg}",
            exc.pos,
            error_context(text, exc.pos, DEFAULT_CONTEXT_RADIUS),
        ) from exc


def load_document(source: str | Mapping[str, Any]) -> dict[str, Any]:
    """Accept JSON text or an already-decoded mapping; the top level must be an object."""
    document = decode_json(source) if isinstance(source, str) else source
    if not isinstance(document, Mapping):
        raise DslSyntaxError(f"Query must be an object, got {type(document).__name__}")
    return dict(document)


def flatten_fields(
    document: Mapping[str, Any],
    is_operator: Callable[[str], bool],
    prefix: str = "",
) -> list[tuple[str, Any]]:
    """Flatten nested field objects to ``(dotted.path, condition)`` pairs.

    A nested mapping with at least one key accepted by *is_operator* is an
    operator map and stops the descent; any other non-empty mapping is a
    deeper field path.
    """
    pairs: list[tuple[str, Any]] = []
    for key, value in document.items():
        if not isinstance(key, str) or not key:
            raise DslSyntaxError(f"Field names must be non-empty strings, got {key!r}")
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping) and value and not any(is_operator(k) for k in value):
            pairs.extend(flatten_fields(value, is_operator, path))
        else:
            pairs.append((path, value))
    return pairs


def is_operator_map(value: Any, is_operator: Callable[[str], bool]) -> bool:
    return isinstance(value, Mapping) and bool(value) and any(is_operator(key) for key in value)


def merge_conjunction(
    children: list[dict[str, Any]],
    is_logical: Callable[[str], bool],
    is_operator: Callable[[str], bool],
) -> dict[str, Any] | None:
    """Fold rendered conjuncts into one implicit-AND object.

    Returns None when any conjunct is compound (a logical key, or more than
    one key) or when two conjuncts on the same field cannot be merged
    without losing one of them.
    """
    merged: dict[str, Any] = {}
    for child in children:
        if len(child) != 1:
            return None
        ((key, value),) = child.items()
        if is_logical(key):
            return None
        if key not in merged:
            merged[key] = value
            continue
        existing = merged[key]
        if not (_all_operators(existing, is_operator) and _all_operators(value, is_operator)):
            return None
        if set(existing) & set(value):
            return None
        merged[key] = {**existing, **value}
    return merged


def _all_operators(value: Any, is_operator: Callable[[str], bool]) -> bool:
    return isinstance(value, Mapping) and bool(value) and all(is_operator(key) for key in value)


def json_default(value: Any) -> Any:
    """``json.dumps`` fallback for dates and sets appearing in literals."""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
