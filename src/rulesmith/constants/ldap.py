"""Filter tables for the LDAP grammar."""

from __future__ import annotations

# Longest first; ``~=`` and ``!=`` before ``=``.
ITEM_OPERATORS: tuple[str, ...] = (">=", "<=", "~=", "!=", "=", ">", "<")

# RFC 4515 value escapes.
VALUE_ESCAPES: dict[str, str] = {
    "\\": "\\5c",
    "*": "\\2a",
    "(": "\\28",
    ")": "\\29",
    "\x00": "\\00",
}

# A value starting with one of these could be read as part of the item operator.
OPERATOR_LEADS: frozenset[str] = frozenset("=<>~!")
