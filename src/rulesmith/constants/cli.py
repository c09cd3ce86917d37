"""Command-line constants."""

from __future__ import annotations

CLI_DESCRIPTION: str = "Parse, convert and evaluate boolean rules written in several query grammars."

EXIT_TRUE: int = 0
EXIT_FALSE: int = 1
EXIT_ERROR: int = 2

YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})
