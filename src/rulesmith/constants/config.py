"""Engine configuration constants."""

from __future__ import annotations

CONFIG_FILENAME: str = "rulesmith.yaml"

DEFAULT_DIALECT: str = "natural"
DEFAULT_CONTEXT_RADIUS: int = 20
DEFAULT_MAX_DEPTH: int = 64

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"dialect", "context_radius", "max_depth", "facts"})
