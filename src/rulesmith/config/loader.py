"""Config loading and normalization."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import yaml

from rulesmith.config.model import RulesmithConfig
from rulesmith.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_CONTEXT_RADIUS,
    DEFAULT_DIALECT,
    DEFAULT_MAX_DEPTH,
)
from rulesmith.constants.dialects import DIALECT_NAMES
from rulesmith.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> RulesmithConfig:
    """Load and validate engine config from ``rulesmith.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return RulesmithConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        hint = _suggest_key(unknown[0], ALLOWED_CONFIG_KEYS)
        raise ConfigError(f"Unknown config key `{unknown[0]}`" + (f"; {hint}" if hint else ""))

    dialect = raw.get("dialect", DEFAULT_DIALECT)
    if not isinstance(dialect, str) or dialect.strip().lower() not in DIALECT_NAMES:
        raise ConfigError(f"dialect must be one of {list(DIALECT_NAMES)}, got {dialect!r}")

    facts = raw.get("facts", {})
    if facts is None:
        facts = {}
    if not isinstance(facts, dict) or not all(isinstance(key, str) for key in facts):
        raise ConfigError("facts must be a mapping with string keys")

    logger.debug("Loaded config from %s", path)
    return RulesmithConfig(
        dialect=dialect.strip().lower(),
        context_radius=_positive_int(raw.get("context_radius", DEFAULT_CONTEXT_RADIUS), "context_radius"),
        max_depth=_positive_int(raw.get("max_depth", DEFAULT_MAX_DEPTH), "max_depth"),
        facts=dict(facts),
    )


def _positive_int(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive integer")
    return value


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
