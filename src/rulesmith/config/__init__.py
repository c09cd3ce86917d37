"""Engine configuration."""

from __future__ import annotations

from rulesmith.config.loader import load_config
from rulesmith.config.model import RulesmithConfig

__all__ = ["RulesmithConfig", "load_config"]
