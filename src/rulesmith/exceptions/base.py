"""Root of the Rulesmith exception hierarchy."""

from __future__ import annotations


class RulesmithError(Exception):
    """Base class for every error raised by Rulesmith."""
