"""Constant tables shared across Rulesmith modules."""
