"""Shared fixtures for DSL test modules."""

from __future__ import annotations

import pytest

from rulesmith.dsl.registry import get_dialect


@pytest.fixture(scope="session")
def adult_us_rules() -> dict[str, str]:
    """Return the same adult-in-the-US condition written in every dialect."""
    return {
        "natural": 'age is greater than or equal to 18 and country equals "US"',
        "sql": "age >= 18 AND country = 'US'",
        "ldap": "(&(age>=18)(country=US))",
        "graphql": '{"age": {"gte": 18}, "country": "US"}',
        "mongo": '{"age": {"$gte": 18}, "country": "US"}',
    }


@pytest.fixture(params=["natural", "sql", "ldap", "graphql", "mongo"])
def dialect(request: pytest.FixtureRequest):
    """Yield each registered dialect in turn."""
    return get_dialect(request.param)
