"""Structured validation issue model for DSL validators."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation problem with optional location context."""

    message: str
    position: int | None = None
    context: str | None = None
    dialect: str = ""

    def format(self) -> str:
        """Format as a human-readable single-line message."""
        parts: list[str] = []
        if self.dialect:
            parts.append(f"[{self.dialect}]")
        if self.position is not None:
            parts.append(f"at {self.position}:")
        parts.append(self.message)
        if self.context:
            parts.append(f"(near {self.context!r})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, object]:
        """Return the issue as a plain mapping, omitting unknown location data."""
        payload: dict[str, object] = {"message": self.message}
        if self.position is not None:
            payload["position"] = self.position
        if self.context is not None:
            payload["context"] = self.context
        return payload


def sort_issues(issues: list[ValidationIssue]) -> list[ValidationIssue]:
    """Sort issues deterministically by dialect, position, message."""
    return sorted(issues, key=lambda i: (i.dialect, i.position if i.position is not None else -1, i.message))


def format_issues(issues: list[ValidationIssue]) -> str:
    """Format a list of issues as a multi-line string."""
    return "\n".join(i.format() for i in sort_issues(issues))
