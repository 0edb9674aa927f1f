"""Findings collected while checking a layout document.

Each finding is a ``LayoutIssue`` tied to a JSON path in the document.
Errors mean the layout cannot be loaded; warnings describe devices or
device types the editor tolerates but ignores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class LayoutIssue:
    """One finding about a layout document.

    Attributes:
        severity: Whether the issue blocks loading the layout.
        path: JSON path to the item (e.g., "rack.devices[2]").
        message: Human-readable description.
        position: Bottom slot of the offending device, if the issue is
            about a placed device.
        suggestion: Optional remediation hint.
    """

    severity: IssueSeverity
    path: str
    message: str
    position: float | None = None
    suggestion: str | None = None

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Issues found in one layout document, in the order they were found."""

    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[LayoutIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warnings(self) -> list[LayoutIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """CLI exit code: 1 with errors, 2 with warnings only, 0 otherwise."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    @property
    def summary(self) -> str:
        errors, warnings = len(self.errors), len(self.warnings)
        if errors:
            return f"Validation failed: {errors} error(s), {warnings} warning(s)"
        if warnings:
            return f"Validation passed with {warnings} warning(s)"
        return "Validation passed. Layout is valid."

    def add_error(
        self, path: str, message: str, position: float | None = None
    ) -> LayoutIssue:
        issue = LayoutIssue(IssueSeverity.ERROR, path, message, position=position)
        self.issues.append(issue)
        return issue

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> LayoutIssue:
        issue = LayoutIssue(
            IssueSeverity.WARNING, path, message, suggestion=suggestion
        )
        self.issues.append(issue)
        return issue
