"""Validation structures for layout documents."""

from rackplan.application.config.validators.issues import (
    IssueSeverity,
    LayoutIssue,
    ValidationResult,
)

__all__ = ["IssueSeverity", "LayoutIssue", "ValidationResult"]
