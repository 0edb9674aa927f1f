"""Layout document loader with error handling.

This module loads and parses JSON layout documents. It handles file system
errors, JSON parsing errors and Pydantic validation errors with clear,
actionable error messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from rackplan.application.config.schemas import LayoutDocument

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for layout document errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation, layout)
        path: Path to the layout file (if applicable)
        details: Additional error details (line/column for JSON, validation
            errors, conflicting devices)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("rack", "height"))
        'rack.height'
        >>> _format_json_path(("rack", "devices", 0, "position"))
        'rack.devices[0].position'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value dicts."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Layout validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        value = detail.get("value")
        # Whole-object inputs are too noisy to echo back
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {detail['message']}")
    return "\n".join(lines)


def load_layout(path: Path) -> LayoutDocument:
    """Load and validate a layout document from a JSON file.

    Args:
        path: Path to the JSON layout file

    Returns:
        A validated LayoutDocument instance

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "permission_denied": File cannot be read
            - "file_read_error": Other I/O failure
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed

    Example:
        >>> try:
        ...     doc = load_layout(Path("homelab.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    if not path.exists():
        raise ConfigError(
            message=f"Layout file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading layout file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading layout file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in layout file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "line": e.lineno,
                    "column": e.colno,
                    "message": e.msg,
                }
            ],
        )

    try:
        document = LayoutDocument.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )
    logger.info(
        f"Loaded layout document {path} (schema {document.schema_version}, "
        f"{len(document.rack.devices)} device(s))"
    )
    return document


def load_layout_from_dict(data: dict[str, Any]) -> LayoutDocument:
    """Load and validate a layout document from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    try:
        return LayoutDocument.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )


def save_layout(document: LayoutDocument, path: Path) -> None:
    """Write a layout document as indented JSON.

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        content = document.model_dump_json(indent=2, exclude_none=True)
        path.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            message=f"Error writing layout file: {path}: {e}",
            error_type="file_write_error",
            path=path,
        )
    logger.info(f"Saved layout document {path}")
