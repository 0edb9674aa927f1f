"""Validate command for checking layout documents.

This module provides the `validate` command that checks a JSON layout
file for schema errors, out-of-bounds or colliding devices, and unused or
missing device types.
"""

from pathlib import Path
from typing import Annotated

import typer

from rackplan.application.config import (
    ConfigError,
    ValidationResult,
    load_layout,
    validate_layout_document,
)


def display_load_error(error: ConfigError) -> None:
    """Display a layout loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type in ("validation", "layout"):
        if error.error_type == "layout":
            typer.echo(f"  {error.message}", err=True)
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    typer.echo(result.summary, err=not result.is_valid)


def validate_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file to validate"),
    ],
) -> None:
    """Validate a rack layout file.

    Checks the layout file for:
    - JSON syntax errors
    - Schema errors (missing fields, out-of-range values, unknown keys)
    - Devices that extend beyond the rack or collide with each other

    Exit codes:
        0 - Layout is valid with no warnings
        1 - Layout has errors (cannot be loaded)
        2 - Layout is valid but has warnings

    Example:
        rackplan validate homelab.json
    """
    typer.echo(f"Validating {layout_file}...")
    typer.echo()

    try:
        document = load_layout(layout_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_layout_document(document)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
