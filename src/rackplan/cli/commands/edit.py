"""Editing commands that change a layout file.

Each command loads the layout, applies one validated change through a
``LayoutEditor`` and prints the updated document, or writes it with
``--output``.
"""

from pathlib import Path
from typing import Annotated

import typer

from rackplan.application import LayoutEditor, get_factory
from rackplan.application.config import (
    ConfigError,
    LayoutDocument,
    config_to_layout,
    layout_to_document,
    load_layout,
    save_layout,
)
from rackplan.cli.commands.validate import display_load_error
from rackplan.domain import DeviceFace, MutationResult

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the updated layout here instead of printing it",
    ),
]


def open_editor(layout_file: Path) -> tuple[LayoutDocument, LayoutEditor]:
    """Load a layout file into a new editor, exiting with code 1 on error."""
    try:
        document = load_layout(layout_file)
        layout = config_to_layout(
            document, validator=get_factory().get_placement_validator()
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    editor = get_factory().create_editor(
        layout, history_depth=document.settings.history_depth
    )
    return document, editor


def _finish(
    result: MutationResult,
    document: LayoutDocument,
    editor: LayoutEditor,
    output: Path | None,
) -> None:
    if not result:
        typer.echo(f"Error: {result.message}", err=True)
        raise typer.Exit(code=1)

    updated = layout_to_document(editor.layout, document.settings)
    if output is None:
        typer.echo(updated.model_dump_json(indent=2, exclude_none=True))
        return
    try:
        save_layout(updated, output)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Layout written to: {output}")


def place_command(
    layout_file: Annotated[Path, typer.Argument(help="Path to the JSON layout file")],
    device_type: Annotated[str, typer.Argument(help="Slug of the device type")],
    position: Annotated[float, typer.Argument(help="Bottom slot, counted from 1")],
    face: Annotated[
        DeviceFace, typer.Option("--face", "-f", help="Mounting face")
    ] = DeviceFace.FRONT,
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Custom device name")
    ] = None,
    output: OutputOption = None,
) -> None:
    """Place a device in the rack.

    The placement is rejected with exit code 1 if the device would extend
    beyond the rack or collide with another device on the same face.

    Example:
        rackplan place homelab.json dell-r740 10 --face rear
    """
    document, editor = open_editor(layout_file)
    result = editor.place_device(device_type, position, face, name)
    _finish(result, document, editor, output)


def resize_command(
    layout_file: Annotated[Path, typer.Argument(help="Path to the JSON layout file")],
    height: Annotated[int, typer.Argument(help="New rack height in U")],
    output: OutputOption = None,
) -> None:
    """Change the rack height.

    Shrinking is only allowed down to the highest occupied slot; devices
    are never removed or moved.

    Example:
        rackplan resize homelab.json 24 -o homelab.json
    """
    document, editor = open_editor(layout_file)
    result = editor.resize_rack(height)
    _finish(result, document, editor, output)
