"""Typer CLI for rack layouts."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from rackplan.application import get_factory
from rackplan.cli.commands import (
    open_editor,
    place_command,
    resize_command,
    validate_command,
)
from rackplan.domain import DeviceFace

app = typer.Typer(
    name="rackplan",
    help="Plan rack elevations: place devices, check collisions, resize racks.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


app.command(name="validate")(validate_command)
app.command(name="place")(place_command)
app.command(name="resize")(resize_command)


@app.command()
def show(
    layout_file: Annotated[Path, typer.Argument(help="Path to the JSON layout file")],
    face: Annotated[
        DeviceFace, typer.Option("--face", "-f", help="Face to view")
    ] = DeviceFace.FRONT,
    width: Annotated[
        int, typer.Option("--width", "-w", min=12, help="Drawing width in characters")
    ] = 32,
) -> None:
    """Draw an ASCII elevation of the rack.

    Slots blocked by half-depth devices mounted on the other face are
    hatched.
    """
    _, editor = open_editor(layout_file)
    formatter = get_factory().get_elevation_formatter()
    typer.echo(formatter.format(editor.rack, editor.layout.catalog, face, width))
    typer.echo()
    typer.echo(formatter.format_device_table(editor.rack, editor.layout.catalog))


@app.command()
def slots(
    layout_file: Annotated[Path, typer.Argument(help="Path to the JSON layout file")],
    device_type: Annotated[
        str | None, typer.Option("--type", "-t", help="Device type slug")
    ] = None,
    height: Annotated[
        float | None, typer.Option("--height", help="Device height in U")
    ] = None,
    face: Annotated[
        DeviceFace, typer.Option("--face", "-f", help="Mounting face")
    ] = DeviceFace.FRONT,
    half_depth: Annotated[
        bool, typer.Option("--half-depth", help="Treat the device as half depth")
    ] = False,
) -> None:
    """List the bottom slots where a device could be placed."""
    if (device_type is None) == (height is None):
        typer.echo("Error: Specify exactly one of --type or --height", err=True)
        raise typer.Exit(code=1)

    _, editor = open_editor(layout_file)
    catalog = editor.layout.catalog
    is_full_depth = not half_depth
    if device_type is not None:
        found = catalog.get(device_type)
        if found is None:
            typer.echo(f"Error: Unknown device type: {device_type}", err=True)
            raise typer.Exit(code=1)
        height = found.u_height
        is_full_depth = found.full_depth and not half_depth
    assert height is not None
    if height <= 0:
        typer.echo("Error: --height must be positive", err=True)
        raise typer.Exit(code=1)

    valid = get_factory().get_placement_validator().find_valid_slots(
        editor.rack, catalog, height, face, is_full_depth
    )
    typer.echo(get_factory().get_slot_list_formatter().format(editor.rack, valid, height))


if __name__ == "__main__":
    app()
