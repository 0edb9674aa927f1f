"""CLI command implementations for the rackplan application.

This package contains subcommands for the rackplan CLI, including:
- validate: Validate a layout file
- place: Place a device in a layout file
- resize: Change the rack height of a layout file
"""

from rackplan.cli.commands.edit import open_editor, place_command, resize_command
from rackplan.cli.commands.validate import validate_command

__all__ = ["open_editor", "place_command", "resize_command", "validate_command"]
