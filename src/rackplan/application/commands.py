"""Undoable layout commands.

Each command is a small dataclass variant carrying just the data needed to
apply one user action and to reverse it. Commands replay through the
validated ``RackLayout`` mutation surface, so even a redo can never put the
rack into a colliding state.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from rackplan.domain import (
    DeviceFace,
    DeviceType,
    MutationResult,
    PlacedDevice,
    Rack,
    RackLayout,
)

logger = logging.getLogger(__name__)

__all__ = [
    "AddDeviceTypeCommand",
    "ClearRackCommand",
    "CommandType",
    "DeleteDeviceTypeCommand",
    "DeleteRackCommand",
    "LayoutCommand",
    "MoveDeviceCommand",
    "PlaceDeviceCommand",
    "RemoveDeviceCommand",
    "RenameDeviceCommand",
    "ReplaceRackCommand",
    "ResizeRackCommand",
    "UpdateDeviceFaceCommand",
    "UpdateDeviceTypeCommand",
    "UpdateRackCommand",
]


class CommandType(str, Enum):
    """Tag identifying the kind of mutation a command performs."""

    PLACE_DEVICE = "PLACE_DEVICE"
    MOVE_DEVICE = "MOVE_DEVICE"
    REMOVE_DEVICE = "REMOVE_DEVICE"
    UPDATE_DEVICE_FACE = "UPDATE_DEVICE_FACE"
    UPDATE_DEVICE_NAME = "UPDATE_DEVICE_NAME"
    RESIZE_RACK = "RESIZE_RACK"
    UPDATE_RACK = "UPDATE_RACK"
    REPLACE_RACK = "REPLACE_RACK"
    CLEAR_RACK = "CLEAR_RACK"
    DELETE_RACK = "DELETE_RACK"
    ADD_DEVICE_TYPE = "ADD_DEVICE_TYPE"
    UPDATE_DEVICE_TYPE = "UPDATE_DEVICE_TYPE"
    DELETE_DEVICE_TYPE = "DELETE_DEVICE_TYPE"


class LayoutCommand(ABC):
    """Base class for commands applied to a ``RackLayout``.

    Subclasses are dataclasses whose first field is the layout. The result
    of the most recent ``execute()`` or ``undo()`` is kept in
    ``last_result``.
    """

    command_type: ClassVar[CommandType]
    layout: RackLayout

    def __post_init__(self) -> None:
        self.timestamp = time.time()
        self.last_result: MutationResult | None = None

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of the action."""

    @abstractmethod
    def execute(self) -> None:
        """Apply the action to the layout."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse the action."""

    def _record(self, result: MutationResult, direction: str) -> MutationResult:
        self.last_result = result
        if not result.success:
            logger.warning(
                f"{direction} of '{self.description}' rejected: {result.message}"
            )
        return result


@dataclass
class PlaceDeviceCommand(LayoutCommand):
    """Place a device; undo removes that exact instance."""

    command_type: ClassVar[CommandType] = CommandType.PLACE_DEVICE

    layout: RackLayout = field(repr=False, compare=False)
    device: PlacedDevice
    device_name: str = "device"

    @property
    def description(self) -> str:
        return f"Place {self.device_name}"

    def execute(self) -> None:
        self._record(self.layout.insert(self.device.copy()), "Execute")

    def undo(self) -> None:
        self._record(self.layout.remove(self.device.id), "Undo")


@dataclass
class MoveDeviceCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.MOVE_DEVICE

    layout: RackLayout = field(repr=False, compare=False)
    instance_id: str
    old_position: float
    new_position: float
    device_name: str = "device"

    @property
    def description(self) -> str:
        return f"Move {self.device_name}"

    def execute(self) -> None:
        self._record(self.layout.move(self.instance_id, self.new_position), "Execute")

    def undo(self) -> None:
        self._record(self.layout.move(self.instance_id, self.old_position), "Undo")


@dataclass
class RemoveDeviceCommand(LayoutCommand):
    """Remove a device; undo restores it with the same id and list position."""

    command_type: ClassVar[CommandType] = CommandType.REMOVE_DEVICE

    layout: RackLayout = field(repr=False, compare=False)
    device: PlacedDevice
    index: int | None = None
    device_name: str = "device"

    def __post_init__(self) -> None:
        super().__post_init__()
        # Detach from the live instance so later edits cannot change the copy
        self.device = self.device.copy()

    @property
    def description(self) -> str:
        return f"Remove {self.device_name}"

    def execute(self) -> None:
        self._record(self.layout.remove(self.device.id), "Execute")

    def undo(self) -> None:
        self._record(self.layout.insert(self.device.copy(), self.index), "Undo")


@dataclass
class UpdateDeviceFaceCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_FACE

    layout: RackLayout = field(repr=False, compare=False)
    instance_id: str
    old_face: DeviceFace
    new_face: DeviceFace
    device_name: str = "device"

    @property
    def description(self) -> str:
        return f"Flip {self.device_name}"

    def execute(self) -> None:
        self._record(self.layout.set_face(self.instance_id, self.new_face), "Execute")

    def undo(self) -> None:
        self._record(self.layout.set_face(self.instance_id, self.old_face), "Undo")


@dataclass
class RenameDeviceCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_NAME

    layout: RackLayout = field(repr=False, compare=False)
    instance_id: str
    old_name: str | None
    new_name: str | None
    device_type_name: str = "device"

    @property
    def description(self) -> str:
        return f"Rename {self.new_name or self.device_type_name}"

    def execute(self) -> None:
        self._record(self.layout.rename(self.instance_id, self.new_name), "Execute")

    def undo(self) -> None:
        self._record(self.layout.rename(self.instance_id, self.old_name), "Undo")


@dataclass
class ResizeRackCommand(LayoutCommand):
    """Change the rack height.

    Resizes that would push a device out of the rack are rejected up front,
    so no device is ever evicted and undo only restores the height.
    """

    command_type: ClassVar[CommandType] = CommandType.RESIZE_RACK

    layout: RackLayout = field(repr=False, compare=False)
    old_height: int
    new_height: int

    @property
    def description(self) -> str:
        return f"Resize rack to {self.new_height}U"

    def execute(self) -> None:
        self._record(self.layout.resize_rack(self.new_height), "Execute")

    def undo(self) -> None:
        self._record(self.layout.resize_rack(self.old_height), "Undo")


@dataclass
class UpdateRackCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.UPDATE_RACK

    layout: RackLayout = field(repr=False, compare=False)
    before: dict[str, Any]
    after: dict[str, Any]

    @property
    def description(self) -> str:
        return "Update rack settings"

    def execute(self) -> None:
        self._record(self.layout.update_rack(**self.after), "Execute")

    def undo(self) -> None:
        self._record(self.layout.update_rack(**self.before), "Undo")


@dataclass
class ReplaceRackCommand(LayoutCommand):
    """Swap the whole rack, e.g. for bulk edits.

    Both racks are deep-copied on creation and again on every replay so the
    snapshots never alias the live model.
    """

    command_type: ClassVar[CommandType] = CommandType.REPLACE_RACK

    layout: RackLayout = field(repr=False, compare=False)
    old_rack: Rack
    new_rack: Rack

    def __post_init__(self) -> None:
        super().__post_init__()
        self.old_rack = self.old_rack.deep_copy()
        self.new_rack = self.new_rack.deep_copy()

    @property
    def description(self) -> str:
        return "Replace rack"

    def execute(self) -> None:
        self._record(self.layout.replace_rack(self.new_rack.deep_copy()), "Execute")

    def undo(self) -> None:
        self._record(self.layout.replace_rack(self.old_rack.deep_copy()), "Undo")


@dataclass
class DeleteRackCommand(LayoutCommand):
    """Empty the rack while keeping its settings; undo restores the snapshot."""

    command_type: ClassVar[CommandType] = CommandType.DELETE_RACK

    layout: RackLayout = field(repr=False, compare=False)
    rack: Rack

    def __post_init__(self) -> None:
        super().__post_init__()
        self.rack = self.rack.deep_copy()

    @property
    def description(self) -> str:
        return f"Delete rack {self.rack.name}"

    def execute(self) -> None:
        removed = self.layout.delete_rack()
        self._record(MutationResult.ok(devices=removed), "Execute")

    def undo(self) -> None:
        self._record(self.layout.replace_rack(self.rack.deep_copy()), "Undo")


@dataclass
class ClearRackCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.CLEAR_RACK

    layout: RackLayout = field(repr=False, compare=False)
    devices: tuple[PlacedDevice, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        self.devices = tuple(d.copy() for d in self.devices)

    @property
    def description(self) -> str:
        count = len(self.devices)
        return f"Clear rack ({count} device{'' if count == 1 else 's'})"

    def execute(self) -> None:
        removed = self.layout.clear_devices()
        self._record(MutationResult.ok(devices=removed), "Execute")

    def undo(self) -> None:
        self._record(
            self.layout.restore_devices([d.copy() for d in self.devices]), "Undo"
        )


@dataclass
class AddDeviceTypeCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.ADD_DEVICE_TYPE

    layout: RackLayout = field(repr=False, compare=False)
    device_type: DeviceType

    @property
    def description(self) -> str:
        return f"Add {self.device_type.display_name}"

    def execute(self) -> None:
        self._record(self.layout.add_device_type(self.device_type), "Execute")

    def undo(self) -> None:
        self._record(self.layout.forget_device_type(self.device_type.slug), "Undo")


@dataclass
class UpdateDeviceTypeCommand(LayoutCommand):
    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_TYPE

    layout: RackLayout = field(repr=False, compare=False)
    slug: str
    before: dict[str, Any]
    after: dict[str, Any]

    @property
    def description(self) -> str:
        return f"Update {self.slug}"

    def execute(self) -> None:
        self._record(
            self.layout.update_device_type(self.slug, **self.after), "Execute"
        )

    def undo(self) -> None:
        self._record(
            self.layout.update_device_type(self.slug, **self.before), "Undo"
        )


@dataclass
class DeleteDeviceTypeCommand(LayoutCommand):
    """Delete a device type and its placed instances; undo restores both."""

    command_type: ClassVar[CommandType] = CommandType.DELETE_DEVICE_TYPE

    layout: RackLayout = field(repr=False, compare=False)
    device_type: DeviceType
    placed: tuple[PlacedDevice, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        self.placed = tuple(d.copy() for d in self.placed)

    @property
    def description(self) -> str:
        return f"Delete {self.device_type.display_name}"

    def execute(self) -> None:
        self._record(
            self.layout.remove_device_type(self.device_type.slug), "Execute"
        )

    def undo(self) -> None:
        result = self._record(self.layout.add_device_type(self.device_type), "Undo")
        if result:
            self._record(
                self.layout.restore_devices([d.copy() for d in self.placed]), "Undo"
            )
