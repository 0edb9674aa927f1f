"""Editing session for a single rack layout.

``LayoutEditor`` is the entry point for interactive editing. It owns one
``RackLayout`` and one ``CommandHistory``. Every action is validated
first; only accepted actions are wrapped in a command and pushed onto the
history, so a rejected action never appears in the undo stack.
"""

from __future__ import annotations

import logging
from typing import Any

from rackplan.domain import (
    DeviceFace,
    DeviceMovementService,
    DeviceType,
    DropPositionResolver,
    FailureReason,
    MutationResult,
    PlacedDevice,
    Rack,
    RackLayout,
)
from rackplan.domain.services.placement import blocking_device_name

from .commands import (
    AddDeviceTypeCommand,
    ClearRackCommand,
    DeleteDeviceTypeCommand,
    DeleteRackCommand,
    LayoutCommand,
    MoveDeviceCommand,
    PlaceDeviceCommand,
    RemoveDeviceCommand,
    RenameDeviceCommand,
    ReplaceRackCommand,
    ResizeRackCommand,
    UpdateDeviceFaceCommand,
    UpdateDeviceTypeCommand,
    UpdateRackCommand,
)
from .history import CommandHistory

logger = logging.getLogger(__name__)


class LayoutEditor:
    """Validated, undoable editing of one rack layout.

    Attributes:
        layout: The layout being edited.
        history: Undo/redo stacks for this session.
        resolver: Drop position resolver used by ``drop_device``.
        movement: Stepwise movement service used by ``nudge_device``.
    """

    def __init__(
        self,
        layout: RackLayout | None = None,
        history: CommandHistory | None = None,
        resolver: DropPositionResolver | None = None,
        movement: DeviceMovementService | None = None,
    ) -> None:
        self.layout = layout if layout is not None else RackLayout()
        self.history = history if history is not None else CommandHistory()
        self.resolver = resolver or DropPositionResolver(self.layout.validator)
        self.movement = movement or DeviceMovementService(self.layout.validator)

    @property
    def rack(self) -> Rack:
        return self.layout.rack

    def _run(self, command: LayoutCommand) -> MutationResult:
        self.history.execute(command)
        result = command.last_result
        assert result is not None
        return result

    def _device_name(self, device: PlacedDevice) -> str:
        return blocking_device_name(device, self.layout.catalog)

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    def place_device(
        self,
        device_type: str,
        position: float,
        face: DeviceFace = DeviceFace.FRONT,
        name: str | None = None,
    ) -> MutationResult:
        """Place a new device from the catalog at ``position``."""
        check = self.layout.validate_place(device_type, position, face)
        if not check:
            logger.debug(f"Rejected placing {device_type} at U{position:g}: {check.message}")
            return check
        assert check.device_type is not None
        device = PlacedDevice(
            device_type=device_type,
            position=position,
            face=DeviceFace(face),
            name=name,
        )
        return self._run(
            PlaceDeviceCommand(
                self.layout, device, name or check.device_type.display_name
            )
        )

    def drop_device(
        self,
        device_type: str,
        y: float,
        slot_pixel_height: float,
        face: DeviceFace = DeviceFace.FRONT,
        name: str | None = None,
    ) -> MutationResult:
        """Place a dragged device at the valid slot nearest the pointer.

        Args:
            device_type: Slug of the dragged catalog entry.
            y: Pointer y coordinate over the rendered rack, 0 at the top.
            slot_pixel_height: Rendered height of one slot.
            face: Face the device is dropped on.
            name: Optional custom name.
        """
        found = self.layout.catalog.get(device_type)
        if found is None:
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Unknown device type: {device_type}",
            )
        slot = self.resolver.snap_to_nearest_valid_slot(
            self.layout.rack,
            self.layout.catalog,
            found.u_height,
            y,
            slot_pixel_height,
            DeviceFace(face),
            found.full_depth,
        )
        if slot is None:
            return MutationResult.fail(
                FailureReason.NO_VALID_POSITION,
                f"No room for {found.display_name} in {self.rack.name}",
            )
        return self.place_device(device_type, slot, face, name)

    def move_device(self, instance_id: str, new_position: float) -> MutationResult:
        """Move a device to a new bottom slot.

        Moving a device to the slot it already occupies is accepted without
        recording a history entry.
        """
        check = self.layout.validate_move(instance_id, new_position)
        if not check:
            return check
        device = check.device
        assert device is not None
        if device.position == new_position:
            return check
        return self._run(
            MoveDeviceCommand(
                self.layout,
                device.id,
                device.position,
                new_position,
                self._device_name(device),
            )
        )

    def nudge_device(
        self, instance_id: str, direction: int, step: float | None = None
    ) -> MutationResult:
        """Move a device to the next free position above or below it.

        Args:
            instance_id: Device to move.
            direction: ``MOVE_UP`` (+1) or ``MOVE_DOWN`` (-1).
            step: Step size; defaults to the device height.
        """
        found = self.movement.find_next_valid_position(
            self.layout.rack, self.layout.catalog, instance_id, direction, step
        )
        if not found.success or found.new_position is None:
            if self.rack.find_device(instance_id) is None:
                return MutationResult.fail(
                    FailureReason.NOT_FOUND, f"No device with id {instance_id}"
                )
            return MutationResult.fail(
                FailureReason.NO_VALID_POSITION,
                f"Cannot move device: {found.reason.value.replace('_', ' ')}",
            )
        return self.move_device(instance_id, found.new_position)

    def flip_device(
        self, instance_id: str, face: DeviceFace | None = None
    ) -> MutationResult:
        """Remount a device on another face.

        Without ``face`` the device toggles between front and rear. A
        both-face device is left as is.
        """
        device = self.rack.find_device(instance_id)
        if device is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        new_face = DeviceFace(face) if face is not None else device.face.opposite
        if new_face == device.face:
            return MutationResult.ok(device=device)
        check = self.layout.validate_face(instance_id, new_face)
        if not check:
            return check
        return self._run(
            UpdateDeviceFaceCommand(
                self.layout,
                device.id,
                device.face,
                new_face,
                self._device_name(device),
            )
        )

    def rename_device(self, instance_id: str, name: str | None) -> MutationResult:
        device = self.rack.find_device(instance_id)
        if device is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        new_name = name.strip() if name and name.strip() else None
        if new_name == device.name:
            return MutationResult.ok(device=device)
        device_type = self.layout.catalog.get(device.device_type)
        type_name = device_type.display_name if device_type else device.device_type
        return self._run(
            RenameDeviceCommand(
                self.layout, device.id, device.name, new_name, type_name
            )
        )

    def remove_device(self, instance_id: str) -> MutationResult:
        index = self.rack.index_of(instance_id)
        if index is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        device = self.rack.devices[index]
        return self._run(
            RemoveDeviceCommand(self.layout, device, index, self._device_name(device))
        )

    # ------------------------------------------------------------------
    # Rack
    # ------------------------------------------------------------------

    def clear_rack(self) -> MutationResult:
        """Remove every device from the rack as one undoable step."""
        if not self.rack.devices:
            return MutationResult.ok()
        return self._run(ClearRackCommand(self.layout, tuple(self.rack.devices)))

    def delete_rack(self) -> MutationResult:
        """Delete the rack, leaving an empty rack with the same settings.

        Returns:
            Result whose ``devices`` are the devices that were removed.
        """
        result = self._run(DeleteRackCommand(self.layout, self.rack))
        if result:
            logger.info(
                f"Deleted rack {self.rack.name} ({len(result.devices)} device(s))"
            )
        return result

    def resize_rack(self, new_height: int) -> MutationResult:
        check = self.layout.validate_resize(new_height)
        if not check or new_height == self.rack.height:
            return check
        return self._run(ResizeRackCommand(self.layout, self.rack.height, new_height))

    def update_rack(self, **settings: Any) -> MutationResult:
        """Change rack settings as one undoable step."""
        check = self.layout.validate_rack_settings(settings)
        if not check:
            return check
        current = self.rack.settings()
        before = {key: current[key] for key in settings}
        if before == settings:
            return check
        return self._run(UpdateRackCommand(self.layout, before, dict(settings)))

    def replace_rack(self, rack: Rack) -> MutationResult:
        check = self.layout.validate_rack(rack)
        if not check:
            return check
        return self._run(ReplaceRackCommand(self.layout, self.rack, rack))

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def add_device_type(self, device_type: DeviceType) -> MutationResult:
        check = self.layout.validate_add_device_type(device_type)
        if not check:
            return check
        return self._run(AddDeviceTypeCommand(self.layout, device_type))

    def update_device_type(self, slug: str, /, **changes: Any) -> MutationResult:
        check = self.layout.validate_update_device_type(slug, changes)
        if not check:
            return check
        current = self.layout.catalog.get(slug)
        assert current is not None
        before = {key: getattr(current, key) for key in changes}
        return self._run(
            UpdateDeviceTypeCommand(self.layout, slug, before, dict(changes))
        )

    def delete_device_type(self, slug: str) -> MutationResult:
        """Delete a device type and every placed instance of it."""
        device_type = self.layout.catalog.get(slug)
        if device_type is None or not self.layout.catalog.owns(slug):
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Device type {slug} is not editable in this layout",
            )
        placed = tuple(self.layout.placed_devices_of_type(slug))
        return self._run(DeleteDeviceTypeCommand(self.layout, device_type, placed))

    # ------------------------------------------------------------------
    # History and session
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def load_layout(self, layout: RackLayout) -> None:
        """Replace the edited layout and start a fresh history."""
        self.layout = layout
        self.history.clear()
        logger.info(
            f"Loaded layout {layout.rack.name} "
            f"({layout.rack.height}U, {len(layout.rack.devices)} device(s))"
        )

    def snapshot(self) -> dict[str, Any]:
        """Plain-data snapshot of the current layout."""
        return self.layout.to_dict()
