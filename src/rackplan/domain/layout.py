"""Rack layout model and its validated mutation surface.

``RackLayout`` owns one rack and the device catalog its placed devices
reference. Every operation that adds a device to the rack or moves one
passes through ``PlacementValidator.can_place``, so the rack invariant
(all devices inside the rack, no two devices colliding) holds in every
reachable state.

User-level failures are returned as ``MutationResult`` values rather than
raised, because they routinely come from stale interface state.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any

from .entities import DeviceCatalog, DeviceType, PlacedDevice, Rack
from .slug import is_valid_slug
from .services.placement import PlacementValidator
from .services.rack_resize import can_resize_rack_to, format_conflict_message
from .value_objects import (
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    DeviceFace,
    FailureReason,
    FormFactor,
    MutationResult,
    RackWidth,
)

logger = logging.getLogger(__name__)

__all__ = ["RackLayout", "RACK_SETTING_KEYS"]

RACK_SETTING_KEYS = frozenset(
    {"name", "height", "width", "form_factor", "desc_units", "starting_unit"}
)

# Fields whose change can move a device's footprint
_FOOTPRINT_FIELDS = frozenset({"u_height", "is_full_depth"})


class RackLayout:
    """The authoritative in-memory model of a single-rack layout.

    Attributes:
        rack: The rack and its placed devices.
        catalog: Device types referenced by the placed devices.
        validator: Placement gatekeeper.
    """

    def __init__(
        self,
        rack: Rack | None = None,
        catalog: DeviceCatalog | None = None,
        validator: PlacementValidator | None = None,
    ) -> None:
        self.rack = rack if rack is not None else Rack()
        self.catalog = catalog if catalog is not None else DeviceCatalog()
        self.validator = validator or PlacementValidator()

    # ------------------------------------------------------------------
    # Placement checks
    # ------------------------------------------------------------------

    def check_placement(
        self,
        height: float,
        position: float,
        face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
        exclude_id: str | None = None,
    ) -> MutationResult:
        """Validate a footprint against the current rack.

        Returns:
            A successful result, or a failure explaining whether the slot
            is below the rack, above it, or blocked by other devices.
        """
        if self.validator.can_place(
            self.rack,
            self.catalog,
            height,
            position,
            exclude_id,
            face,
            is_full_depth,
        ):
            return MutationResult.ok()

        if position < 1:
            return MutationResult.fail(
                FailureReason.INVALID_POSITION,
                f"Position must be at least U1, got U{position:g}",
            )
        top = position + height - 1
        if top > self.rack.height:
            return MutationResult.fail(
                FailureReason.OUT_OF_BOUNDS,
                f"Device would extend to U{top:g}, beyond the {self.rack.height}U rack",
            )
        blockers = self.validator.find_collisions(
            self.rack,
            self.catalog,
            height,
            position,
            exclude_id,
            face,
            is_full_depth,
        )
        return MutationResult.fail(
            FailureReason.COLLISION,
            self.validator.collision_message(blockers, self.catalog),
            conflicts=blockers,
        )

    def validate_insert(self, device: PlacedDevice) -> MutationResult:
        """Check whether an existing device instance could be added."""
        device_type = self.catalog.get(device.device_type)
        if device_type is None:
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Unknown device type: {device.device_type}",
            )
        if self.rack.find_device(device.id) is not None:
            return MutationResult.fail(
                FailureReason.DUPLICATE,
                f"Device {device.id} is already in the rack",
            )
        return self.check_placement(
            device_type.u_height, device.position, device.face, device_type.full_depth
        )

    def validate_place(
        self,
        device_type: str,
        position: float,
        face: DeviceFace = DeviceFace.FRONT,
    ) -> MutationResult:
        """Check whether a new device of ``device_type`` could be placed."""
        found = self.catalog.get(device_type)
        if found is None:
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Unknown device type: {device_type}",
            )
        result = self.check_placement(
            found.u_height, position, DeviceFace(face), found.full_depth
        )
        if not result:
            return result
        return MutationResult.ok(device_type=found)

    def _resolve(
        self, instance_id: str
    ) -> tuple[PlacedDevice, DeviceType] | MutationResult:
        device = self.rack.find_device(instance_id)
        if device is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        device_type = self.catalog.get(device.device_type)
        if device_type is None:
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Unknown device type: {device.device_type}",
                device=device,
            )
        return device, device_type

    def validate_move(self, instance_id: str, new_position: float) -> MutationResult:
        """Check whether a placed device could move to ``new_position``."""
        resolved = self._resolve(instance_id)
        if isinstance(resolved, MutationResult):
            return resolved
        device, device_type = resolved
        result = self.check_placement(
            device_type.u_height,
            new_position,
            device.face,
            device_type.full_depth,
            exclude_id=device.id,
        )
        if not result:
            return result
        return MutationResult.ok(device=device)

    def validate_face(self, instance_id: str, face: DeviceFace) -> MutationResult:
        """Check whether a placed device could be remounted on ``face``."""
        resolved = self._resolve(instance_id)
        if isinstance(resolved, MutationResult):
            return resolved
        device, device_type = resolved
        result = self.check_placement(
            device_type.u_height,
            device.position,
            DeviceFace(face),
            device_type.full_depth,
            exclude_id=device.id,
        )
        if not result:
            return result
        return MutationResult.ok(device=device)

    # ------------------------------------------------------------------
    # Device mutations
    # ------------------------------------------------------------------

    def insert(self, device: PlacedDevice, index: int | None = None) -> MutationResult:
        """Add an existing device instance, keeping its id.

        Args:
            device: Device to add.
            index: Position in the device list; appended when omitted.
        """
        result = self.validate_insert(device)
        if not result:
            return result
        if index is None or index > len(self.rack.devices):
            self.rack.devices.append(device)
        else:
            self.rack.devices.insert(index, device)
        logger.debug(
            f"Placed {device.device_type} ({device.id}) at U{device.position:g} "
            f"on {device.face.value}"
        )
        return MutationResult.ok(device=device)

    def place(
        self,
        device_type: str,
        position: float,
        face: DeviceFace = DeviceFace.FRONT,
        name: str | None = None,
        instance_id: str | None = None,
    ) -> MutationResult:
        """Place a new device from the catalog.

        Args:
            device_type: Slug of the catalog entry.
            position: Bottom slot.
            face: Mounting face.
            name: Optional custom display name.
            instance_id: Id to use for the new instance; generated when
                omitted.

        Returns:
            Result carrying the new PlacedDevice on success.
        """
        device = PlacedDevice(
            device_type=device_type,
            position=position,
            face=DeviceFace(face),
            name=name,
        )
        if instance_id is not None:
            device.id = instance_id
        return self.insert(device)

    def move(self, instance_id: str, new_position: float) -> MutationResult:
        result = self.validate_move(instance_id, new_position)
        if not result:
            return result
        device = result.device
        assert device is not None
        old_position = device.position
        device.position = new_position
        logger.debug(f"Moved {device.id} from U{old_position:g} to U{new_position:g}")
        return MutationResult.ok(device=device)

    def set_face(self, instance_id: str, face: DeviceFace) -> MutationResult:
        result = self.validate_face(instance_id, face)
        if not result:
            return result
        device = result.device
        assert device is not None
        device.face = DeviceFace(face)
        logger.debug(f"Remounted {device.id} on {device.face.value}")
        return MutationResult.ok(device=device)

    def rename(self, instance_id: str, name: str | None) -> MutationResult:
        """Set or clear a device's custom display name.

        Blank names clear the custom name.
        """
        device = self.rack.find_device(instance_id)
        if device is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        device.name = name.strip() if name and name.strip() else None
        return MutationResult.ok(device=device)

    def remove(self, instance_id: str) -> MutationResult:
        index = self.rack.index_of(instance_id)
        if index is None:
            return MutationResult.fail(
                FailureReason.NOT_FOUND, f"No device with id {instance_id}"
            )
        device = self.rack.devices.pop(index)
        logger.debug(f"Removed {device.device_type} ({device.id})")
        return MutationResult.ok(device=device)

    def clear_devices(self) -> list[PlacedDevice]:
        """Remove every device but keep the rack. Returns the removed devices."""
        removed = list(self.rack.devices)
        self.rack.devices.clear()
        logger.debug(f"Cleared {len(removed)} device(s) from {self.rack.name}")
        return removed

    def restore_devices(self, devices: list[PlacedDevice]) -> MutationResult:
        """Re-add devices, validating each one.

        Either all devices are restored or none are.
        """
        added: list[PlacedDevice] = []
        for device in devices:
            result = self.insert(device)
            if not result:
                for placed in added:
                    self.remove(placed.id)
                return result
            added.append(device)
        return MutationResult.ok(devices=added)

    # ------------------------------------------------------------------
    # Rack mutations
    # ------------------------------------------------------------------

    def validate_resize(self, new_height: int) -> MutationResult:
        if not MIN_RACK_HEIGHT <= new_height <= MAX_RACK_HEIGHT:
            return MutationResult.fail(
                FailureReason.INVALID_RACK,
                f"Rack height must be between {MIN_RACK_HEIGHT} and {MAX_RACK_HEIGHT}U",
            )
        check = can_resize_rack_to(self.rack, new_height, self.catalog)
        if not check.allowed:
            return MutationResult.fail(
                FailureReason.RESIZE_CONFLICT,
                f"Cannot resize to {new_height}U: "
                f"{format_conflict_message(check.conflicts, self.catalog)}",
                conflicts=check.conflicts,
            )
        return MutationResult.ok()

    def resize_rack(self, new_height: int) -> MutationResult:
        """Change the rack height.

        Shrinking is allowed down to the tallest occupied slot; no device is
        ever evicted or relocated.
        """
        result = self.validate_resize(new_height)
        if not result:
            return result
        logger.debug(f"Resized {self.rack.name} from {self.rack.height}U to {new_height}U")
        self.rack.height = new_height
        return MutationResult.ok()

    def validate_rack_settings(self, settings: dict[str, Any]) -> MutationResult:
        unknown = set(settings) - RACK_SETTING_KEYS
        if unknown:
            return MutationResult.fail(
                FailureReason.INVALID_RACK,
                f"Unknown rack settings: {', '.join(sorted(unknown))}",
            )
        if "name" in settings and not (settings["name"] or "").strip():
            return MutationResult.fail(
                FailureReason.INVALID_RACK, "Rack name must not be empty"
            )
        if "starting_unit" in settings and settings["starting_unit"] < 0:
            return MutationResult.fail(
                FailureReason.INVALID_RACK, "starting_unit cannot be negative"
            )
        try:
            if "width" in settings:
                RackWidth(settings["width"])
            if "form_factor" in settings:
                FormFactor(settings["form_factor"])
        except ValueError as e:
            return MutationResult.fail(FailureReason.INVALID_RACK, str(e))
        if "height" in settings:
            return self.validate_resize(settings["height"])
        return MutationResult.ok()

    def update_rack(self, **settings: Any) -> MutationResult:
        """Update rack settings such as name, width or numbering.

        Height changes go through the same validation as ``resize_rack``.
        """
        result = self.validate_rack_settings(settings)
        if not result:
            return result
        if "width" in settings:
            settings["width"] = RackWidth(settings["width"])
        if "form_factor" in settings:
            settings["form_factor"] = FormFactor(settings["form_factor"])
        for key, value in settings.items():
            setattr(self.rack, key, value)
        return MutationResult.ok()

    def validate_rack(self, rack: Rack) -> MutationResult:
        """Check that a whole rack satisfies the placement invariant."""
        seen: set[str] = set()
        for device in rack.devices:
            if device.id in seen:
                return MutationResult.fail(
                    FailureReason.INVALID_RACK,
                    f"Duplicate device id {device.id}",
                    device=device,
                )
            seen.add(device.id)
        invalid = self.validator.find_invalid_devices(rack, self.catalog)
        if invalid:
            return MutationResult.fail(
                FailureReason.INVALID_RACK,
                f"Rack has {len(invalid)} out-of-bounds or colliding device(s)",
                conflicts=invalid,
            )
        return MutationResult.ok()

    def replace_rack(self, rack: Rack) -> MutationResult:
        """Swap in a different rack, e.g. from a bulk edit."""
        result = self.validate_rack(rack)
        if not result:
            return result
        self.rack = rack
        logger.debug(f"Replaced rack with {rack.name} ({len(rack.devices)} device(s))")
        return MutationResult.ok()

    def delete_rack(self) -> list[PlacedDevice]:
        """Delete the rack.

        In single-rack mode the rack is never absent: it is replaced by an
        empty rack with the same settings. Returns the removed devices.
        """
        removed = list(self.rack.devices)
        self.rack = self.rack.empty_copy()
        return removed

    # ------------------------------------------------------------------
    # Catalog management
    # ------------------------------------------------------------------

    def validate_add_device_type(self, device_type: DeviceType) -> MutationResult:
        if not is_valid_slug(device_type.slug):
            return MutationResult.fail(
                FailureReason.INVALID_SLUG, f"Invalid slug: {device_type.slug!r}"
            )
        if self.catalog.owns(device_type.slug):
            return MutationResult.fail(
                FailureReason.DUPLICATE,
                f"Device type {device_type.slug} already exists",
            )
        # Devices already placed with this slug must fit the new footprint
        trial = self.catalog.copy()
        trial.add(device_type)
        invalid = self.validator.find_invalid_devices(self.rack, trial)
        if invalid:
            return MutationResult.fail(
                FailureReason.COLLISION,
                f"Adding {device_type.slug} would leave {len(invalid)} device(s) "
                "out of bounds or colliding",
                conflicts=invalid,
            )
        return MutationResult.ok(device_type=device_type)

    def add_device_type(self, device_type: DeviceType) -> MutationResult:
        result = self.validate_add_device_type(device_type)
        if not result:
            return result
        self.catalog.add(device_type)
        logger.debug(f"Added device type {device_type.slug}")
        return result

    def validate_update_device_type(
        self, slug: str, changes: dict[str, Any]
    ) -> MutationResult:
        """Check a catalog edit, including its effect on placed devices."""
        current = self.catalog.get(slug)
        if current is None or not self.catalog.owns(slug):
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Device type {slug} is not editable in this layout",
            )
        known = {f.name for f in fields(DeviceType)}
        unknown = set(changes) - known
        if unknown:
            return MutationResult.fail(
                FailureReason.INVALID_DEVICE_TYPE,
                f"Unknown device type fields: {', '.join(sorted(unknown))}",
            )
        if "slug" in changes and changes["slug"] != slug:
            return MutationResult.fail(
                FailureReason.INVALID_SLUG, "Device type slugs cannot be changed"
            )
        try:
            updated = replace(current, **changes)
        except ValueError as e:
            return MutationResult.fail(FailureReason.INVALID_DEVICE_TYPE, str(e))

        if _FOOTPRINT_FIELDS & set(changes):
            trial = self.catalog.copy()
            trial.add(updated)
            invalid = self.validator.find_invalid_devices(self.rack, trial)
            if invalid:
                return MutationResult.fail(
                    FailureReason.COLLISION,
                    f"Changing {slug} would leave {len(invalid)} device(s) "
                    "out of bounds or colliding",
                    conflicts=invalid,
                )
        return MutationResult.ok(device_type=updated)

    def update_device_type(self, slug: str, /, **changes: Any) -> MutationResult:
        result = self.validate_update_device_type(slug, changes)
        if not result:
            return result
        assert result.device_type is not None
        self.catalog.add(result.device_type)
        return result

    def remove_device_type(self, slug: str) -> MutationResult:
        """Remove a device type together with all of its placed instances."""
        if not self.catalog.owns(slug):
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Device type {slug} is not editable in this layout",
            )
        removed = [d for d in self.rack.devices if d.device_type == slug]
        self.rack.devices = [d for d in self.rack.devices if d.device_type != slug]
        device_type = self.catalog.remove(slug)
        logger.debug(f"Removed device type {slug} and {len(removed)} instance(s)")
        return MutationResult.ok(device_type=device_type, devices=removed)

    def forget_device_type(self, slug: str) -> MutationResult:
        """Drop an own device type from the catalog, leaving placed devices.

        Devices of that slug fall back to a fallback type of the same slug,
        or become unknown-type devices. Rejected if a fallback footprint
        would leave any of them out of bounds or colliding.
        """
        if not self.catalog.owns(slug):
            return MutationResult.fail(
                FailureReason.UNKNOWN_DEVICE_TYPE,
                f"Device type {slug} is not editable in this layout",
            )
        trial = self.catalog.copy()
        trial.remove(slug)
        invalid = self.validator.find_invalid_devices(self.rack, trial)
        if invalid:
            return MutationResult.fail(
                FailureReason.COLLISION,
                f"Dropping {slug} would leave {len(invalid)} device(s) "
                "out of bounds or colliding",
                conflicts=invalid,
            )
        device_type = self.catalog.remove(slug)
        logger.debug(f"Dropped device type {slug} from the catalog")
        return MutationResult.ok(device_type=device_type)

    def placed_devices_of_type(self, slug: str) -> list[PlacedDevice]:
        return [d for d in self.rack.devices if d.device_type == slug]

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Plain-data snapshot of the rack and the layout's own device types."""
        return {
            "rack": self.rack.to_dict(),
            "device_types": self.catalog.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RackLayout:
        """Rebuild a layout from ``to_dict`` output without re-validating."""
        return cls(
            rack=Rack.from_dict(data.get("rack", {})),
            catalog=DeviceCatalog(
                DeviceType.from_dict(dt) for dt in data.get("device_types", [])
            ),
        )
