"""Placement validation for rack devices.

This module provides the single gatekeeper every mutation of a rack's
device list goes through, along with the read-only queries derived from
it: collision diagnostics, valid slot enumeration, drop feedback and the
blocked/occupied slot sets used when drawing a rack.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..entities import PlacedDevice, Rack
from ..value_objects import DeviceFace, DropFeedback, URange
from .collision import device_range, faces_collide, range_of, ranges_overlap

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource

logger = logging.getLogger(__name__)

__all__ = [
    "PlacementValidator",
    "blocking_device_name",
]


def blocking_device_name(device: PlacedDevice, catalog: CatalogSource) -> str:
    """Name used when reporting a device that blocks a placement.

    Resolves the custom placement name, then the model, then the
    manufacturer and finally the slug.
    """
    if device.name:
        return device.name
    device_type = catalog.get(device.device_type)
    if device_type is None:
        return device.device_type
    return device_type.model or device_type.manufacturer or device_type.slug


class PlacementValidator:
    """Answers whether a device may occupy a slot range on a face.

    The validator is stateless and performs no I/O; every query re-derives
    its answer from the rack and catalog passed in. Catalog misses are
    skipped rather than treated as errors because a layout can reference
    device types its catalog no longer carries.
    """

    def _blocking_devices(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        target_slot: float,
        exclude_id: str | None,
        target_face: DeviceFace,
        is_full_depth: bool,
    ) -> Iterator[PlacedDevice]:
        candidate = range_of(target_slot, height)
        for placed in rack.devices:
            if exclude_id is not None and placed.id == exclude_id:
                continue
            device_type = catalog.get(placed.device_type)
            if device_type is None:
                logger.debug(
                    f"Skipping {placed.id}: device type '{placed.device_type}' not in catalog"
                )
                continue
            if ranges_overlap(
                candidate, device_range(placed, device_type)
            ) and faces_collide(
                target_face, placed.face, is_full_depth, device_type.full_depth
            ):
                yield placed

    def can_place(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        target_slot: float,
        exclude_id: str | None = None,
        target_face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
    ) -> bool:
        """Check if a device can be placed at a slot.

        Args:
            rack: The rack to check against.
            catalog: Device type lookup for the devices already placed.
            height: Height of the device to place, in slots.
            target_slot: Bottom slot of the proposed placement.
            exclude_id: Instance id to ignore, used when validating a move of
                a device against everything except itself.
            target_face: Face the device would be mounted on.
            is_full_depth: Whether the device spans the full rack depth.

        Returns:
            True if the placement fits inside the rack and collides with
            nothing.
        """
        if target_slot < 1:
            return False
        if target_slot + height - 1 > rack.height:
            return False
        blocker = next(
            self._blocking_devices(
                rack,
                catalog,
                height,
                target_slot,
                exclude_id,
                target_face,
                is_full_depth,
            ),
            None,
        )
        return blocker is None

    def find_collisions(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        target_slot: float,
        exclude_id: str | None = None,
        target_face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
    ) -> list[PlacedDevice]:
        """Devices that would block a placement.

        Same scan as ``can_place`` but returns the blockers instead of a
        boolean. Rack bounds are not checked.
        """
        return list(
            self._blocking_devices(
                rack,
                catalog,
                height,
                target_slot,
                exclude_id,
                target_face,
                is_full_depth,
            )
        )

    def find_valid_slots(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
    ) -> list[int]:
        """All bottom slots where a device could be placed, ascending."""
        max_slot = math.floor(rack.height - height + 1)
        return [
            slot
            for slot in range(1, max_slot + 1)
            if self.can_place(
                rack, catalog, height, slot, None, face, is_full_depth
            )
        ]

    def drop_feedback(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        target_slot: float,
        exclude_id: str | None = None,
        target_face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
    ) -> DropFeedback:
        """Feedback state for a device hovering over ``target_slot``.

        Returns:
            INVALID if the device would not fit inside the rack, BLOCKED if
            it fits but collides, VALID otherwise.
        """
        if target_slot < 1 or target_slot + height - 1 > rack.height:
            return DropFeedback.INVALID
        if self.can_place(
            rack,
            catalog,
            height,
            target_slot,
            exclude_id,
            target_face,
            is_full_depth,
        ):
            return DropFeedback.VALID
        return DropFeedback.BLOCKED

    def find_blocked_slots(
        self,
        rack: Rack,
        view_face: DeviceFace,
        catalog: CatalogSource,
    ) -> list[URange]:
        """Slot ranges occupied from behind when viewing one face.

        Only half-depth devices mounted on the opposite face are reported.
        Full-depth and both-face devices are visible from either side, so
        they are drawn directly instead of hatched. Ranges are not merged.
        """
        blocked: list[URange] = []
        for placed in rack.devices:
            if placed.face == DeviceFace.BOTH or placed.face == view_face:
                continue
            device_type = catalog.get(placed.device_type)
            if device_type is None or device_type.full_depth:
                continue
            blocked.append(device_range(placed, device_type))
        return blocked

    def occupied_slots(
        self,
        rack: Rack,
        catalog: CatalogSource,
        face: DeviceFace | None = None,
    ) -> set[int]:
        """Whole slots covered by a device.

        Args:
            rack: The rack to inspect.
            catalog: Device type lookup.
            face: If given, only devices that would collide with a
                full-depth device on this face are counted.

        Returns:
            Set of occupied slot numbers. A fractional device marks every
            slot it touches.
        """
        occupied: set[int] = set()
        for placed in rack.devices:
            device_type = catalog.get(placed.device_type)
            if device_type is None:
                continue
            if face is not None and not faces_collide(
                face, placed.face, True, device_type.full_depth
            ):
                continue
            slot_range = device_range(placed, device_type)
            bottom = math.floor(slot_range.bottom)
            top = max(bottom, math.ceil(slot_range.top))
            occupied.update(range(bottom, top + 1))
        return occupied

    def find_invalid_devices(
        self, rack: Rack, catalog: CatalogSource
    ) -> list[PlacedDevice]:
        """Devices that are out of bounds or collide with another device.

        Both devices of a colliding pair are reported. Devices whose type is
        unknown are skipped.
        """
        invalid: list[PlacedDevice] = []
        for placed in rack.devices:
            device_type = catalog.get(placed.device_type)
            if device_type is None:
                continue
            if not self.can_place(
                rack,
                catalog,
                device_type.u_height,
                placed.position,
                placed.id,
                placed.face,
                device_type.full_depth,
            ):
                invalid.append(placed)
        return invalid

    def collision_message(
        self, blockers: list[PlacedDevice], catalog: CatalogSource
    ) -> str:
        """User-facing diagnostic naming the blocking devices.

        Examples:
            "Position blocked by PowerEdge R740, Catalyst 9300"
        """
        names = [blocking_device_name(device, catalog) for device in blockers]
        return f"Position blocked by {', '.join(names)}"
