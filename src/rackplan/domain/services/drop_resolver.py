"""Drop position resolution for interactive placement.

Maps a continuous pointer coordinate over a rendered rack to the closest
slot where the dragged device may legally land.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..entities import Rack
from ..value_objects import DeviceFace
from .placement import PlacementValidator

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource

__all__ = ["DropPositionResolver", "y_to_slot"]


def y_to_slot(y: float, rack_height: int, slot_pixel_height: float) -> int:
    """Convert a vertical pixel coordinate to a slot estimate.

    The rendered rack has y=0 at its top while slot 1 is at the bottom.

    Raises:
        ValueError: If ``slot_pixel_height`` is not positive.
    """
    if slot_pixel_height <= 0:
        raise ValueError("slot_pixel_height must be positive")
    return rack_height - math.floor(y / slot_pixel_height)


class DropPositionResolver:
    """Snaps pointer positions to valid slots.

    The resolver holds no state between calls and does not cache: the set
    of valid slots is recomputed from the rack every time.

    Attributes:
        validator: Placement validator used to enumerate valid slots.
    """

    def __init__(self, validator: PlacementValidator | None = None) -> None:
        self.validator = validator or PlacementValidator()

    def snap_to_nearest_valid_slot(
        self,
        rack: Rack,
        catalog: CatalogSource,
        height: float,
        y: float,
        slot_pixel_height: float,
        face: DeviceFace = DeviceFace.FRONT,
        is_full_depth: bool = True,
    ) -> int | None:
        """Find the valid slot closest to a pointer position.

        Args:
            rack: Rack being dropped onto.
            catalog: Device type lookup for the placed devices.
            height: Height of the dragged device.
            y: Pointer y coordinate in rack pixels, 0 at the top.
            slot_pixel_height: Rendered height of one slot in pixels.
            face: Face the device would be mounted on.
            is_full_depth: Whether the dragged device is full depth.

        Returns:
            The nearest valid bottom slot, or None if the device fits
            nowhere. On equal distance the lower slot wins.
        """
        target = y_to_slot(y, rack.height, slot_pixel_height)
        valid_slots = self.validator.find_valid_slots(
            rack, catalog, height, face, is_full_depth
        )
        if not valid_slots:
            return None

        closest = valid_slots[0]
        closest_distance = abs(target - closest)
        for slot in valid_slots:
            distance = abs(target - slot)
            if distance < closest_distance:
                closest = slot
                closest_distance = distance
        return closest
