"""Domain services for rack placement.

This package contains the stateless rules of the placement engine:
slot geometry and face collision, placement validation, drop snapping,
stepwise movement and rack resize checks.
"""

from .collision import device_range, faces_collide, range_of, ranges_overlap
from .drop_resolver import DropPositionResolver, y_to_slot
from .movement import MOVE_DOWN, MOVE_UP, DeviceMovementService
from .placement import PlacementValidator, blocking_device_name
from .rack_resize import (
    can_resize_rack_to,
    device_range_text,
    format_conflict_message,
)

__all__ = [
    "DeviceMovementService",
    "DropPositionResolver",
    "MOVE_DOWN",
    "MOVE_UP",
    "PlacementValidator",
    "blocking_device_name",
    "can_resize_rack_to",
    "device_range",
    "device_range_text",
    "faces_collide",
    "format_conflict_message",
    "range_of",
    "ranges_overlap",
    "y_to_slot",
]
